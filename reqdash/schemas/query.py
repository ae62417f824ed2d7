from pydantic import BaseModel
from typing import Optional, List, Dict


class QueryFilters(BaseModel):
    type: List[str] = []
    status: List[str] = []
    complexity: List[str] = []
    priority: List[str] = []


class QueryDescriptor(BaseModel):
    project_id: Optional[int] = None
    search_text: str = ""
    filters: QueryFilters = QueryFilters()
    page: int = 1

    def to_params(self) -> Dict[str, object]:
        """Query string for GET /requirements; list filters become repeated keys."""
        params: Dict[str, object] = {
            "project": self.project_id,
            "search": self.search_text,
        }
        params.update(self.filters.model_dump())
        params["page"] = self.page
        params["stats"] = "true"
        return params


class SearchUpdate(BaseModel):
    text: str = ""


class ProjectSelection(BaseModel):
    project_id: Optional[int] = None


class PageSelection(BaseModel):
    page: int

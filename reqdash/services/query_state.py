from typing import Dict, List, Optional

from reqdash.schemas.query import QueryDescriptor, QueryFilters
from reqdash.schemas.requirement import FILTER_OPTIONS


def is_valid_project_id(project_id) -> bool:
    # bool is an int subclass but never a project id
    return isinstance(project_id, int) and not isinstance(project_id, bool) and project_id > 0


class QueryState:
    """Search text, filter selections and page cursor for the requirement list.

    Any change to the search text, a filter or the project sends the cursor
    back to page 1. Changing the page touches nothing else.
    """

    def __init__(self, project_id: Optional[int] = None):
        self.project_id: Optional[int] = project_id if is_valid_project_id(project_id) else None
        self.search_text: str = ""
        self.filters: Dict[str, List[str]] = {category: [] for category in FILTER_OPTIONS}
        self.page: int = 1

    def set_project(self, project_id) -> None:
        self.project_id = project_id if is_valid_project_id(project_id) else None
        self.page = 1

    def set_search(self, text: str) -> None:
        self.search_text = text or ""
        self.page = 1

    def toggle_filter(self, category: str, value: str) -> None:
        if category not in FILTER_OPTIONS:
            raise ValueError(f"Invalid filter category: {category}")
        if value not in FILTER_OPTIONS[category]:
            raise ValueError(f"Invalid {category} value: {value}")
        selected = self.filters[category]
        if value in selected:
            self.filters[category] = [v for v in selected if v != value]
        else:
            self.filters[category] = selected + [value]
        self.page = 1

    def set_page(self, page: int) -> None:
        if not isinstance(page, int) or isinstance(page, bool) or page < 1:
            raise ValueError(f"Invalid page: {page}")
        self.page = page

    def descriptor(self) -> QueryDescriptor:
        return QueryDescriptor(
            project_id=self.project_id,
            search_text=self.search_text,
            filters=QueryFilters(**{k: list(v) for k, v in self.filters.items()}),
            page=self.page,
        )

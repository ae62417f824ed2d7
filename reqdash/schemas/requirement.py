# schemas/requirement.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime

TYPES = ["Functional", "Non-Functional", "UI", "Security", "Performance"]
STATUSES = ["Draft", "Review", "Approved", "Disapproved"]
COMPLEXITIES = ["Low", "Moderate", "High"]
PRIORITIES = ["Low", "Medium", "High"]

FILTER_OPTIONS: Dict[str, List[str]] = {
    "type": TYPES,
    "status": STATUSES,
    "complexity": COMPLEXITIES,
    "priority": PRIORITIES,
}


class RequirementRead(BaseModel):
    id: str
    text: str = Field(alias="requirement")
    status: str = "Draft"          # 'Draft', 'Review', 'Approved', 'Disapproved'
    priority: str = "Medium"       # 'Low', 'Medium', 'High'
    complexity: str = "Moderate"   # 'Low', 'Moderate', 'High'
    type: Optional[str] = None
    author: str = ""
    date: datetime
    estimated_time: float = 0

    @field_validator("id", mode="before")
    @classmethod
    def opaque_id(cls, value):
        # ids are opaque; some sources send them as numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("estimated_time", mode="before")
    @classmethod
    def default_hours(cls, value):
        return value or 0

    class Config:
        populate_by_name = True
        from_attributes = True


class RequirementPage(BaseModel):
    requirements: List[RequirementRead] = []
    page: Optional[int] = None
    pages: Optional[int] = None
    total: Optional[int] = None

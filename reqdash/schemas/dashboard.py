from pydantic import BaseModel
from typing import Optional, List

from reqdash.schemas.project import ProjectRead
from reqdash.schemas.requirement import RequirementRead
from reqdash.schemas.stats import StatsSummary, CostSummary, PaginationState
from reqdash.schemas.query import QueryDescriptor
from reqdash.schemas.jira import TrackerSettings


class DashboardState(BaseModel):
    projects: List[ProjectRead] = []
    requirements: List[RequirementRead] = []
    overall_stats: StatsSummary = StatsSummary()
    filtered_stats: StatsSummary = StatsSummary()
    pagination: PaginationState = PaginationState()
    loading: bool = False
    error: str = ""


class ExportDocument(BaseModel):
    filename: str
    content: str


class DashboardSnapshot(BaseModel):
    project: Optional[ProjectRead] = None
    hourly_rate: float = 0
    query: QueryDescriptor
    requirements: List[RequirementRead]
    overall_stats: StatsSummary
    filtered_stats: StatsSummary
    costs: CostSummary
    pagination: PaginationState
    has_previous: bool
    has_next: bool
    loading: bool
    error: str
    jira: TrackerSettings

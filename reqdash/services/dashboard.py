from typing import Optional

from reqdash.core.config import Settings
from reqdash.schemas.dashboard import DashboardSnapshot, DashboardState, ExportDocument
from reqdash.schemas.jira import JiraConnectRequest, PushOutcome, PushState, TrackerSettings
from reqdash.schemas.project import ProjectRead
from reqdash.schemas.stats import CostSummary
from reqdash.services.cost import aggregate_cost, normalize
from reqdash.services.export import build_export
from reqdash.services.fetch_orchestrator import FetchOrchestrator
from reqdash.services.jira_push import NOT_APPROVED, JiraPushPipeline
from reqdash.services.query_state import QueryState
from reqdash.utils.api_client import RequirementsApiClient


class DashboardSession:
    """Everything one dashboard user works with, from project list to Jira link.

    Query mutations go through here so that every change reaches the
    orchestrator; the tracker settings live as long as the session does.
    """

    def __init__(
        self,
        client: Optional[RequirementsApiClient] = None,
        settings: Optional[Settings] = None,
        debounce_seconds: Optional[float] = None,
    ):
        if settings is None:
            settings = Settings()
        self.client = client if client is not None else RequirementsApiClient(settings=settings)
        self.state = DashboardState()
        self.query = QueryState()
        self.tracker = TrackerSettings()
        self.orchestrator = FetchOrchestrator(
            self.client, self.state, debounce_seconds=debounce_seconds, settings=settings
        )
        self.jira = JiraPushPipeline(self.client, self.tracker)

    @property
    def project(self) -> Optional[ProjectRead]:
        return next((p for p in self.state.projects if p.id == self.query.project_id), None)

    @property
    def hourly_rate(self) -> float:
        project = self.project
        return normalize(project.hourly_rate) if project else 0.0

    @property
    def costs(self) -> CostSummary:
        return aggregate_cost(self.state.requirements, self.hourly_rate)

    async def load_projects(self):
        return await self.orchestrator.load_projects()

    def select_project(self, project_id) -> None:
        self.query.set_project(project_id)
        self.orchestrator.on_project_change(self.query.project_id)
        self.orchestrator.on_query_change(self.query.descriptor())

    def set_search(self, text: str) -> None:
        self.query.set_search(text)
        self.orchestrator.on_query_change(self.query.descriptor())

    def toggle_filter(self, category: str, value: str) -> None:
        self.query.toggle_filter(category, value)
        self.orchestrator.on_query_change(self.query.descriptor())

    def go_to_page(self, page: int) -> None:
        self.query.set_page(page)
        self.orchestrator.on_query_change(self.query.descriptor())

    async def settle(self) -> None:
        await self.orchestrator.settle()

    def export(self) -> Optional[ExportDocument]:
        return build_export(self.project, self.state.requirements, self.hourly_rate)

    def connect_jira(self, settings: JiraConnectRequest) -> TrackerSettings:
        return self.jira.connect(settings)

    def push_to_jira(self, requirement_id: str) -> PushOutcome:
        requirement = next((r for r in self.state.requirements if r.id == requirement_id), None)
        approved = requirement is not None and requirement.status == "Approved"
        if self.tracker.is_connected and not approved:
            self.jira.last_outcome = PushOutcome(state=PushState.failed, error=NOT_APPROVED)
            return self.jira.last_outcome
        return self.jira.push(requirement_id)

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            project=self.project,
            hourly_rate=self.hourly_rate,
            query=self.query.descriptor(),
            requirements=self.state.requirements,
            overall_stats=self.state.overall_stats,
            filtered_stats=self.state.filtered_stats,
            costs=self.costs,
            pagination=self.state.pagination,
            has_previous=self.state.pagination.has_previous,
            has_next=self.state.pagination.has_next,
            loading=self.state.loading,
            error=self.state.error,
            jira=self.tracker,
        )

import asyncio
import logging
from typing import List, Optional, Set

from reqdash.core.config import Settings
from reqdash.schemas.dashboard import DashboardState
from reqdash.schemas.project import ProjectRead
from reqdash.schemas.query import QueryDescriptor
from reqdash.schemas.stats import PaginationState
from reqdash.services.query_state import is_valid_project_id
from reqdash.services.stats import summarize_statuses
from reqdash.utils.api_client import ApiError, RequirementsApiClient


logger = logging.getLogger(__name__)

LIST_ERROR = "Failed to load requirements"
STATS_ERROR = "Failed to load statistics. Please try again."
PROJECTS_ERROR = "Failed to load projects. Please try again later."


class FetchOrchestrator:
    """Keeps DashboardState in step with the remote requirement list.

    Query changes are debounced, and each list/stats axis carries its own
    sequence number: a response is applied only if no newer request has been
    scheduled on that axis since it was issued. Late responses are dropped,
    the HTTP call itself is never aborted.
    """

    def __init__(
        self,
        client: RequirementsApiClient,
        state: Optional[DashboardState] = None,
        debounce_seconds: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        if debounce_seconds is None:
            if settings is None:
                settings = Settings()
            debounce_seconds = settings.debounce_seconds
        self.client = client
        self.state = state if state is not None else DashboardState()
        self.debounce_seconds = debounce_seconds
        self._list_seq = 0
        self._stats_seq = 0
        self._pending: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._in_flight: Set[int] = set()

    def _track(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _sync_loading(self) -> None:
        self.state.loading = self._list_seq in self._in_flight

    def on_query_change(self, descriptor: QueryDescriptor) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
        self._list_seq += 1
        self._sync_loading()
        if not is_valid_project_id(descriptor.project_id):
            return
        self._pending = asyncio.get_running_loop().create_task(
            self._debounced(self._list_seq, descriptor)
        )

    async def _debounced(self, seq: int, descriptor: QueryDescriptor) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._track(self._fetch_requirements(seq, descriptor))

    async def _fetch_requirements(self, seq: int, descriptor: QueryDescriptor) -> None:
        self._in_flight.add(seq)
        self.state.loading = True
        self.state.error = ""
        try:
            page = await asyncio.to_thread(self.client.list_requirements, descriptor)
        except (ApiError, ValueError) as exc:
            if seq != self._list_seq:
                logger.debug("Dropping stale requirements failure #%s", seq)
                return
            logger.error("Error fetching requirements: %s", exc)
            self.state.requirements = []
            self.state.error = (str(exc) if isinstance(exc, ApiError) else "") or LIST_ERROR
        else:
            if seq != self._list_seq:
                logger.debug("Dropping stale requirements response #%s", seq)
                return
            self.state.requirements = page.requirements
            # counts cover the returned page only, not the whole filtered total
            self.state.filtered_stats = summarize_statuses(page.requirements)
            self.state.pagination = PaginationState(
                page=page.page or 1,
                pages=page.pages or 1,
                total=page.total or 0,
            )
        finally:
            self._in_flight.discard(seq)
            self._sync_loading()

    def on_project_change(self, project_id) -> None:
        self._stats_seq += 1
        if not is_valid_project_id(project_id):
            return
        self._track(self._fetch_overall_stats(self._stats_seq, project_id))

    async def _fetch_overall_stats(self, seq: int, project_id: int) -> None:
        try:
            stats = await asyncio.to_thread(self.client.get_overall_stats, project_id)
        except (ApiError, ValueError) as exc:
            if seq == self._stats_seq:
                logger.error("Error fetching overall stats: %s", exc)
                self.state.error = STATS_ERROR
            return
        if seq != self._stats_seq:
            logger.debug("Dropping stale stats response #%s", seq)
            return
        self.state.overall_stats = stats

    async def load_projects(self) -> Optional[List[ProjectRead]]:
        """Fetch the project list; ``None`` means the fetch failed."""
        try:
            projects = await asyncio.to_thread(self.client.get_projects)
        except (ApiError, ValueError) as exc:
            logger.error("Error fetching projects: %s", exc)
            self.state.error = PROJECTS_ERROR
            return None
        self.state.projects = projects
        return projects

    async def settle(self) -> None:
        """Wait for the pending debounce and every in-flight fetch to finish."""
        while True:
            waiting = [t for t in self._tasks if not t.done()]
            if self._pending is not None and not self._pending.done():
                waiting.append(self._pending)
            if not waiting:
                return
            await asyncio.gather(*waiting, return_exceptions=True)

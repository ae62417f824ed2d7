import logging
from typing import List, Optional

import requests
from reqdash.core.config import Settings
from reqdash.schemas.jira import JiraConnectRequest
from reqdash.schemas.project import ProjectRead
from reqdash.schemas.query import QueryDescriptor
from reqdash.schemas.requirement import RequirementPage
from reqdash.schemas.stats import StatsSummary


logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """A failed call to the requirements API, carrying the message to show the user."""


def _error_message(exc: requests.RequestException) -> str:
    """Prefer the ``error`` field of the server body over the transport message."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    return str(exc)


class RequirementsApiClient:
    """Thin wrapper over the remote requirements API."""

    def __init__(self, base_url: Optional[str] = None, settings: Optional[Settings] = None):
        if settings is None:
            settings = Settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.push_timeout = settings.jira_push_timeout

    def _request(self, method: str, path: str, **kwargs):
        url = self.base_url + path
        try:
            response = requests.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            message = _error_message(exc)
            logger.error("%s %s failed: %s", method, path, message)
            raise ApiError(message) from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned a non JSON body", method, path)
            raise ApiError("Server returned an invalid response") from exc

    def get_projects(self) -> List[ProjectRead]:
        data = self._request("GET", "/projects")
        return [ProjectRead.model_validate(p) for p in data or []]

    def get_overall_stats(self, project_id: int) -> StatsSummary:
        data = self._request("GET", "/requirements/stats", params={"project": project_id})
        return StatsSummary.model_validate(data or {})

    def list_requirements(self, descriptor: QueryDescriptor) -> RequirementPage:
        # requests encodes list values as repeated keys: type=UI&type=Security
        data = self._request("GET", "/requirements", params=descriptor.to_params())
        return RequirementPage.model_validate(data or {})

    def connect_jira(self, settings: JiraConnectRequest) -> dict:
        return self._request("POST", "/jira/connect", json=settings.model_dump(by_alias=True))

    def push_to_jira(self, requirement_id: str) -> dict:
        return self._request(
            "POST",
            "/jira/push",
            json={"requirementId": requirement_id},
            timeout=self.push_timeout,
        )

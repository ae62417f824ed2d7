import logging

from reqdash.schemas.jira import JiraConnectRequest, PushOutcome, PushState, TrackerSettings
from reqdash.utils.api_client import ApiError, RequirementsApiClient


logger = logging.getLogger(__name__)

# Jira does not publish a stable error vocabulary, these are substring heuristics.
PUSH_ERROR_HINTS = [
    ("Unauthorized", "Please reconnect Jira integration"),
    ("projectKey", "Verify project key exists in Jira"),
    ("issuetype", "Check project has valid issue types"),
]

NOT_CONNECTED = "Jira is not connected"
NOT_APPROVED = "Only approved requirements can be pushed to Jira"


class JiraSettingsError(ValueError):
    """Connection settings rejected before reaching the network."""


def validate_connect_request(settings: JiraConnectRequest) -> None:
    if not (settings.site_url and settings.email and settings.api_token and settings.project_key):
        raise JiraSettingsError("All fields are required.")
    if not settings.site_url.startswith(("http://", "https://")):
        raise JiraSettingsError("Invalid site URL. Must start with http:// or https://")


def classify_push_error(message: str) -> str:
    """Append remediation hints for every hint keyword found in the message."""
    composed = message
    for keyword, hint in PUSH_ERROR_HINTS:
        if keyword in message:
            composed += f"\n\n{hint}"
    return composed


def format_push_alert(outcome: PushOutcome) -> str:
    if outcome.state == PushState.succeeded:
        return f"Created Jira issue: {outcome.issue_key}\n{outcome.issue_url}"
    return f"Jira push failed!\n\n{outcome.error}"


class JiraPushPipeline:
    """Connect to Jira and push single requirements, one attempt per call.

    ``tracker`` is the session's TrackerSettings; only a successful connect
    mutates it. Callers only push requirements whose status is Approved.
    """

    def __init__(self, client: RequirementsApiClient, tracker: TrackerSettings):
        self.client = client
        self.tracker = tracker
        self.last_outcome = PushOutcome()

    def connect(self, settings: JiraConnectRequest) -> TrackerSettings:
        validate_connect_request(settings)
        result = self.client.connect_jira(settings) or {}
        if not result.get("success"):
            raise ApiError(result.get("error") or "Jira connection failed. Please check your settings.")

        self.tracker.is_connected = True
        self.tracker.project_key = settings.project_key
        logger.info("Connected to Jira project %s", settings.project_key)
        return self.tracker

    def push(self, requirement_id: str) -> PushOutcome:
        if not self.tracker.is_connected:
            self.last_outcome = PushOutcome(state=PushState.failed, error=NOT_CONNECTED)
            return self.last_outcome

        self.last_outcome = PushOutcome(state=PushState.sending)
        try:
            result = self.client.push_to_jira(requirement_id) or {}
            if not result.get("success"):
                raise ApiError(result.get("error") or "Unknown error")
        except ApiError as exc:
            logger.error("Jira push failed for %s: %s", requirement_id, exc)
            self.last_outcome = PushOutcome(
                state=PushState.failed,
                error=classify_push_error(str(exc) or "Unknown error"),
            )
            return self.last_outcome

        issue = result.get("issue") or {}
        self.last_outcome = PushOutcome(
            state=PushState.succeeded,
            issue_key=issue.get("key"),
            issue_url=issue.get("url"),
        )
        return self.last_outcome

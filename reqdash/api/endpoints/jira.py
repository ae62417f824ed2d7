from fastapi import APIRouter, Depends, HTTPException
from reqdash.schemas.jira import JiraConnectRequest, PushOutcome, PushRequest, TrackerSettings
from reqdash.services.dashboard import DashboardSession
from reqdash.services.jira_push import JiraSettingsError
from reqdash.session import get_dashboard
from reqdash.utils.api_client import ApiError

router = APIRouter()


@router.post("/connect", response_model=TrackerSettings)
def connect(
    settings_in: JiraConnectRequest,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    try:
        return dashboard.connect_jira(settings_in)
    except (JiraSettingsError, ApiError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/push", response_model=PushOutcome)
def push(
    push_in: PushRequest,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    return dashboard.push_to_jira(push_in.requirement_id)

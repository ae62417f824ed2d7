# schemas/jira.py

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class JiraConnectRequest(BaseModel):
    site_url: str = Field(default="", alias="siteUrl")
    email: str = ""
    api_token: str = Field(default="", alias="apiToken")
    project_key: str = Field(default="", alias="projectKey")

    class Config:
        populate_by_name = True


class TrackerSettings(BaseModel):
    is_connected: bool = Field(default=False, alias="isConnected")
    project_key: str = Field(default="", alias="projectKey")

    class Config:
        populate_by_name = True


class PushRequest(BaseModel):
    requirement_id: str = Field(alias="requirementId")

    class Config:
        populate_by_name = True


class PushState(str, Enum):
    idle = "idle"
    sending = "sending"
    succeeded = "succeeded"
    failed = "failed"


class PushOutcome(BaseModel):
    state: PushState = PushState.idle
    issue_key: Optional[str] = None
    issue_url: Optional[str] = None
    error: Optional[str] = None

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest
import requests

from reqdash.core.config import Settings
from reqdash.schemas.jira import JiraConnectRequest
from reqdash.schemas.query import QueryDescriptor, QueryFilters
from reqdash.utils.api_client import ApiError, RequirementsApiClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ""

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


def make_client(monkeypatch, response=None, error=None):
    calls = []

    def fake_request(self, method, url, **kwargs):
        calls.append((method, url, kwargs))
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(requests.Session, "request", fake_request)
    client = RequirementsApiClient(base_url="http://api.test/api/", settings=Settings(jira_push_timeout=30))
    return client, calls


def test_list_requirements_sends_repeated_filter_params(monkeypatch):
    body = {
        "requirements": [
            {"id": "r1", "requirement": "Login", "status": "Approved", "priority": "High",
             "complexity": "Low", "type": "Security", "author": "Jo",
             "date": "2024-01-05T00:00:00Z", "estimated_time": 3},
        ],
        "page": 1, "pages": 2, "total": 11,
    }
    client, calls = make_client(monkeypatch, FakeResponse(body=body))
    descriptor = QueryDescriptor(
        project_id=4, search_text="log", page=1,
        filters=QueryFilters(type=["UI", "Security"]),
    )
    page = client.list_requirements(descriptor)

    method, url, kwargs = calls[0]
    assert method == "GET"
    assert url == "http://api.test/api/requirements"
    assert kwargs["params"]["type"] == ["UI", "Security"]
    assert kwargs["params"]["stats"] == "true"
    assert page.total == 11
    assert page.requirements[0].text == "Login"
    assert page.requirements[0].estimated_time == 3

    prepared = requests.Request("GET", url, params=kwargs["params"]).prepare()
    assert "type=UI&type=Security" in prepared.url


def test_get_projects_defaults_missing_rate(monkeypatch):
    client, _ = make_client(monkeypatch, FakeResponse(body=[
        {"id": 1, "name": "Acme", "hourly_rate": 45.5},
        {"id": 2, "name": "Beta", "hourly_rate": None},
    ]))
    projects = client.get_projects()
    assert projects[0].hourly_rate == 45.5
    assert projects[1].hourly_rate == 0


def test_get_overall_stats_passes_project(monkeypatch):
    client, calls = make_client(monkeypatch, FakeResponse(body={
        "total": 3, "approved": 1, "inReview": 1, "disapproved": 0,
    }))
    stats = client.get_overall_stats(8)
    assert calls[0][1] == "http://api.test/api/requirements/stats"
    assert calls[0][2]["params"] == {"project": 8}
    assert stats.in_review == 1


def test_server_error_message_is_preferred(monkeypatch):
    client, _ = make_client(monkeypatch, FakeResponse(status_code=400, body={"error": "Unknown project"}))
    with pytest.raises(ApiError) as excinfo:
        client.get_overall_stats(1)
    assert str(excinfo.value) == "Unknown project"


def test_transport_error_uses_exception_text(monkeypatch):
    client, _ = make_client(monkeypatch, error=requests.ConnectionError("Connection refused"))
    with pytest.raises(ApiError) as excinfo:
        client.get_projects()
    assert str(excinfo.value) == "Connection refused"


def test_non_json_body_is_invalid_response(monkeypatch):
    client, _ = make_client(monkeypatch, FakeResponse(body=None, text="<html>"))
    with pytest.raises(ApiError) as excinfo:
        client.get_projects()
    assert str(excinfo.value) == "Server returned an invalid response"


def test_jira_calls_use_camel_case_bodies_and_push_timeout(monkeypatch):
    client, calls = make_client(monkeypatch, FakeResponse(body={"success": True}))
    client.connect_jira(JiraConnectRequest(
        site_url="https://acme.atlassian.net", email="jo@acme.io", api_token="t", project_key="ACME",
    ))
    client.push_to_jira("abc123")

    assert calls[0][2]["json"] == {
        "siteUrl": "https://acme.atlassian.net",
        "email": "jo@acme.io",
        "apiToken": "t",
        "projectKey": "ACME",
    }
    assert calls[1][1] == "http://api.test/api/jira/push"
    assert calls[1][2]["json"] == {"requirementId": "abc123"}
    assert calls[1][2]["timeout"] == 30
    assert "timeout" not in calls[0][2]


def test_list_requirements_accepts_numeric_ids(monkeypatch):
    body = {
        "requirements": [
            {"id": 7, "requirement": "x", "status": "Approved", "date": "2024-01-05"},
            {"id": "abc123", "requirement": "y", "status": "Draft", "date": "2024-01-06"},
        ],
        "page": 1, "pages": 1, "total": 2,
    }
    client, _ = make_client(monkeypatch, FakeResponse(body=body))
    page = client.list_requirements(QueryDescriptor(project_id=1))
    assert [r.id for r in page.requirements] == ["7", "abc123"]


def test_each_call_uses_its_own_http_session(monkeypatch):
    sessions = []

    def fake_request(self, method, url, **kwargs):
        sessions.append(self)
        return FakeResponse(body={"total": 0})

    monkeypatch.setattr(requests.Session, "request", fake_request)
    client = RequirementsApiClient(base_url="http://api.test/api")
    client.get_overall_stats(1)
    client.get_overall_stats(2)
    assert len(sessions) == 2
    assert sessions[0] is not sessions[1]

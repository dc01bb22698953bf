"""
Shared fixtures: an in-memory stand-in for the Mailchimp API served through
httpx.MockTransport, and clients/tools wired to it.
"""

import itertools
import json
from typing import Any, Dict, List

import httpx
import pytest

from mailchimp_mcp.client import MailchimpClient
from mailchimp_mcp.config import get_settings
from mailchimp_mcp.registry import reset_registry

API_KEY = "abc123-us14"


class FakeMailchimp:
    """
    Minimal stateful Mailchimp: campaigns, content, actions and reports.

    Every request is recorded in `requests`. `responses` can pin a canned
    (status, body) for a "METHOD /path" key, overriding the built-in behavior.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, Any] = {}
        self.lists = [
            {
                "id": "aud1",
                "name": "Newsletter",
                "stats": {
                    "member_count": 250,
                    "unsubscribe_count": 3,
                    "open_rate": 0.423,
                    "click_rate": 0.081,
                },
            }
        ]
        self.campaigns: Dict[str, Dict[str, Any]] = {}
        self.content: Dict[str, str] = {}
        self._ids = (f"cmp{i}" for i in itertools.count(1))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, api_key: str = API_KEY) -> MailchimpClient:
        return MailchimpClient(api_key=api_key, transport=self.transport)

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/3.0")
        key = f"{request.method} {path}"

        if key in self.responses:
            status, body = self.responses[key]
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        parts = path.strip("/").split("/")

        if key == "GET /lists":
            return httpx.Response(200, json={"lists": self.lists})

        if key == "GET /campaigns":
            status = request.url.params.get("status")
            count = int(request.url.params.get("count", "10"))
            items = [c for c in self.campaigns.values() if status is None or c["status"] == status]
            items.sort(key=lambda c: c["create_time"], reverse=True)
            return httpx.Response(200, json={"campaigns": items[:count]})

        if key == "POST /campaigns":
            payload = json.loads(request.content)
            campaign_id = next(self._ids)
            campaign = {
                "id": campaign_id,
                "type": payload["type"],
                "status": "save",
                "create_time": f"2026-01-01T00:00:{len(self.campaigns):02d}+00:00",
                "settings": payload["settings"],
                "recipients": payload["recipients"],
            }
            self.campaigns[campaign_id] = campaign
            return httpx.Response(200, json=campaign)

        if parts[0] == "campaigns" and len(parts) >= 2:
            campaign = self.campaigns.get(parts[1])
            if campaign is None:
                return httpx.Response(
                    404, json={"title": "Resource Not Found", "detail": "The requested resource could not be found."}
                )
            if request.method == "PUT" and parts[2:] == ["content"]:
                if campaign["status"] != "save":
                    return httpx.Response(400, json={"title": "Bad Request", "detail": "Campaign is not a draft."})
                self.content[campaign["id"]] = json.loads(request.content)["html"]
                return httpx.Response(200, json={"html": self.content[campaign["id"]]})
            if request.method == "POST" and parts[2:] == ["actions", "test"]:
                return httpx.Response(204)
            if request.method == "POST" and parts[2:] == ["actions", "send"]:
                campaign["status"] = "sent"
                return httpx.Response(204)
            if request.method == "POST" and parts[2:] == ["actions", "schedule"]:
                campaign["status"] = "schedule"
                return httpx.Response(204)
            if request.method == "DELETE" and len(parts) == 2:
                if campaign["status"] == "sent":
                    return httpx.Response(400, json={"title": "Bad Request", "detail": "Sent campaigns cannot be deleted."})
                del self.campaigns[campaign["id"]]
                return httpx.Response(204)

        return httpx.Response(404, json={"title": "Resource Not Found"})


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Each test starts from a known environment and a fresh catalog."""
    monkeypatch.setenv("MAILCHIMP_API_KEY", API_KEY)
    get_settings.cache_clear()
    reset_registry()
    yield
    get_settings.cache_clear()
    reset_registry()


@pytest.fixture
def fake_mailchimp() -> FakeMailchimp:
    return FakeMailchimp()


@pytest.fixture
def wired_catalog(monkeypatch, fake_mailchimp):
    """Make every registry-built tool talk to the fake API."""
    monkeypatch.setattr(
        "mailchimp_mcp.tools._common.MailchimpClient",
        lambda: fake_mailchimp.client(),
    )
    return fake_mailchimp

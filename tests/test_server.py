"""
Tests for the hosting adapters: MCP protocol binding, the long-running
FastAPI server and the request-scoped serverless app.
"""

import json

import pytest
from fastapi.testclient import TestClient
from mcp.shared.memory import create_connected_server_and_client_session

from mailchimp_mcp.protocol import build_mcp_server
from mailchimp_mcp.server import app
from mailchimp_mcp.serverless import app as serverless_app

HEALTH = {"status": "ok", "server": "mailchimp-mcp-server", "version": "1.0.0"}

MCP_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}
LIST_TOOLS = {"jsonrpc": "2.0", "id": 1, "method": "tools/list", "params": {}}


class TestProtocol:

    @pytest.mark.asyncio
    async def test_list_tools_with_annotations(self):
        async with create_connected_server_and_client_session(build_mcp_server()) as session:
            result = await session.list_tools()

        tools = {t.name: t for t in result.tools}
        assert len(tools) == 9
        send = tools["mailchimp_send_campaign"]
        assert send.annotations.destructiveHint is True
        assert send.annotations.idempotentHint is False
        assert send.inputSchema["required"] == ["campaign_id"]

    @pytest.mark.asyncio
    async def test_call_tool_returns_pretty_json_text(self, wired_catalog):
        async with create_connected_server_and_client_session(build_mcp_server()) as session:
            result = await session.call_tool("mailchimp_list_audiences", {})

        assert result.isError is False
        assert len(result.content) == 1
        text = result.content[0].text
        assert json.loads(text)[0]["subscribers"] == 250
        assert text == json.dumps(json.loads(text), indent=2)

    @pytest.mark.asyncio
    async def test_remote_error_reaches_agent(self, wired_catalog):
        wired_catalog.responses["GET /reports/gone"] = (404, {"detail": "Campaign not found"})
        async with create_connected_server_and_client_session(build_mcp_server()) as session:
            result = await session.call_tool("mailchimp_get_campaign_report", {"campaign_id": "gone"})

        assert result.isError is True
        assert "Campaign not found" in result.content[0].text
        assert "404" in result.content[0].text

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_api(self, wired_catalog):
        async with create_connected_server_and_client_session(build_mcp_server()) as session:
            result = await session.call_tool(
                "mailchimp_send_test", {"campaign_id": "c1", "test_emails": ["not-an-email"]}
            )

        assert result.isError is True
        assert "test_emails" in result.content[0].text
        assert wired_catalog.requests == []


class TestServer:

    def test_health(self):
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == HEALTH

    def test_root_lists_endpoints(self):
        body = TestClient(app).get("/").json()
        assert body["tools_count"] == 9
        assert body["endpoints"]["mcp"] == "/mcp"

    def test_list_tools(self):
        body = TestClient(app).get("/tools").json()
        assert body["total"] == 9
        delete = next(t for t in body["tools"] if t["name"] == "mailchimp_delete_campaign")
        assert delete["annotations"]["destructiveHint"] is True

    def test_tool_info_not_found(self):
        response = TestClient(app).get("/tools/mailchimp_get_report")
        assert response.status_code == 404

    def test_tool_info(self):
        body = TestClient(app).get("/tools/mailchimp_schedule_campaign").json()
        assert body["inputSchema"]["properties"]["schedule_time"]["format"] == "date-time"

    def test_execute_endpoint(self, wired_catalog):
        response = TestClient(app).post(
            "/tools/mailchimp_create_campaign/execute",
            json={"arguments": {
                "list_id": "aud1",
                "subject": "S",
                "from_name": "Shop",
                "reply_to": "hello@shop.example",
            }},
        )
        body = response.json()
        assert body["success"] is True
        assert body["result"]["title"] == "S"

    def test_execute_endpoint_validation_error(self, wired_catalog):
        response = TestClient(app).post(
            "/tools/mailchimp_list_campaigns/execute",
            json={"arguments": {"count": 500}},
        )
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "validation"
        assert "count" in body["error"]
        assert wired_catalog.requests == []

    def test_mcp_endpoint_lists_tools(self):
        with TestClient(app) as client:
            response = client.post("/mcp", headers=MCP_HEADERS, json=LIST_TOOLS)

        assert response.status_code == 200
        names = {t["name"] for t in response.json()["result"]["tools"]}
        assert "mailchimp_create_campaign" in names


class TestServerless:

    def test_get_is_health(self):
        client = TestClient(serverless_app)
        assert client.get("/").json() == HEALTH
        assert client.get("/api/mcp").json() == HEALTH

    def test_other_methods_rejected(self):
        response = TestClient(serverless_app).put("/api/mcp")
        assert response.status_code == 405

    def test_post_serves_one_request(self):
        client = TestClient(serverless_app)
        for _ in range(2):
            response = client.post("/api/mcp", headers=MCP_HEADERS, json=LIST_TOOLS)
            assert response.status_code == 200
            assert len(response.json()["result"]["tools"]) == 9

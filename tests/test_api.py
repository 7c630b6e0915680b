"""Tests for the HTTP transport."""
import json

import pytest
from fastapi.testclient import TestClient

from intellimcp_core.config import Settings
from intellimcp_mcp.api.main import create_app


@pytest.fixture
def client(registry):
    app = create_app(registry=registry, settings=Settings(server_name="test-server"))
    return TestClient(app)


class TestServerInfo:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"name": "test-server", "version": "1.0.0", "tools": 5, "docs": "/docs"}

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestToolEndpoints:
    """Test listing and calling tools over HTTP."""

    def test_list_tools(self, client, registry):
        response = client.get("/api/v1/tools/")
        assert response.status_code == 200

        tools = response.json()
        assert [tool["name"] for tool in tools] == registry.names
        read_file = next(tool for tool in tools if tool["name"] == "read_file")
        assert read_file["inputSchema"] == registry.get("read_file").input_schema

    def test_get_tool(self, client):
        response = client.get("/api/v1/tools/list_projects")
        assert response.status_code == 200
        assert response.json()["inputSchema"] == {"type": "object"}

    def test_get_unknown_tool(self, client):
        response = client.get("/api/v1/tools/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown tool: nope"

    def test_call_tool(self, client, project_dir):
        response = client.post(
            "/api/v1/tools/read_file",
            json={"filePath": "README.md", "projectPath": str(project_dir)},
        )
        assert response.status_code == 200

        body = response.json()
        assert body["isError"] is False
        assert body["content"][0]["type"] == "text"
        assert json.loads(body["content"][0]["text"])["content"] == "# Demo\nA demo project"

    def test_validation_errors_are_tool_errors(self, client):
        """Invalid arguments produce an error result, not an HTTP error."""
        response = client.post("/api/v1/tools/read_file", json={})
        assert response.status_code == 200

        body = response.json()
        assert body["isError"] is True
        assert body["content"][0]["text"] == "Error: filePath is required, projectPath is required"

    def test_call_without_body(self, client):
        response = client.post("/api/v1/tools/list_projects")
        assert response.status_code == 200
        assert response.json()["isError"] is False

    def test_call_unknown_tool(self, client):
        response = client.post("/api/v1/tools/nope", json={})
        assert response.status_code == 404

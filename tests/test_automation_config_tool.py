from __future__ import annotations

import json

import httpx
import pytest

from ha_automation_config.connectors.hass_connector import HomeAssistantConnector
from ha_automation_config.tools.automation_config_tool import AUTOMATION_CONFIG_DESCRIPTOR
from ha_automation_config.tools.registry import ToolRegistry, build_default_registry


def _registry(requests: list[httpx.Request]) -> ToolRegistry:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"result": "ok"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return build_default_registry(HomeAssistantConnector("http://ha.test", "t", client=client))


def test_descriptor_exposes_parameter_schema() -> None:
    schema = AUTOMATION_CONFIG_DESCRIPTOR.parameters
    assert schema["required"] == ["action"]
    assert set(schema["properties"]) == {"action", "automation_id", "config"}

    dumped = AUTOMATION_CONFIG_DESCRIPTOR.model_dump(by_alias=True)
    assert dumped["annotations"]["destructiveHint"] is True
    assert dumped["annotations"]["readOnlyHint"] is False


def test_registry_lists_automation_config_tool() -> None:
    registry = _registry([])
    assert [descriptor.name for descriptor in registry.list()] == ["automation_config"]
    assert registry.get("missing") is None


@pytest.mark.asyncio
async def test_execute_returns_json_envelope() -> None:
    requests: list[httpx.Request] = []
    tool = _registry(requests).get("automation_config")

    payload = json.loads(await tool.execute({"action": "delete", "automation_id": "abc"}))

    assert payload == {"success": True, "message": "Automation deleted successfully", "config_id": "abc"}
    assert requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_execute_rejects_unknown_action_without_network() -> None:
    requests: list[httpx.Request] = []
    tool = _registry(requests).get("automation_config")

    payload = json.loads(await tool.execute({"action": "archive", "automation_id": "abc"}))

    assert payload["success"] is False
    assert payload["message"].startswith("Invalid parameters: action")
    assert requests == []


@pytest.mark.asyncio
async def test_execute_requires_alias_in_config() -> None:
    requests: list[httpx.Request] = []
    tool = _registry(requests).get("automation_config")

    payload = json.loads(await tool.execute({"action": "create", "config": {"triggers": []}}))

    assert payload["success"] is False
    assert "config.alias" in payload["message"]
    assert requests == []


@pytest.mark.asyncio
async def test_execute_forwards_config_as_supplied() -> None:
    requests: list[httpx.Request] = []
    tool = _registry(requests).get("automation_config")
    config = {"alias": "Night", "mode": "single", "variables": {"level": 10}, "triggers": [], "actions": []}

    payload = json.loads(await tool.execute({"action": "create", "config": config}))

    assert payload["success"] is True
    assert json.loads(requests[0].content) == config

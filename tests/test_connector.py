from __future__ import annotations

import httpx
import pytest

from ha_automation_config.connectors.hass_connector import HomeAssistantConnector
from ha_automation_config.core.errors import UpstreamError


def _connector(handler) -> HomeAssistantConnector:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HomeAssistantConnector("http://ha.test/", "abc", client=client)


@pytest.mark.asyncio
async def test_requests_use_host_without_trailing_slash() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"alias": "A"})

    async with _connector(handler) as connector:
        config = await connector.get_automation_config("42")

    assert config == {"alias": "A"}
    assert seen == ["http://ha.test/api/config/automation/config/42"]


@pytest.mark.asyncio
async def test_failed_state_read_returns_none() -> None:
    async with _connector(lambda request: httpx.Response(401)) as connector:
        assert await connector.fetch_state("automation.x") is None


@pytest.mark.asyncio
async def test_config_failure_raises_upstream_error() -> None:
    async with _connector(lambda request: httpx.Response(400)) as connector:
        with pytest.raises(UpstreamError) as exc_info:
            await connector.create_automation_config({"alias": "A"})

    assert exc_info.value.operation == "create automation"
    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "Failed to create automation: Bad Request"


@pytest.mark.asyncio
async def test_delete_accepts_empty_body() -> None:
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        return httpx.Response(200)

    async with _connector(handler) as connector:
        await connector.delete_automation_config("42")

    assert methods == ["DELETE"]


@pytest.mark.asyncio
async def test_non_json_success_body_raises_upstream_error() -> None:
    async with _connector(lambda request: httpx.Response(200, text="<html>proxy</html>")) as connector:
        with pytest.raises(UpstreamError, match="Failed to update automation: invalid JSON response"):
            await connector.update_automation_config("42", {"alias": "A"})


@pytest.mark.asyncio
async def test_injected_client_gets_auth_headers() -> None:
    headers: list[httpx.Headers] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers)
        return httpx.Response(200, json={"attributes": {"id": "1"}})

    async with _connector(handler) as connector:
        await connector.fetch_state("automation.x")

    assert headers[0]["Authorization"] == "Bearer abc"
    assert headers[0]["Content-Type"] == "application/json"

from __future__ import annotations

import logging
from typing import Any

import httpx

from ha_automation_config.core.errors import UpstreamError


AUTOMATION_CONFIG_PATH = "/api/config/automation/config"


class HomeAssistantConnector:
    """Async client for the controller's state and automation config endpoints.

    Every request carries the bearer token and a JSON content type. Config
    endpoint failures raise ``UpstreamError``; a failed state read returns
    ``None`` so the caller can decide how to report the missing entity.
    """

    def __init__(
        self,
        host: str,
        token: str,
        *,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.host = host.rstrip("/")
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        if client is None:
            client = httpx.AsyncClient(base_url=self.host, headers=headers)
        else:
            client.base_url = self.host
            client.headers.update(headers)
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    async def __aenter__(self) -> "HomeAssistantConnector":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_state(self, entity_id: str) -> dict[str, Any] | None:
        response = await self._request("GET", f"/api/states/{entity_id}")
        if not response.is_success:
            self._logger.debug("State read for %s returned %s.", entity_id, response.status_code)
            return None
        try:
            state = response.json()
        except ValueError:
            self._logger.warning("State read for %s returned a body that is not JSON.", entity_id)
            return None
        return state if isinstance(state, dict) else {}

    async def get_automation_config(self, config_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"{AUTOMATION_CONFIG_PATH}/{config_id}")
        config = _decode(response, "get automation config")
        return config if isinstance(config, dict) else {}

    async def create_automation_config(self, body: dict[str, Any]) -> Any:
        response = await self._request("POST", AUTOMATION_CONFIG_PATH, json=body)
        return _decode(response, "create automation")

    async def update_automation_config(self, config_id: str, body: dict[str, Any]) -> Any:
        # The controller replaces an existing automation via POST, not PUT.
        response = await self._request("POST", f"{AUTOMATION_CONFIG_PATH}/{config_id}", json=body)
        return _decode(response, "update automation")

    async def delete_automation_config(self, config_id: str) -> None:
        response = await self._request("DELETE", f"{AUTOMATION_CONFIG_PATH}/{config_id}")
        _raise_for_status(response, "delete automation")

    async def _request(self, method: str, path: str, *, json: Any = None) -> httpx.Response:
        self._logger.debug("%s %s%s", method, self.host, path)
        if json is None:
            return await self._client.request(method, path)
        return await self._client.request(method, path, json=json)


def _raise_for_status(response: httpx.Response, operation: str) -> None:
    if not response.is_success:
        raise UpstreamError(operation, response.status_code, response.reason_phrase)


def _decode(response: httpx.Response, operation: str) -> Any:
    _raise_for_status(response, operation)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError(operation, response.status_code, "invalid JSON response") from exc

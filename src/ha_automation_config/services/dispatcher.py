from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from ha_automation_config.core.enums import ConfigAction
from ha_automation_config.core.errors import (
    AutomationError,
    MissingParameterError,
    UnknownActionError,
    UpstreamError,
)
from ha_automation_config.core.interfaces import AutomationConfigApi
from ha_automation_config.core.models import ResultEnvelope
from ha_automation_config.services.resolver import IdentifierResolver


COPY_SUFFIX = " (Copy)"
DEFAULT_ALIAS = "Automation"

ActionHandler = Callable[[str | None, dict[str, Any] | None], Awaitable[ResultEnvelope]]


def build_duplicate_config(existing: dict[str, Any]) -> dict[str, Any]:
    alias = existing.get("alias") or DEFAULT_ALIAS
    return {**existing, "alias": f"{alias}{COPY_SUFFIX}"}


class AutomationConfigDispatcher:
    """Map a config action onto the controller's automation config endpoints.

    ``dispatch`` never raises: every failure becomes ``success=False`` with a
    readable message.
    """

    def __init__(
        self,
        api: AutomationConfigApi,
        resolver: IdentifierResolver | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._api = api
        self._resolver = resolver or IdentifierResolver(api)
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: dict[str, ActionHandler] = {
            ConfigAction.GET: self._get,
            ConfigAction.CREATE: self._create,
            ConfigAction.UPDATE: self._update,
            ConfigAction.DELETE: self._delete,
            ConfigAction.DUPLICATE: self._duplicate,
        }

    async def dispatch(
        self,
        action: str,
        automation_id: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> ResultEnvelope:
        self._logger.debug(
            "Dispatching automation config action=%s automation_id=%s config=%s",
            action,
            automation_id,
            config,
        )
        try:
            handler = self._handlers.get(str(action))
            if handler is None:
                raise UnknownActionError(str(action))
            return await handler(automation_id, config)
        except AutomationError as exc:
            self._logger.error("Automation config action '%s' failed [%s]: %s", action, exc.code, exc)
            return ResultEnvelope.failure(str(exc))
        except httpx.HTTPError as exc:
            self._logger.error("Automation config action '%s' failed in transport: %s", action, exc)
            return ResultEnvelope.failure(f"Request to controller failed: {exc}")
        except Exception as exc:
            self._logger.exception("Automation config action '%s' failed unexpectedly.", action)
            return ResultEnvelope.failure(f"Unexpected error during {action}: {exc}")

    async def _get(self, automation_id: str | None, config: dict[str, Any] | None) -> ResultEnvelope:
        del config
        automation_id = _require(automation_id, "automation_id", ConfigAction.GET)
        config_id = await self._resolver.resolve(automation_id)
        existing = await self._api.get_automation_config(config_id)
        return ResultEnvelope(success=True, config=existing, config_id=config_id)

    async def _create(self, automation_id: str | None, config: dict[str, Any] | None) -> ResultEnvelope:
        del automation_id
        body = _require(config, "config", ConfigAction.CREATE)
        result = await self._api.create_automation_config(body)
        return ResultEnvelope(success=True, message="Automation created successfully", result=result)

    async def _update(self, automation_id: str | None, config: dict[str, Any] | None) -> ResultEnvelope:
        automation_id = _require(automation_id, "automation_id", ConfigAction.UPDATE)
        body = _require(config, "config", ConfigAction.UPDATE)
        config_id = await self._resolver.resolve(automation_id)
        result = await self._api.update_automation_config(config_id, body)
        return ResultEnvelope(
            success=True,
            message="Automation updated successfully",
            config_id=config_id,
            result=result,
        )

    async def _delete(self, automation_id: str | None, config: dict[str, Any] | None) -> ResultEnvelope:
        del config
        automation_id = _require(automation_id, "automation_id", ConfigAction.DELETE)
        config_id = await self._resolver.resolve(automation_id)
        await self._api.delete_automation_config(config_id)
        return ResultEnvelope(success=True, message="Automation deleted successfully", config_id=config_id)

    async def _duplicate(self, automation_id: str | None, config: dict[str, Any] | None) -> ResultEnvelope:
        del config
        automation_id = _require(automation_id, "automation_id", ConfigAction.DUPLICATE)
        config_id = await self._resolver.resolve(automation_id)
        existing = await self._api.get_automation_config(config_id)
        try:
            result = await self._api.create_automation_config(build_duplicate_config(existing))
        except UpstreamError as exc:
            raise UpstreamError("duplicate automation", exc.status_code, exc.reason) from exc
        return ResultEnvelope(
            success=True,
            message="Automation duplicated successfully",
            original_config_id=config_id,
            result=result,
        )


def _require(value: Any, field: str, action: ConfigAction) -> Any:
    if value is None or value == "":
        raise MissingParameterError(field, action.value)
    return value

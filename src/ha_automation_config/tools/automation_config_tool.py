from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ha_automation_config.core.models import AutomationConfigParams, ResultEnvelope
from ha_automation_config.services.dispatcher import AutomationConfigDispatcher


class ToolAnnotations(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    read_only_hint: bool = Field(default=False, serialization_alias="readOnlyHint")
    destructive_hint: bool = Field(default=False, serialization_alias="destructiveHint")
    idempotent_hint: bool = Field(default=False, serialization_alias="idempotentHint")
    open_world_hint: bool = Field(default=False, serialization_alias="openWorldHint")


class ToolMetadata(BaseModel):
    category: str = Field(min_length=1)
    version: str = "1.0.0"
    tags: list[str] = Field(default_factory=list)


class ToolDescriptor(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    annotations: ToolAnnotations
    metadata: ToolMetadata
    parameters: dict[str, Any] = Field(default_factory=dict)


AUTOMATION_CONFIG_DESCRIPTOR = ToolDescriptor(
    name="automation_config",
    description=(
        "Advanced automation configuration management - get full config, create, update, delete, "
        "or duplicate automations"
    ),
    annotations=ToolAnnotations(
        title="Automation Configuration",
        description=(
            "Full CRUD operations for Home Assistant automations. "
            "Supports both entity_id (automation.xyz) and config_id formats."
        ),
        read_only_hint=False,
        destructive_hint=True,
        idempotent_hint=False,
        open_world_hint=True,
    ),
    metadata=ToolMetadata(
        category="home_assistant",
        version="1.0.0",
        tags=["automation", "config", "home_assistant", "crud"],
    ),
    parameters=AutomationConfigParams.model_json_schema(),
)


class AutomationConfigTool:
    """Caller-facing adapter: validate raw parameters, dispatch, return envelope JSON."""

    descriptor = AUTOMATION_CONFIG_DESCRIPTOR

    def __init__(self, dispatcher: AutomationConfigDispatcher, logger: logging.Logger | None = None) -> None:
        self._dispatcher = dispatcher
        self._logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def execute(self, params: dict[str, Any]) -> str:
        envelope = await self.run(params)
        return envelope.to_json()

    async def run(self, params: dict[str, Any]) -> ResultEnvelope:
        self._logger.debug("Executing %s with params: %s", self.name, params)
        try:
            validated = AutomationConfigParams.model_validate(params)
        except ValidationError as exc:
            self._logger.error("Invalid parameters for %s: %s", self.name, exc)
            return ResultEnvelope.failure(f"Invalid parameters: {_summarize_validation_error(exc)}")

        # The caller's mapping is forwarded as supplied; validation only gates it.
        raw_config = params.get("config") if validated.config is not None else None
        return await self._dispatcher.dispatch(
            validated.action.value,
            automation_id=validated.automation_id,
            config=raw_config,
        )


def _summarize_validation_error(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "params"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ha_automation_config.core.enums import AutomationMode, ConfigAction


ConfigStep = dict[str, Any]


class AutomationDefinition(BaseModel):
    """Automation payload as accepted by the controller config API.

    Legacy singular keys (``trigger``, ``condition``, ``action``) and current
    plural keys are both accepted and never merged into one another.
    """

    model_config = ConfigDict(extra="allow")

    alias: str = Field(description="Friendly name for the automation")
    description: str | None = Field(default=None, description="Description of what the automation does")
    mode: AutomationMode | None = Field(default=None, description="How multiple triggerings are handled")
    max_exceeded: str | None = Field(default=None, description="Action when max is exceeded (silent or default)")
    trigger: list[ConfigStep] | None = Field(default=None, description="List of triggers (legacy format)")
    triggers: list[ConfigStep] | None = Field(default=None, description="List of triggers (new HA format)")
    condition: list[ConfigStep] | None = Field(default=None, description="List of conditions (legacy format)")
    conditions: list[ConfigStep] | None = Field(default=None, description="List of conditions (new HA format)")
    action: list[ConfigStep] | None = Field(default=None, description="List of actions (legacy format)")
    actions: list[ConfigStep] | None = Field(default=None, description="List of actions (new HA format)")


class AutomationConfigParams(BaseModel):
    action: ConfigAction = Field(description="Action to perform with automation config")
    automation_id: str | None = Field(
        default=None,
        description="Automation ID or entity_id (required for get, update, delete, and duplicate)",
    )
    config: AutomationDefinition | None = Field(
        default=None,
        description="Automation configuration (required for create and update)",
    )


class ResultEnvelope(BaseModel):
    success: bool
    message: str | None = None
    config: dict[str, Any] | None = None
    config_id: str | None = None
    result: Any = None
    original_config_id: str | None = None

    @classmethod
    def failure(cls, message: str) -> "ResultEnvelope":
        return cls(success=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_unset=True)

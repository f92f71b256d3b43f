from __future__ import annotations

from ha_automation_config.core.interfaces import AutomationConfigApi
from ha_automation_config.services.dispatcher import AutomationConfigDispatcher
from ha_automation_config.tools.automation_config_tool import AutomationConfigTool, ToolDescriptor


class ToolRegistry:
    """In-memory tool registry handed to the outer tool harness."""

    def __init__(self) -> None:
        self._tools: dict[str, AutomationConfigTool] = {}

    def register(self, tool: AutomationConfigTool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered.")
        self._tools[tool.name] = tool

    def get(self, name: str) -> AutomationConfigTool | None:
        return self._tools.get(name)

    def list(self) -> list[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]


def build_default_registry(api: AutomationConfigApi) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(AutomationConfigTool(dispatcher=AutomationConfigDispatcher(api)))
    return registry

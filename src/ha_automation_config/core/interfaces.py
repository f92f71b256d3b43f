from __future__ import annotations

from typing import Any, Protocol


class AutomationConfigApi(Protocol):
    async def fetch_state(self, entity_id: str) -> dict[str, Any] | None:
        ...

    async def get_automation_config(self, config_id: str) -> dict[str, Any]:
        ...

    async def create_automation_config(self, body: dict[str, Any]) -> Any:
        ...

    async def update_automation_config(self, config_id: str, body: dict[str, Any]) -> Any:
        ...

    async def delete_automation_config(self, config_id: str) -> None:
        ...

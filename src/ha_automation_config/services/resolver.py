from __future__ import annotations

import logging

from ha_automation_config.core.errors import NotFoundError, UnresolvableReferenceError
from ha_automation_config.core.interfaces import AutomationConfigApi


ENTITY_PREFIX = "automation."


def is_entity_reference(reference: str) -> bool:
    return reference.startswith(ENTITY_PREFIX)


class IdentifierResolver:
    """Turn an entity id or a config id into the config id used by the config API."""

    def __init__(self, api: AutomationConfigApi, logger: logging.Logger | None = None) -> None:
        self._api = api
        self._logger = logger or logging.getLogger(__name__)

    async def resolve(self, reference: str) -> str:
        if not is_entity_reference(reference):
            return reference

        state = await self._api.fetch_state(reference)
        if state is None:
            raise NotFoundError(reference)

        attributes = state.get("attributes")
        config_id = attributes.get("id") if isinstance(attributes, dict) else None
        if not config_id:
            raise UnresolvableReferenceError(reference)

        self._logger.debug("Resolved %s to config id %s.", reference, config_id)
        return str(config_id)

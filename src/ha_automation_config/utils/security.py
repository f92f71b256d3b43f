from __future__ import annotations

import logging

import keyring
from keyring.errors import KeyringError, PasswordDeleteError


HASS_TOKEN_KEY = "hass_token"

logger = logging.getLogger(__name__)


class SecretStore:
    """OS keyring storage for the controller access token.

    Reads never fail: a host without a usable keyring backend behaves like an
    empty store, so the token can still come from the environment.
    """

    def __init__(self, service_name: str = "ha_automation_config") -> None:
        self.service_name = service_name

    def set_secret(self, key: str, value: str) -> None:
        keyring.set_password(self.service_name, key, value)

    def get_secret(self, key: str) -> str | None:
        try:
            return keyring.get_password(self.service_name, key)
        except KeyringError as exc:
            logger.warning("Keyring lookup for '%s' in '%s' failed: %s", key, self.service_name, exc)
            return None

    def delete_secret(self, key: str) -> None:
        try:
            keyring.delete_password(self.service_name, key)
        except PasswordDeleteError:
            return

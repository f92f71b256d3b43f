from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ha_automation_config.utils.security import HASS_TOKEN_KEY, SecretStore


DEFAULT_HOST = "http://homeassistant.local:8123"


@dataclass(slots=True)
class Settings:
    app_name: str = "HA Automation Config"
    host: str = DEFAULT_HOST
    token: str = ""
    log_dir: Path = Path("logs")
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls, secret_store: SecretStore | None = None, *, resolve_token: bool = True) -> "Settings":
        host = os.getenv("HASS_HOST", DEFAULT_HOST).strip().rstrip("/") or DEFAULT_HOST
        token = os.getenv("HASS_TOKEN", "").strip()
        if not token and resolve_token:
            store = secret_store or SecretStore()
            token = store.get_secret(HASS_TOKEN_KEY) or ""

        level_raw = os.getenv("HAC_LOG_LEVEL", "INFO").strip().upper()
        log_level = logging.getLevelName(level_raw)
        if not isinstance(log_level, int):
            log_level = logging.INFO

        return cls(
            host=host,
            token=token,
            log_dir=Path(os.getenv("HAC_LOG_DIR", "logs")),
            log_level=log_level,
        )

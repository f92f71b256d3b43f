from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from keyring.errors import KeyringError

from ha_automation_config.config.settings import Settings
from ha_automation_config.connectors.hass_connector import HomeAssistantConnector
from ha_automation_config.core.enums import ConfigAction
from ha_automation_config.core.models import ResultEnvelope
from ha_automation_config.services.dispatcher import AutomationConfigDispatcher
from ha_automation_config.tools.automation_config_tool import AUTOMATION_CONFIG_DESCRIPTOR, AutomationConfigTool
from ha_automation_config.utils.logging_config import configure_logging
from ha_automation_config.utils.security import HASS_TOKEN_KEY, SecretStore


ACTIONS_WITH_ID = {ConfigAction.GET, ConfigAction.UPDATE, ConfigAction.DELETE, ConfigAction.DUPLICATE}
ACTIONS_WITH_CONFIG = {ConfigAction.CREATE, ConfigAction.UPDATE}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage Home Assistant automation configs.")
    subparsers = parser.add_subparsers(dest="command")

    for action in ConfigAction:
        action_parser = subparsers.add_parser(action.value, help=f"{action.value.capitalize()} an automation config.")
        if action in ACTIONS_WITH_ID:
            action_parser.add_argument(
                "--automation-id",
                required=True,
                help="Automation entity_id (automation.xyz) or config id.",
            )
        if action in ACTIONS_WITH_CONFIG:
            config_group = action_parser.add_mutually_exclusive_group(required=True)
            config_group.add_argument("--config", help="Automation config as JSON object string.")
            config_group.add_argument("--config-file", help="Path to automation config JSON file.")

    subparsers.add_parser("schema", help="Print the tool descriptor and parameter schema.")

    token_parser = subparsers.add_parser("token", help="Manage the stored access token.")
    token_sub = token_parser.add_subparsers(dest="token_command", required=True)
    token_set = token_sub.add_parser("set", help="Store a long-lived access token in the OS keyring.")
    token_set.add_argument("--value", required=True, help="Access token.")
    token_sub.add_parser("delete", help="Remove the stored access token.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    action_commands = {action.value for action in ConfigAction}
    settings = Settings.from_env(resolve_token=args.command in action_commands)
    configure_logging(settings.log_dir, settings.log_level)
    logger = logging.getLogger("ha_automation_config")

    if args.command == "schema":
        print(json.dumps(AUTOMATION_CONFIG_DESCRIPTOR.model_dump(mode="json", by_alias=True), indent=2))
        return 0

    if args.command == "token":
        store = SecretStore()
        try:
            if args.token_command == "set":
                store.set_secret(HASS_TOKEN_KEY, args.value)
                print({"stored": True, "service": store.service_name})
                return 0
            store.delete_secret(HASS_TOKEN_KEY)
        except KeyringError as exc:
            logger.error("Keyring is not available: %s", exc)
            return 2
        print({"stored": False, "service": store.service_name})
        return 0

    if args.command in action_commands:
        params: dict[str, Any] = {"action": args.command}
        if getattr(args, "automation_id", None):
            params["automation_id"] = args.automation_id
        if ConfigAction(args.command) in ACTIONS_WITH_CONFIG:
            try:
                params["config"] = _load_config(config=args.config, config_file=args.config_file)
            except ValueError as exc:
                logger.error(str(exc))
                return 2

        if not settings.token:
            logger.warning("No access token configured. Set HASS_TOKEN or run 'token set'.")

        envelope = asyncio.run(_run_tool(settings, params))
        print(envelope.to_json())
        return 0 if envelope.success else 1

    logger.info("No command provided.")
    parser.print_help()
    return 1


async def _run_tool(settings: Settings, params: dict[str, Any]) -> ResultEnvelope:
    async with HomeAssistantConnector(settings.host, settings.token) as connector:
        tool = AutomationConfigTool(dispatcher=AutomationConfigDispatcher(connector))
        return await tool.run(params)


def _load_config(*, config: str | None, config_file: str | None) -> dict[str, Any]:
    if config_file:
        path = Path(config_file)
        if not path.exists():
            raise ValueError(f"Config file not found: {path}")
        raw = path.read_text(encoding="utf-8")
    else:
        raw = config or ""
    return _parse_config_json(raw)


def _parse_config_json(raw: str) -> dict[str, Any]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid config JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise ValueError("Config JSON must be an object.")
    return value


if __name__ == "__main__":
    raise SystemExit(main())

"""Config loading, environment overrides, and persistence."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/tdsync/config.json")

# Environment variable -> Jira config field.
_JIRA_ENV_OVERRIDES = {
    "JIRA_URL": "url",
    "JIRA_EMAIL": "email",
    "JIRA_API_TOKEN": "api_token",
    "JIRA_PROJECT": "project_key",
}


def resolve_config_path(path: str | Path | None) -> Path:
    return Path(path if path is not None else DEFAULT_CONFIG_PATH).expanduser().resolve()


def apply_env_overrides(config: TdSyncConfig, environ: Mapping[str, str] | None = None) -> TdSyncConfig:
    """Overlay non-empty ``JIRA_*`` variables onto the Jira settings.

    Jira counts as enabled once the environment alone supplies a URL and an
    API token.
    """
    env = os.environ if environ is None else environ
    updates = {field: env[name] for name, field in _JIRA_ENV_OVERRIDES.items() if env.get(name)}
    if not updates:
        return config

    jira_payload = config.integrations.jira.model_dump() | updates
    if env.get("JIRA_URL") and env.get("JIRA_API_TOKEN"):
        jira_payload["enabled"] = True
    try:
        jira = type(config.integrations.jira).model_validate(jira_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid Jira environment overrides: {exc}") from exc

    integrations = config.integrations.model_copy(update={"jira": jira})
    return config.model_copy(update={"integrations": integrations})


def load_config(path: str | Path | None = None, *, environ: Mapping[str, str] | None = None) -> TdSyncConfig:
    """Load the config file at *path* (default ``~/.config/tdsync/config.json``).

    A missing file yields defaults. Environment overrides are applied last.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or fails validation.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return apply_env_overrides(TdSyncConfig(), environ)

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = TdSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return apply_env_overrides(parsed, environ)


def write_config(config: TdSyncConfig, path: str | Path | None = None) -> Path:
    """Persist *config* as pretty-printed JSON and return the path written."""
    config_path = resolve_config_path(path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(config.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed writing config file: {config_path}") from exc
    return config_path

"""Provider listing command."""

from __future__ import annotations

import argparse
from pathlib import Path

from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ProviderError


def _is_enabled(config: TdSyncConfig, provider_id: str) -> bool:
    if provider_id == "github":
        return config.integrations.github.enabled
    if provider_id == "jira":
        jira = config.integrations.jira
        return jira.enabled and jira.is_configured
    return True


async def provider_statuses(config: TdSyncConfig, work_dir: Path) -> list[tuple[str, str]]:
    """``(provider_id, status)`` for every registered provider."""
    import tdsync.cli as cli

    statuses: list[tuple[str, str]] = []
    for provider_id in cli.registered_providers():
        if not _is_enabled(config, provider_id):
            statuses.append((provider_id, "not configured"))
            continue
        async with cli.create_provider(provider_id, config) as provider:
            try:
                await provider.check_available(work_dir)
            except ProviderError as exc:
                statuses.append((provider_id, f"unavailable: {exc}"))
            else:
                statuses.append((provider_id, "available"))
    return statuses


def format_provider_statuses(statuses: list[tuple[str, str]], default: str | None) -> str:
    lines = []
    for provider_id, status in statuses:
        marker = " (default)" if provider_id == default else ""
        lines.append(f"{provider_id:<8} {status}{marker}")
    return "\n".join(lines)


async def run_providers(args: argparse.Namespace) -> list[tuple[str, str]]:
    import tdsync.cli as cli

    config = cli.load_config(args.config)
    work_dir = Path(args.work_dir).expanduser().resolve()

    statuses = await provider_statuses(config, work_dir)
    default = await cli.default_push_provider(config, work_dir)
    print(format_provider_statuses(statuses, default))
    return statuses


__all__ = ["format_provider_statuses", "provider_statuses", "run_providers"]

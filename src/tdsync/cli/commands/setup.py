"""Interactive Jira Cloud setup."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import questionary

from tdsync.contracts.config import IntegrationsConfig, JiraIntegrationConfig, TdSyncConfig
from tdsync.contracts.exceptions import ProviderError


def _required(label: str) -> Callable[[str], bool | str]:
    def _validate(value: str) -> bool | str:
        return bool(value.strip()) or f"{label} is required"

    return _validate


def _validate_jira_url(value: str) -> bool | str:
    candidate = value.strip()
    if not candidate:
        return "Jira URL is required"
    if not candidate.startswith(("https://", "http://")):
        return "Use a full URL, e.g. https://your-team.atlassian.net"
    return True


async def check_jira_connection(jira: JiraIntegrationConfig, work_dir: Path, *, timeout: float) -> None:
    """Authenticate against Jira with *jira*; raises ``ProviderUnavailableError`` on failure."""
    import tdsync.cli as cli

    config = TdSyncConfig(integrations=IntegrationsConfig(jira=jira), timeout_seconds=timeout)
    async with cli.create_provider("jira", config) as provider:
        await provider.check_available(work_dir)


def run_setup_jira(args: argparse.Namespace) -> int:
    """Prompt for Jira settings, test them, then save them with Jira enabled."""
    import tdsync.cli as cli

    try:
        # Environment overrides stay out of the file we are about to rewrite.
        config = cli.load_config(args.config, environ={})
        current = config.integrations.jira

        url = questionary.text("Jira URL:", default=current.url, validate=_validate_jira_url).ask()
        if url is None:
            raise KeyboardInterrupt
        email = questionary.text("Email:", default=current.email, validate=_required("Email")).ask()
        if email is None:
            raise KeyboardInterrupt
        project_key = questionary.text(
            "Project key:", default=current.project_key, validate=_required("Project key")
        ).ask()
        if project_key is None:
            raise KeyboardInterrupt
        api_token = questionary.password("API token:", validate=_required("API token")).ask()
        if api_token is None:
            raise KeyboardInterrupt

        jira = JiraIntegrationConfig(
            enabled=True,
            url=url,
            email=email.strip(),
            api_token=api_token.strip(),
            project_key=project_key.strip(),
        )

        print("Testing connection...")
        work_dir = Path(args.work_dir).expanduser().resolve()
        try:
            cli.asyncio.run(check_jira_connection(jira, work_dir, timeout=config.timeout_seconds))
        except ProviderError as exc:
            print(f"Connection failed: {exc}", file=sys.stderr)
            return 4

        integrations = config.integrations.model_copy(update={"jira": jira})
        path = cli.write_config(config.model_copy(update={"integrations": integrations}), args.config)
        print(f"Jira configured for project {jira.project_key}. Config written to {path}")
        return 0

    except KeyboardInterrupt:
        print("\nAborted.")
        return 2
    except cli.ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3


__all__ = ["check_jira_connection", "run_setup_jira"]

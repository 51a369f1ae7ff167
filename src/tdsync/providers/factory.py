"""Factory for creating provider instances.

Decouples provider selection from provider implementation. The CLI uses
this factory to instantiate providers by ID without importing concrete
providers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ProviderUnavailableError
from tdsync.contracts.provider import Provider

_LOG = logging.getLogger(__name__)


class ProviderClass(Protocol):
    def from_config(self, config: TdSyncConfig) -> Provider: ...  # pragma: no cover


# Registry mapping provider IDs to their classes
_REGISTRY: dict[str, ProviderClass] = {}


def register(name: str, provider_cls: ProviderClass) -> None:
    """Register a provider class by ID.

    Args:
        name: Provider ID (e.g. "github").
        provider_cls: Provider class exposing a ``from_config`` constructor.
    """
    _REGISTRY[name] = provider_cls


def registered_providers() -> list[str]:
    return sorted(_REGISTRY)


def create_provider(name: str, config: TdSyncConfig) -> Provider:
    """Create a provider instance by ID.

    The returned provider is an async context manager. Use it like:

        async with create_provider("jira", config) as provider:
            issues = await provider.list_issues(work_dir)

    Raises:
        ValueError: If the provider ID is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys())) or "(none registered)"
        raise ValueError(f"Unknown provider: {name!r}. Available: {available}")

    return _REGISTRY[name].from_config(config)


async def configured_providers(config: TdSyncConfig, work_dir: Path) -> list[str]:
    """IDs of the providers usable from *work_dir*, in preference order.

    GitHub counts when enabled and its availability check passes. Jira counts
    when enabled and configured (URL and API token); it is not contacted here.
    """
    ids: list[str] = []
    if config.integrations.github.enabled:
        async with create_provider("github", config) as provider:
            try:
                await provider.check_available(work_dir)
            except ProviderUnavailableError as exc:
                _LOG.debug("GitHub unavailable: %s", exc)
            else:
                ids.append(provider.id)

    jira = config.integrations.jira
    if jira.enabled and jira.is_configured:
        ids.append("jira")
    return ids


async def default_push_provider(config: TdSyncConfig, work_dir: Path) -> str | None:
    """First configured provider, used when a single-issue push names none."""
    ids = await configured_providers(config, work_dir)
    return ids[0] if ids else None

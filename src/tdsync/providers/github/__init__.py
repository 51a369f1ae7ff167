"""GitHub Issues provider."""

from tdsync.providers.github.client import GhClient
from tdsync.providers.github.provider import GitHubProvider

__all__ = ["GhClient", "GitHubProvider"]

"""Remote tracker providers and their registry."""

from tdsync.providers.factory import (
    configured_providers,
    create_provider,
    default_push_provider,
    register,
    registered_providers,
)
from tdsync.providers.github import GitHubProvider
from tdsync.providers.jira import JiraProvider

register("github", GitHubProvider)
register("jira", JiraProvider)

__all__ = [
    "GitHubProvider",
    "JiraProvider",
    "configured_providers",
    "create_provider",
    "default_push_provider",
    "register",
    "registered_providers",
]

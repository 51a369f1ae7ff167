"""Field mapping between ``td`` issues and remote trackers."""

from tdsync.mapping.common import is_internal_label
from tdsync.mapping.github import GitHubMapper
from tdsync.mapping.jira import JiraMapper

__all__ = ["GitHubMapper", "JiraMapper", "is_internal_label"]

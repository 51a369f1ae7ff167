"""Jira Cloud field mapping.

Jira carries type and priority natively, and groups workflow statuses into
three status categories (``new``, ``indeterminate``, ``done``). Lookups of
Jira names are case-insensitive.
"""

from __future__ import annotations

from types import MappingProxyType

from tdsync.contracts.issue import IssueStatus, LocalIssue, RemoteIssue
from tdsync.contracts.mapper import Mapper
from tdsync.mapping.common import JIRA_LABEL_PREFIX, is_internal_label, remote_state_for

STATUS_CATEGORY_NEW = "new"
STATUS_CATEGORY_IN_PROGRESS = "indeterminate"
STATUS_CATEGORY_DONE = "done"

_JIRA_STATUS_TO_LOCAL = MappingProxyType(
    {
        STATUS_CATEGORY_NEW: IssueStatus.OPEN.value,
        STATUS_CATEGORY_IN_PROGRESS: IssueStatus.IN_PROGRESS.value,
        STATUS_CATEGORY_DONE: IssueStatus.CLOSED.value,
    }
)

_LOCAL_STATUS_TO_JIRA = MappingProxyType(
    {
        IssueStatus.OPEN.value: STATUS_CATEGORY_NEW,
        IssueStatus.IN_PROGRESS.value: STATUS_CATEGORY_IN_PROGRESS,
        IssueStatus.BLOCKED.value: STATUS_CATEGORY_IN_PROGRESS,
        IssueStatus.CLOSED.value: STATUS_CATEGORY_DONE,
    }
)

_JIRA_TYPE_TO_LOCAL = MappingProxyType({"bug": "bug", "story": "feature", "task": "task", "epic": "epic"})

_LOCAL_TYPE_TO_JIRA = MappingProxyType(
    {"bug": "Bug", "feature": "Story", "task": "Task", "epic": "Epic", "chore": "Task"}
)

_JIRA_PRIORITY_TO_LOCAL = MappingProxyType(
    {"highest": "p0", "high": "p1", "medium": "p2", "low": "p3", "lowest": "p4"}
)

_LOCAL_PRIORITY_TO_JIRA = MappingProxyType(
    {"p0": "Highest", "p1": "High", "p2": "Medium", "p3": "Low", "p4": "Lowest"}
)

DEFAULT_JIRA_TYPE = "Task"
DEFAULT_JIRA_PRIORITY = "Medium"


def map_jira_status_to_local(status_category: str) -> str:
    return _JIRA_STATUS_TO_LOCAL.get(status_category.lower(), IssueStatus.OPEN.value)


def map_local_status_to_jira(status: str) -> str:
    return _LOCAL_STATUS_TO_JIRA.get(status, STATUS_CATEGORY_NEW)


def map_jira_type_to_local(jira_type: str) -> str:
    return _JIRA_TYPE_TO_LOCAL.get(jira_type.lower(), "task")


def map_local_type_to_jira(issue_type: str) -> str:
    return _LOCAL_TYPE_TO_JIRA.get(issue_type, DEFAULT_JIRA_TYPE)


def map_jira_priority_to_local(priority: str) -> str:
    return _JIRA_PRIORITY_TO_LOCAL.get(priority.lower(), "p2")


def map_local_priority_to_jira(priority: str) -> str:
    return _LOCAL_PRIORITY_TO_JIRA.get(priority, DEFAULT_JIRA_PRIORITY)


class JiraMapper(Mapper):
    @property
    def sync_label_prefix(self) -> str:
        return JIRA_LABEL_PREFIX

    def is_internal_label(self, label: str) -> bool:
        return is_internal_label(label)

    def to_remote(self, issue: LocalIssue) -> RemoteIssue:
        # State stays the literal "open"/"closed" so the engine can branch on it
        # for any provider; the Jira provider turns it into a category transition.
        return RemoteIssue(
            title=issue.title,
            body=issue.description,
            state=remote_state_for(issue.status),
            labels=self.user_labels(issue.labels),
            type=map_local_type_to_jira(issue.type),
            priority=map_local_priority_to_jira(issue.priority),
            updated_at=issue.updated_at,
        )

    def to_local(self, issue: RemoteIssue) -> LocalIssue:
        return LocalIssue(
            title=issue.title,
            description=issue.body,
            status=map_jira_status_to_local(issue.state),
            type=map_jira_type_to_local(issue.type),
            priority=map_jira_priority_to_local(issue.priority),
            labels=self.user_labels(issue.labels),
            updated_at=issue.updated_at,
        )

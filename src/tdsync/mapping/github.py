"""GitHub field mapping.

GitHub issues only know ``open``/``closed``; ``td`` type and priority travel
as labels (``bug``/``enhancement``/``task`` and ``priority:<p>``).
"""

from __future__ import annotations

from types import MappingProxyType

from tdsync.contracts.issue import IssueStatus, IssueType, LocalIssue, RemoteIssue
from tdsync.contracts.mapper import Mapper
from tdsync.mapping.common import (
    GITHUB_LABEL_PREFIX,
    REMOTE_STATE_CLOSED,
    REMOTE_STATE_OPEN,
    is_internal_label,
    remote_state_for,
)

GITHUB_STATE_OPEN = REMOTE_STATE_OPEN
GITHUB_STATE_CLOSED = REMOTE_STATE_CLOSED

PRIORITY_LABEL_PREFIX = "priority:"

_TYPE_TO_LABEL = MappingProxyType(
    {
        IssueType.BUG: "bug",
        IssueType.FEATURE: "enhancement",
        IssueType.TASK: "task",
        IssueType.CHORE: "task",
    }
)

# Partial reverse of _TYPE_TO_LABEL: chore has no label of its own.
_LABEL_TO_TYPE = MappingProxyType(
    {
        "bug": IssueType.BUG.value,
        "enhancement": IssueType.FEATURE.value,
        "task": IssueType.TASK.value,
    }
)


def map_status_to_github(status: str) -> str:
    return remote_state_for(status)


def map_status_from_github(state: str) -> str:
    if state == GITHUB_STATE_CLOSED:
        return IssueStatus.CLOSED.value
    return IssueStatus.OPEN.value


def map_type_to_labels(issue_type: str) -> list[str]:
    label = _TYPE_TO_LABEL.get(issue_type)
    return [label] if label else []


def map_labels_to_type(labels: list[str]) -> str:
    for label in labels:
        issue_type = _LABEL_TO_TYPE.get(label)
        if issue_type:
            return issue_type
    return ""


def map_priority_to_label(priority: str) -> str:
    if not priority:
        return ""
    return PRIORITY_LABEL_PREFIX + priority


def map_label_to_priority(labels: list[str]) -> str:
    for label in labels:
        if label.startswith(PRIORITY_LABEL_PREFIX):
            return label.removeprefix(PRIORITY_LABEL_PREFIX)
    return ""


class GitHubMapper(Mapper):
    @property
    def sync_label_prefix(self) -> str:
        return GITHUB_LABEL_PREFIX

    def is_internal_label(self, label: str) -> bool:
        return is_internal_label(label)

    def to_remote(self, issue: LocalIssue) -> RemoteIssue:
        labels = map_type_to_labels(issue.type)
        priority_label = map_priority_to_label(issue.priority)
        if priority_label:
            labels.append(priority_label)
        labels.extend(self.user_labels(issue.labels))

        return RemoteIssue(
            title=issue.title,
            body=issue.description,
            state=map_status_to_github(issue.status),
            labels=labels,
            updated_at=issue.updated_at,
        )

    def to_local(self, issue: RemoteIssue) -> LocalIssue:
        user_labels = [
            label
            for label in issue.labels
            if not self.is_internal_label(label)
            and label not in _LABEL_TO_TYPE
            and not label.startswith(PRIORITY_LABEL_PREFIX)
        ]

        return LocalIssue(
            title=issue.title,
            description=issue.body,
            status=map_status_from_github(issue.state),
            type=map_labels_to_type(issue.labels),
            priority=map_label_to_priority(issue.labels),
            labels=user_labels,
            updated_at=issue.updated_at,
        )

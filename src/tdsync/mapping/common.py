"""Vocabulary shared by every mapper: sync-marker labels and normalized remote states."""

from __future__ import annotations

import re

from tdsync.contracts.issue import IssueStatus

# Mapper output state, independent of provider. The engine branches on these.
REMOTE_STATE_OPEN = "open"
REMOTE_STATE_CLOSED = "closed"

# Marker written by releases that only supported GitHub.
LEGACY_SYNC_LABEL = "td-sync"

GITHUB_LABEL_PREFIX = "gh:#"
JIRA_LABEL_PREFIX = "jira:"

_GITHUB_MARKER_RE = re.compile(rf"^{re.escape(GITHUB_LABEL_PREFIX)}\d+$")


def is_internal_label(label: str) -> bool:
    """True for labels the sync system writes for its own bookkeeping."""
    if label == LEGACY_SYNC_LABEL:
        return True
    if _GITHUB_MARKER_RE.match(label):
        return True
    return label.startswith(JIRA_LABEL_PREFIX) and len(label) > len(JIRA_LABEL_PREFIX)


def remote_state_for(status: str) -> str:
    # open, in_progress and blocked all collapse to "open".
    if status == IssueStatus.CLOSED:
        return REMOTE_STATE_CLOSED
    return REMOTE_STATE_OPEN

"""Issue contracts shared by mappers, providers, and the engine."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Zero value for timestamps that were never set; compares before any real timestamp.
EPOCH = datetime(1, 1, 1, tzinfo=UTC)


class IssueStatus(StrEnum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    CLOSED = "closed"


class IssueType(StrEnum):
    BUG = "bug"
    FEATURE = "feature"
    TASK = "task"
    CHORE = "chore"
    EPIC = "epic"


def _coerce_labels(value: Any) -> Any:
    return [] if value is None else value


_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, tolerating nanosecond precision."""
    return datetime.fromisoformat(_FRACTION_RE.sub(r"\1", value.strip()))


def coerce_timestamp(value: Any) -> Any:
    if value is None or value == "":
        return EPOCH
    if isinstance(value, str):
        return parse_timestamp(value)
    return value


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class LocalIssue(BaseModel):
    """A ``td`` issue as reported by ``td list --json`` / ``td show``.

    ``labels`` may contain internal sync-marker labels; use a mapper's
    ``is_internal_label`` to filter them before treating the set as user labels.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    title: str = ""
    description: str = ""
    status: str = IssueStatus.OPEN.value
    type: str = ""
    priority: str = ""
    labels: list[str] = Field(default_factory=list)
    updated_at: datetime = EPOCH

    @field_validator("labels", mode="before")
    @classmethod
    def labels_not_null(cls, value: Any) -> Any:
        return _coerce_labels(value)

    @field_validator("updated_at", mode="before")
    @classmethod
    def timestamp_not_null(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("updated_at")
    @classmethod
    def updated_at_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @field_validator("description", "type", "priority", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class RemoteIssue(BaseModel):
    """Normalized view of an issue held by an external tracker.

    ``state`` is provider-specific on the way in (``"open"``/``"closed"`` for
    GitHub, a status-category key for Jira) and always the literal
    ``"open"``/``"closed"`` when produced by a mapper for pushing.
    """

    id: str = ""
    title: str = ""
    body: str = ""
    state: str = ""
    labels: list[str] = Field(default_factory=list)
    type: str = ""
    priority: str = ""
    created_at: datetime = EPOCH
    updated_at: datetime = EPOCH

    @field_validator("labels", mode="before")
    @classmethod
    def labels_not_null(cls, value: Any) -> Any:
        return _coerce_labels(value)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def timestamps_not_null(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def is_closed(self) -> bool:
        return self.state == "closed"

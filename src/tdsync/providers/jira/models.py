"""Shapes of Jira REST API v3 responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class JiraStatusCategory(_Lenient):
    key: str = ""


class JiraStatus(_Lenient):
    name: str = ""
    status_category: JiraStatusCategory = Field(default_factory=JiraStatusCategory, alias="statusCategory")


class JiraNamed(_Lenient):
    name: str = ""


class JiraIssueFields(_Lenient):
    summary: str = ""
    description: Any = None
    status: JiraStatus = Field(default_factory=JiraStatus)
    issuetype: JiraNamed = Field(default_factory=JiraNamed)
    priority: JiraNamed = Field(default_factory=JiraNamed)
    labels: list[str] = Field(default_factory=list)
    created: str = ""
    updated: str = ""

    @field_validator("status", "issuetype", "priority", mode="before")
    @classmethod
    def null_as_default(cls, value: Any) -> Any:
        # Jira sends null for an unset priority.
        return {} if value is None else value

    @field_validator("labels", mode="before")
    @classmethod
    def labels_not_null(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("created", "updated", "summary", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class JiraIssue(_Lenient):
    key: str
    fields: JiraIssueFields = Field(default_factory=JiraIssueFields)


class JiraSearchResponse(_Lenient):
    issues: list[JiraIssue] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None, alias="nextPageToken")


class JiraCreatedIssue(_Lenient):
    key: str


class JiraTransitionTarget(_Lenient):
    status_category: JiraStatusCategory = Field(default_factory=JiraStatusCategory, alias="statusCategory")


class JiraTransition(_Lenient):
    id: str
    to: JiraTransitionTarget = Field(default_factory=JiraTransitionTarget)


class JiraTransitionsResponse(_Lenient):
    transitions: list[JiraTransition] = Field(default_factory=list)

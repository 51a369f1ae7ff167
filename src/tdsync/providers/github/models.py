"""Shapes of ``gh --json`` output."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tdsync.contracts.issue import EPOCH


class GhLabel(BaseModel):
    name: str


class GhIssue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: int
    title: str = ""
    body: str = ""
    state: str = ""
    labels: list[GhLabel] = Field(default_factory=list)
    updated_at: datetime = Field(default=EPOCH, alias="updatedAt")
    created_at: datetime = Field(default=EPOCH, alias="createdAt")


GH_ISSUE_FIELDS = "number,title,body,state,labels,updatedAt,createdAt"

gh_issue_list = TypeAdapter(list[GhIssue])
gh_label_list = TypeAdapter(list[GhLabel])

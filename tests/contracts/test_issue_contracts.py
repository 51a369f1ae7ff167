from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from tdsync.contracts.issue import EPOCH, LocalIssue, RemoteIssue, parse_timestamp
from tdsync.contracts.sync import SyncResult, SyncState, SyncStateEntry


def test_parse_timestamp_truncates_nanoseconds() -> None:
    assert parse_timestamp("2026-01-02T03:04:05.123456789Z") == datetime(2026, 1, 2, 3, 4, 5, 123456, tzinfo=UTC)


def test_timestamps_keep_offsets() -> None:
    issue = LocalIssue.model_validate({"updated_at": "2026-01-02T10:00:00+02:00"})

    assert issue.updated_at == datetime(2026, 1, 2, 10, tzinfo=timezone(timedelta(hours=2)))
    assert issue.updated_at == datetime(2026, 1, 2, 8, tzinfo=UTC)


def test_missing_or_null_fields_use_zero_values() -> None:
    issue = LocalIssue.model_validate({"id": "td-1", "labels": None, "description": None, "updated_at": None})

    assert issue.labels == []
    assert issue.description == ""
    assert issue.status == "open"
    assert issue.updated_at == EPOCH
    assert RemoteIssue.model_validate({"id": "1", "labels": None}).labels == []


def test_naive_timestamps_are_treated_as_utc() -> None:
    remote = RemoteIssue(updated_at=datetime(2026, 1, 2))

    assert remote.updated_at.tzinfo is UTC
    assert remote.updated_at > EPOCH


def test_remote_issue_closed_check_is_literal() -> None:
    assert RemoteIssue(state="closed").is_closed
    assert not RemoteIssue(state="done").is_closed


def test_state_lookup_by_either_id() -> None:
    state = SyncState.model_validate(
        {"providerID": "jira", "issues": {"td-1": {"externalID": "P-1"}, "td-2": {"externalID": "P-2"}}}
    )

    assert state.find_by_local_id("td-2") == SyncStateEntry(external_id="P-2")
    assert state.find_by_local_id("td-3") is None
    assert state.find_by_external_id("P-1") == ("td-1", SyncStateEntry(external_id="P-1"))
    assert state.find_by_external_id("P-9") == ("", None)


def test_sync_result_starts_empty() -> None:
    assert SyncResult().model_dump() == {"pulled": 0, "pushed": 0, "errors": []}

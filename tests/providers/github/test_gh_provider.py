from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from tdsync.contracts.exceptions import ProviderError, ProviderUnavailableError
from tdsync.contracts.issue import RemoteIssue
from tdsync.providers.github import GhClient, GitHubProvider


class _MockProcess:
    def __init__(self, returncode: int, stdout: bytes = b"", stderr: bytes = b"") -> None:
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self) -> tuple[bytes, bytes]:
        return self._stdout, self._stderr


class _ScriptedGh:
    """Answers subprocess calls by their leading arguments and records every call."""

    def __init__(self, responses: dict[tuple[str, ...], _MockProcess]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, *args: Any, **kwargs: Any) -> _MockProcess:
        self.calls.append(args)
        for prefix, process in self.responses.items():
            if args[: len(prefix)] == prefix:
                return process
        raise AssertionError(f"unexpected command: {args}")


class _InstalledGh(GhClient):
    def __init__(self, installed: bool = True) -> None:
        super().__init__()
        self._installed = installed

    def is_installed(self) -> bool:
        return self._installed


_LABELS = b'[{"name": "bug"}, {"name": "priority:p1"}]'


@pytest.mark.asyncio
async def test_create_issue_passes_only_existing_labels_and_parses_number(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    gh = _ScriptedGh(
        {
            ("gh", "label", "list"): _MockProcess(0, stdout=_LABELS),
            ("gh", "issue", "create"): _MockProcess(0, stdout=b"https://github.com/acme/app/issues/57\n"),
        }
    )
    monkeypatch.setattr("asyncio.create_subprocess_exec", gh)

    issue = RemoteIssue(title="Crash", body="Trace", labels=["bug", "priority:p1", "frontend"])
    number = await GitHubProvider().create_issue(tmp_path, issue)

    assert number == "57"
    assert gh.calls[-1] == (
        "gh",
        "issue",
        "create",
        "--title",
        "Crash",
        "--body",
        "Trace",
        "--label",
        "bug",
        "--label",
        "priority:p1",
    )


@pytest.mark.asyncio
async def test_create_issue_without_labels_skips_label_lookup(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    gh = _ScriptedGh({("gh", "issue", "create"): _MockProcess(0, stdout=b"https://github.com/acme/app/issues/8")})
    monkeypatch.setattr("asyncio.create_subprocess_exec", gh)

    assert await GitHubProvider().create_issue(tmp_path, RemoteIssue(title="T")) == "8"
    assert gh.calls == [("gh", "issue", "create", "--title", "T", "--body", "")]


@pytest.mark.asyncio
async def test_labels_are_dropped_when_label_list_fails(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    gh = _ScriptedGh(
        {
            ("gh", "label", "list"): _MockProcess(1, stderr=b"HTTP 403"),
            ("gh", "issue", "edit"): _MockProcess(0),
        }
    )
    monkeypatch.setattr("asyncio.create_subprocess_exec", gh)

    await GitHubProvider().update_issue(tmp_path, "5", RemoteIssue(title="T", body="B", labels=["bug"]))

    assert gh.calls[-1] == ("gh", "issue", "edit", "5", "--title", "T", "--body", "B")


@pytest.mark.asyncio
async def test_update_issue_adds_existing_labels(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    gh = _ScriptedGh(
        {
            ("gh", "label", "list"): _MockProcess(0, stdout=_LABELS),
            ("gh", "issue", "edit"): _MockProcess(0),
        }
    )
    monkeypatch.setattr("asyncio.create_subprocess_exec", gh)

    await GitHubProvider().update_issue(tmp_path, "5", RemoteIssue(title="T", body="B", labels=["bug", "ui"]))

    assert gh.calls[-1] == ("gh", "issue", "edit", "5", "--title", "T", "--body", "B", "--add-label", "bug")


@pytest.mark.asyncio
async def test_close_and_reopen(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    gh = _ScriptedGh(
        {
            ("gh", "issue", "close"): _MockProcess(0),
            ("gh", "issue", "reopen"): _MockProcess(1, stderr=b"issue is already open"),
        }
    )
    monkeypatch.setattr("asyncio.create_subprocess_exec", gh)
    provider = GitHubProvider()

    await provider.close_issue(tmp_path, "4")
    with pytest.raises(ProviderError, match="gh issue reopen 4: issue is already open"):
        await provider.reopen_issue(tmp_path, "4")


@pytest.mark.asyncio
async def test_list_issues_maps_gh_json(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    payload = (
        b'[{"number": 12, "title": "Crash", "body": "Trace", "state": "CLOSED",'
        b' "labels": [{"name": "bug"}, {"name": "gh:#12"}],'
        b' "updatedAt": "2026-01-02T03:04:05Z", "createdAt": "2026-01-01T00:00:00Z"}]'
    )
    monkeypatch.setattr(
        "asyncio.create_subprocess_exec", _ScriptedGh({("gh", "issue", "list"): _MockProcess(0, stdout=payload)})
    )

    issues = await GitHubProvider().list_issues(tmp_path)

    assert len(issues) == 1
    assert issues[0].id == "12"
    assert issues[0].state == "closed"
    assert issues[0].labels == ["bug", "gh:#12"]
    assert issues[0].updated_at == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


@pytest.mark.asyncio
async def test_check_available_requires_gh(tmp_path: Path) -> None:
    with pytest.raises(ProviderUnavailableError, match="gh CLI not found"):
        await GitHubProvider(client=_InstalledGh(installed=False)).check_available(tmp_path)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("git", "message"),
    [
        (_MockProcess(2, stderr=b"No such remote"), "no git remote 'origin' configured"),
        (_MockProcess(0, stdout=b"git@gitlab.com:acme/app.git\n"), "remote is not a GitHub repository"),
    ],
)
async def test_check_available_inspects_origin(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git: _MockProcess, message: str
) -> None:
    monkeypatch.setattr("asyncio.create_subprocess_exec", _ScriptedGh({("git", "remote"): git}))

    with pytest.raises(ProviderUnavailableError, match=message):
        await GitHubProvider(client=_InstalledGh()).check_available(tmp_path)


@pytest.mark.asyncio
async def test_check_available_accepts_github_origin(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        "asyncio.create_subprocess_exec",
        _ScriptedGh({("git", "remote"): _MockProcess(0, stdout=b"git@github.com:acme/app.git\n")}),
    )

    await GitHubProvider(client=_InstalledGh()).check_available(tmp_path)


def test_identity() -> None:
    provider = GitHubProvider()

    assert (provider.id, provider.name) == ("github", "GitHub")
    assert provider.mapper.sync_label("3") == "gh:#3"

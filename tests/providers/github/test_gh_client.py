from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from tdsync.contracts.exceptions import ProviderError
from tdsync.providers.github.client import GhClient


class _MockProcess:
    def __init__(self, returncode: int, stdout: bytes = b"", stderr: bytes = b"") -> None:
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self) -> tuple[bytes, bytes]:
        return self._stdout, self._stderr


class _HangingProcess(_MockProcess):
    def __init__(self) -> None:
        super().__init__(returncode=-9)
        self.killed = False
        self.waited = False
        self._exited = asyncio.Event()

    async def communicate(self) -> tuple[bytes, bytes]:
        await self._exited.wait()
        return b"", b""

    def kill(self) -> None:
        self.killed = True
        self._exited.set()

    async def wait(self) -> int:
        await self._exited.wait()
        self.waited = True
        return self.returncode


@pytest.mark.asyncio
async def test_run_passes_cwd_and_returns_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: dict[str, Any] = {}

    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        seen["args"] = args
        seen["cwd"] = kwargs["cwd"]
        return _MockProcess(returncode=0, stdout=b"ok\n")

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    result = await GhClient().run(["repo", "view"], cwd=tmp_path, operation="gh repo view")

    assert seen == {"args": ("gh", "repo", "view"), "cwd": tmp_path}
    assert result.stdout == "ok\n"


@pytest.mark.asyncio
async def test_run_raises_with_operation_and_stderr(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        return _MockProcess(returncode=1, stderr=b"could not find issue\n")

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    with pytest.raises(ProviderError, match="gh issue close 9: could not find issue"):
        await GhClient().run(["issue", "close", "9"], cwd=tmp_path, operation="gh issue close 9")


@pytest.mark.asyncio
async def test_run_reports_exit_status_without_stderr(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        return _MockProcess(returncode=4)

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    with pytest.raises(ProviderError, match="exit status 4"):
        await GhClient().run(["issue", "list"], cwd=tmp_path, operation="gh issue list")


@pytest.mark.asyncio
async def test_run_wraps_start_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        raise FileNotFoundError("gh")

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    with pytest.raises(ProviderError, match="gh issue list"):
        await GhClient().run(["issue", "list"], cwd=tmp_path, operation="gh issue list")


@pytest.mark.asyncio
async def test_list_issues_requests_all_states(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[tuple[str, ...]] = []
    payload = (
        b'[{"number": 3, "title": "A", "body": "", "state": "OPEN",'
        b' "labels": [{"name": "bug"}], "updatedAt": "2026-01-02T00:00:00Z", "createdAt": "2026-01-01T00:00:00Z"}]'
    )

    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        seen.append(args)
        return _MockProcess(returncode=0, stdout=payload)

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    issues = await GhClient().list_issues(tmp_path)

    assert seen == [
        (
            "gh",
            "issue",
            "list",
            "--json",
            "number,title,body,state,labels,updatedAt,createdAt",
            "--limit",
            "200",
            "--state",
            "all",
        )
    ]
    assert issues[0].number == 3
    assert [label.name for label in issues[0].labels] == ["bug"]


@pytest.mark.asyncio
async def test_list_issues_rejects_invalid_json(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        return _MockProcess(returncode=0, stdout=b"not json")

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    with pytest.raises(ProviderError, match="parse gh issues"):
        await GhClient().list_issues(tmp_path)


@pytest.mark.asyncio
async def test_origin_url_is_empty_when_git_fails(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _MockProcess:
        assert args == ("git", "remote", "get-url", "origin")
        return _MockProcess(returncode=2, stderr=b"error: No such remote 'origin'")

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    assert await GhClient().origin_url(tmp_path) == ""


@pytest.mark.asyncio
async def test_run_kills_gh_when_cancelled(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    proc = _HangingProcess()

    async def _mock_create_subprocess_exec(*args: Any, **kwargs: Any) -> _HangingProcess:
        return proc

    monkeypatch.setattr("asyncio.create_subprocess_exec", _mock_create_subprocess_exec)

    with pytest.raises(TimeoutError):
        async with asyncio.timeout(0.05):
            await GhClient().run(["issue", "create"], cwd=tmp_path, operation="gh issue create")

    assert proc.killed
    assert proc.waited

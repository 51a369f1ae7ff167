"""Async wrapper around the local ``td`` issue tracker CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from tdsync.contracts.exceptions import LocalTrackerError
from tdsync.contracts.issue import LocalIssue
from tdsync.process import CompletedProcess, run_process

_LOG = logging.getLogger(__name__)

_local_issue_list = TypeAdapter(list[LocalIssue])

LOCAL_ID_PREFIX = "td-"


def parse_created_id(output: str) -> str:
    """Extract the new issue ID from ``td create`` output such as ``Created issue td-a1b2c3``.

    Raises:
        LocalTrackerError: If the output is empty.
    """
    words = output.split()
    for word in words:
        if word.startswith(LOCAL_ID_PREFIX):
            return word
    if words:
        return words[-1]
    raise LocalTrackerError(f"could not parse issue ID from: {output.strip()!r}")


class TdClient:
    """Runs ``td`` inside one project working directory."""

    def __init__(self, work_dir: Path, binary: str = "td") -> None:
        self._work_dir = work_dir
        self._binary = binary

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    async def _run(self, args: list[str], *, operation: str) -> CompletedProcess:
        try:
            result = await run_process([self._binary, *args], cwd=self._work_dir)
        except OSError as exc:
            raise LocalTrackerError(f"{operation}: {exc}") from exc
        if not result.ok:
            raise LocalTrackerError(f"{operation}: {result.failure_detail()}")
        return result

    async def list_issues(self) -> list[LocalIssue]:
        result = await self._run(["list", "--json"], operation="td list --json")
        if not result.stdout.strip():
            return []
        try:
            return _local_issue_list.validate_json(result.stdout)
        except ValidationError as exc:
            raise LocalTrackerError(f"parse td issues: {exc}") from exc

    async def show_issue(self, local_id: str) -> LocalIssue:
        result = await self._run(["show", local_id, "-f", "json"], operation=f"td show {local_id}")
        try:
            return LocalIssue.model_validate_json(result.stdout)
        except ValidationError as exc:
            raise LocalTrackerError(f"parse td issue {local_id}: {exc}") from exc

    async def create_issue(self, issue: LocalIssue) -> str:
        """Create *issue* and return the ID ``td`` assigned to it.

        Status is not passed; ``td`` creates issues open.
        """
        args = ["create", issue.title]
        if issue.description:
            args.extend(["--description", issue.description])
        if issue.type:
            args.extend(["--type", issue.type])
        if issue.priority:
            args.extend(["--priority", issue.priority])
        if issue.labels:
            args.extend(["--labels", ",".join(issue.labels)])

        result = await self._run(args, operation="td create")
        local_id = parse_created_id(result.stdout)
        _LOG.debug("Created td issue %s", local_id)
        return local_id

    async def update_issue(self, local_id: str, issue: LocalIssue) -> None:
        """Write the non-empty fields of *issue* onto *local_id*.

        Empty fields are left untouched, so labels can never be cleared this way.
        """
        args = ["update", local_id]
        if issue.title:
            args.extend(["--title", issue.title])
        if issue.description:
            args.extend(["--description", issue.description])
        if issue.status:
            args.extend(["--status", issue.status])
        if issue.type:
            args.extend(["--type", issue.type])
        if issue.priority:
            args.extend(["--priority", issue.priority])
        if issue.labels:
            args.extend(["--labels", ",".join(issue.labels)])

        await self._run(args, operation=f"td update {local_id}")

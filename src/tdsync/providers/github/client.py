"""Async wrapper around the ``gh`` and ``git`` CLIs."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pydantic import ValidationError

from tdsync.contracts.exceptions import ProviderError
from tdsync.process import CompletedProcess, run_process
from tdsync.providers.github.models import GH_ISSUE_FIELDS, GhIssue, gh_issue_list, gh_label_list

_LOG = logging.getLogger(__name__)

ISSUE_LIST_LIMIT = 200
LABEL_LIST_LIMIT = 200


class GhClient:
    """Runs ``gh`` bound to the git repository in a working directory.

    Every call shells out; ``gh`` resolves the target repository from the
    working directory's git remote.
    """

    def __init__(self, binary: str = "gh") -> None:
        self._binary = binary

    def is_installed(self) -> bool:
        return shutil.which(self._binary) is not None

    async def run(self, args: list[str], *, cwd: Path, operation: str) -> CompletedProcess:
        """Execute ``gh <args>`` in *cwd*.

        Args:
            args: Arguments to pass to gh.
            cwd: Working directory (a GitHub-backed git checkout).
            operation: Short description used as the error prefix.

        Raises:
            ProviderError: If gh cannot be started or exits non-zero.
        """
        try:
            result = await run_process([self._binary, *args], cwd=cwd)
        except OSError as exc:
            raise ProviderError(f"{operation}: {exc}") from exc
        if not result.ok:
            raise ProviderError(f"{operation}: {result.failure_detail()}")
        return result

    async def list_issues(self, cwd: Path) -> list[GhIssue]:
        result = await self.run(
            [
                "issue",
                "list",
                "--json",
                GH_ISSUE_FIELDS,
                "--limit",
                str(ISSUE_LIST_LIMIT),
                "--state",
                "all",
            ],
            cwd=cwd,
            operation="gh issue list",
        )
        if not result.stdout.strip():
            return []
        try:
            return gh_issue_list.validate_json(result.stdout)
        except ValidationError as exc:
            raise ProviderError(f"parse gh issues: {exc}") from exc

    async def list_label_names(self, cwd: Path) -> set[str]:
        result = await self.run(
            ["label", "list", "--json", "name", "--limit", str(LABEL_LIST_LIMIT)],
            cwd=cwd,
            operation="gh label list",
        )
        if not result.stdout.strip():
            return set()
        try:
            labels = gh_label_list.validate_json(result.stdout)
        except ValidationError as exc:
            raise ProviderError(f"parse gh labels: {exc}") from exc
        return {label.name for label in labels}

    async def origin_url(self, cwd: Path) -> str:
        """URL of the ``origin`` remote, or ``""`` when there is none."""
        try:
            result = await run_process(["git", "remote", "get-url", "origin"], cwd=cwd)
        except OSError as exc:
            _LOG.debug("git remote get-url origin failed: %s", exc)
            return ""
        if not result.ok:
            return ""
        return result.stdout.strip()

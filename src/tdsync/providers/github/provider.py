"""GitHub Issues provider backed by the ``gh`` CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ProviderError, ProviderUnavailableError
from tdsync.contracts.issue import RemoteIssue
from tdsync.contracts.mapper import Mapper
from tdsync.contracts.provider import Provider
from tdsync.mapping.github import GitHubMapper
from tdsync.providers.github.client import GhClient
from tdsync.providers.github.models import GhIssue

_LOG = logging.getLogger(__name__)


class GitHubProvider(Provider):
    """Syncs with the GitHub repository behind the work directory's ``origin`` remote."""

    def __init__(self, *, client: GhClient | None = None) -> None:
        self._client = client or GhClient()
        self._mapper = GitHubMapper()

    @classmethod
    def from_config(cls, config: TdSyncConfig) -> GitHubProvider:
        return cls()

    @property
    def id(self) -> str:
        return "github"

    @property
    def name(self) -> str:
        return "GitHub"

    @property
    def mapper(self) -> Mapper:
        return self._mapper

    async def __aenter__(self) -> GitHubProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def check_available(self, work_dir: Path) -> None:
        if not self._client.is_installed():
            raise ProviderUnavailableError("gh CLI not found: install from https://cli.github.com")

        remote_url = await self._client.origin_url(work_dir)
        if not remote_url:
            raise ProviderUnavailableError("no git remote 'origin' configured")
        if "github.com" not in remote_url:
            raise ProviderUnavailableError("remote is not a GitHub repository")

    async def list_issues(self, work_dir: Path) -> list[RemoteIssue]:
        issues = await self._client.list_issues(work_dir)
        return [self._remote_from_gh(issue) for issue in issues]

    async def create_issue(self, work_dir: Path, issue: RemoteIssue) -> str:
        args = ["issue", "create", "--title", issue.title, "--body", issue.body]
        for label in await self._existing_labels(work_dir, issue.labels):
            args.extend(["--label", label])

        result = await self._client.run(args, cwd=work_dir, operation="gh issue create")

        # gh prints the new issue URL; the number is its last path segment.
        url = result.stdout.strip()
        number = url.rsplit("/", 1)[-1]
        if not number:
            raise ProviderError(f"unexpected output from gh issue create: {url!r}")
        return number

    async def update_issue(self, work_dir: Path, external_id: str, issue: RemoteIssue) -> None:
        args = ["issue", "edit", external_id, "--title", issue.title, "--body", issue.body]
        for label in await self._existing_labels(work_dir, issue.labels):
            args.extend(["--add-label", label])

        await self._client.run(args, cwd=work_dir, operation=f"gh issue edit {external_id}")

    async def close_issue(self, work_dir: Path, external_id: str) -> None:
        await self._client.run(["issue", "close", external_id], cwd=work_dir, operation=f"gh issue close {external_id}")

    async def reopen_issue(self, work_dir: Path, external_id: str) -> None:
        await self._client.run(
            ["issue", "reopen", external_id], cwd=work_dir, operation=f"gh issue reopen {external_id}"
        )

    async def _existing_labels(self, work_dir: Path, labels: list[str]) -> list[str]:
        """Keep only *labels* already defined on the repository.

        Labeling is best-effort: if the repository labels cannot be listed,
        the issue is written without labels.
        """
        if not labels:
            return []
        try:
            repo_labels = await self._client.list_label_names(work_dir)
        except ProviderError as exc:
            _LOG.warning("Skipping labels, could not list repository labels: %s", exc)
            return []
        dropped = [label for label in labels if label not in repo_labels]
        if dropped:
            _LOG.debug("Dropping labels missing from repository: %s", ", ".join(dropped))
        return [label for label in labels if label in repo_labels]

    @staticmethod
    def _remote_from_gh(issue: GhIssue) -> RemoteIssue:
        return RemoteIssue(
            id=str(issue.number),
            title=issue.title,
            body=issue.body,
            state=issue.state.lower(),
            labels=[label.name for label in issue.labels],
            created_at=issue.created_at,
            updated_at=issue.updated_at,
        )

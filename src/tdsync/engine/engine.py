"""Reconciliation between the local ``td`` tracker and one remote provider.

Conflicts are resolved by last-sync timestamps, not by merging: each
direction only asks whether its own side changed since that side's last
recorded sync. If both sides changed, whichever of ``pull``/``push`` runs
last overwrites the other without warning.

Issues are handled one at a time with no retry. State is written once at the
end of a call. A cancelled call (the CLI timeout, Ctrl-C) still writes the
pairings recorded so far before the cancellation propagates, so issues
already created on either side are not created again by the next run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from tdsync.contracts.exceptions import LocalTrackerError, ProviderError, SyncError, SyncStateError
from tdsync.contracts.issue import IssueStatus, LocalIssue, RemoteIssue
from tdsync.contracts.provider import Provider
from tdsync.contracts.sync import SyncResult, SyncState, SyncStateEntry
from tdsync.engine.progress import NullSyncProgress, SyncProgress
from tdsync.local.td import TdClient
from tdsync.state.store import load_state, save_state

_LOG = logging.getLogger(__name__)

PHASE_PULL = "Pull"
PHASE_PUSH = "Push"
PHASE_PUSH_ONE = "Push one"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SyncEngine:
    """Runs pull and push passes for one provider in one work directory.

    The provider must already be entered (``async with provider``) and its
    availability checked by the caller.
    """

    def __init__(
        self,
        provider: Provider,
        *,
        work_dir: Path,
        state_dir: Path,
        local: TdClient | None = None,
        progress: SyncProgress | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._provider = provider
        self._mapper = provider.mapper
        self._work_dir = work_dir
        self._state_dir = state_dir
        self._local = local or TdClient(work_dir)
        self._progress: SyncProgress = progress or NullSyncProgress()
        self._now = now

    async def pull(self) -> SyncResult:
        """Create or update local issues from every remote issue.

        Raises:
            ProviderError: If the remote issues cannot be listed.
            SyncStateError: If the state file cannot be loaded.
            SyncError: If the state cannot be saved; ``result`` holds the pass outcome.
        """
        self._progress.phase_start(PHASE_PULL)
        try:
            remote_issues = await self._provider.list_issues(self._work_dir)
            state = load_state(self._state_dir, self._provider.id)
            self._progress.phase_start(PHASE_PULL, total=len(remote_issues))

            result = SyncResult()
            try:
                for remote in remote_issues:
                    errors_before = len(result.errors)
                    await self._pull_issue(remote, state, result)
                    self._progress.item_done(PHASE_PULL, failed=len(result.errors) > errors_before)
            except asyncio.CancelledError:
                self._save_on_cancel(state)
                raise

            self._save(state, result)
        except BaseException as exc:
            self._progress.phase_error(PHASE_PULL, exc)
            raise
        self._progress.phase_done(PHASE_PULL)
        return result

    async def push(self) -> SyncResult:
        """Create or update remote issues from every local issue.

        Raises:
            LocalTrackerError: If the local issues cannot be listed.
            SyncStateError: If the state file cannot be loaded.
            SyncError: If the state cannot be saved; ``result`` holds the pass outcome.
        """
        self._progress.phase_start(PHASE_PUSH)
        try:
            local_issues = await self._local.list_issues()
            state = load_state(self._state_dir, self._provider.id)
            self._progress.phase_start(PHASE_PUSH, total=len(local_issues))

            result = SyncResult()
            try:
                for issue in local_issues:
                    errors_before = len(result.errors)
                    try:
                        await self._push_issue(issue, state, result)
                    except ProviderError as exc:
                        result.errors.append(str(exc))
                    self._progress.item_done(PHASE_PUSH, failed=len(result.errors) > errors_before)
            except asyncio.CancelledError:
                self._save_on_cancel(state)
                raise

            self._save(state, result)
        except BaseException as exc:
            self._progress.phase_error(PHASE_PUSH, exc)
            raise
        self._progress.phase_done(PHASE_PUSH)
        return result

    async def push_one(self, local_id: str) -> SyncResult:
        """Push a single local issue.

        Unlike ``push``, a failure of the create/update call itself is raised;
        failures of the follow-up close, reopen or label steps are collected
        in ``errors``.

        Raises:
            LocalTrackerError: If the issue cannot be read locally.
            ProviderError: If the remote create or update fails.
            SyncStateError: If the state file cannot be loaded.
            SyncError: If the state cannot be saved; ``result`` holds the outcome.
        """
        self._progress.phase_start(PHASE_PUSH_ONE, total=1)
        try:
            issue = await self._local.show_issue(local_id)
            state = load_state(self._state_dir, self._provider.id)

            result = SyncResult()
            try:
                await self._push_issue(issue, state, result)
            except asyncio.CancelledError:
                self._save_on_cancel(state)
                raise
            self._progress.item_done(PHASE_PUSH_ONE, failed=bool(result.errors))

            self._save(state, result)
        except BaseException as exc:
            self._progress.phase_error(PHASE_PUSH_ONE, exc)
            raise
        self._progress.phase_done(PHASE_PUSH_ONE)
        return result

    async def _pull_issue(self, remote: RemoteIssue, state: SyncState, result: SyncResult) -> None:
        local_id, entry = state.find_by_external_id(remote.id)
        mapped = self._mapper.to_local(remote)
        sync_label = self._mapper.sync_label(remote.id)

        if entry is not None:
            if remote.updated_at <= entry.remote_updated_at:
                return
            if sync_label not in mapped.labels:
                mapped.labels.append(sync_label)
            try:
                await self._local.update_issue(local_id, mapped)
            except LocalTrackerError as exc:
                result.errors.append(f"update td {local_id}: {exc}")
                return
            state.issues[local_id] = SyncStateEntry(
                external_id=remote.id,
                local_updated_at=self._now(),
                remote_updated_at=remote.updated_at,
            )
            result.pulled += 1
            return

        try:
            local_id = await self._local.create_issue(mapped)
        except LocalTrackerError as exc:
            result.errors.append(f"create td for {self._provider.name} {remote.id}: {exc}")
            return

        state.issues[local_id] = SyncStateEntry(
            external_id=remote.id,
            local_updated_at=self._now(),
            remote_updated_at=remote.updated_at,
        )
        result.pulled += 1

        # td creates issues open and without our marker; both need a second call.
        follow_up = LocalIssue(
            status="" if mapped.status == IssueStatus.OPEN.value else mapped.status,
            labels=[*mapped.labels, sync_label],
        )
        try:
            await self._local.update_issue(local_id, follow_up)
        except LocalTrackerError as exc:
            result.errors.append(f"update td {local_id}: {exc}")

    async def _push_issue(self, issue: LocalIssue, state: SyncState, result: SyncResult) -> None:
        """Push one local issue.

        Failures of the primary create/update call are raised; follow-up
        failures are appended to ``result.errors``.
        """
        entry = state.find_by_local_id(issue.id)
        remote = self._mapper.to_remote(issue)
        name = self._provider.name

        if entry is not None:
            if issue.updated_at <= entry.local_updated_at:
                return
            external_id = entry.external_id
            try:
                await self._provider.update_issue(self._work_dir, external_id, remote)
            except ProviderError as exc:
                raise ProviderError(f"update {name} {external_id}: {exc}") from exc

            if remote.is_closed:
                await self._close(external_id, result)
            else:
                try:
                    await self._provider.reopen_issue(self._work_dir, external_id)
                except ProviderError as exc:
                    # Providers may reject reopening an issue that is already open.
                    _LOG.debug("Ignoring reopen failure for %s %s: %s", name, external_id, exc)

            state.issues[issue.id] = SyncStateEntry(
                external_id=external_id,
                local_updated_at=issue.updated_at,
                remote_updated_at=self._now(),
            )
            result.pushed += 1
            return

        try:
            external_id = await self._provider.create_issue(self._work_dir, remote)
        except ProviderError as exc:
            raise ProviderError(f"create {name} issue for {issue.id}: {exc}") from exc
        _LOG.debug("Created %s issue %s for %s", name, external_id, issue.id)
        # Recorded before the follow-up calls so a cancelled pass cannot lose the pairing.
        entry = SyncStateEntry(
            external_id=external_id,
            local_updated_at=issue.updated_at,
            remote_updated_at=self._now(),
        )
        state.issues[issue.id] = entry
        result.pushed += 1

        if remote.is_closed:
            await self._close(external_id, result)

        sync_label = self._mapper.sync_label(external_id)
        if sync_label not in issue.labels:
            try:
                await self._local.update_issue(issue.id, LocalIssue(status="", labels=[*issue.labels, sync_label]))
            except LocalTrackerError as exc:
                result.errors.append(f"label td {issue.id} with {sync_label}: {exc}")
            else:
                # The label write bumps td's timestamp; it must not count as a local edit.
                entry.local_updated_at = self._now()

    async def _close(self, external_id: str, result: SyncResult) -> None:
        try:
            await self._provider.close_issue(self._work_dir, external_id)
        except ProviderError as exc:
            result.errors.append(f"close {self._provider.name} {external_id}: {exc}")

    def _save(self, state: SyncState, result: SyncResult) -> None:
        try:
            save_state(self._state_dir, self._provider.id, state)
        except SyncStateError as exc:
            raise SyncError(f"save sync state: {exc}", result=result) from exc

    def _save_on_cancel(self, state: SyncState) -> None:
        """Persist what a cancelled pass recorded; the cancellation itself still propagates."""
        try:
            save_state(self._state_dir, self._provider.id, state)
        except SyncStateError as exc:
            _LOG.warning("Could not save sync state after cancellation: %s", exc)
        else:
            _LOG.debug("Saved %d sync state entries after cancellation", len(state.issues))

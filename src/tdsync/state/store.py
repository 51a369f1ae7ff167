"""Sync state persistence.

Each provider keeps its own ``<provider>-sync.json`` in the tracker-state
directory. GitHub state written by older releases as ``gh-sync.json`` is
migrated on first load; the legacy file is left in place.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tdsync.contracts.exceptions import SyncStateError
from tdsync.contracts.issue import EPOCH, coerce_timestamp, ensure_aware
from tdsync.contracts.sync import SyncState, SyncStateEntry

_LOG = logging.getLogger(__name__)

LEGACY_GITHUB_STATE_FILE = "gh-sync.json"


def state_filename(provider_id: str) -> str:
    return f"{provider_id}-sync.json"


class _LegacyEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gh_number: int = Field(alias="ghNumber")
    td_updated_at: datetime = Field(default=EPOCH, alias="tdUpdatedAt")
    gh_updated_at: datetime = Field(default=EPOCH, alias="ghUpdatedAt")

    @field_validator("td_updated_at", "gh_updated_at", mode="before")
    @classmethod
    def timestamps_not_null(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("td_updated_at", "gh_updated_at")
    @classmethod
    def timestamps_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class _LegacyGitHubState(BaseModel):
    owner: str = ""
    repo: str = ""
    issues: dict[str, _LegacyEntry] = Field(default_factory=dict)

    @field_validator("issues", mode="before")
    @classmethod
    def issues_not_null(cls, value: Any) -> Any:
        return {} if value is None else value


def load_state(state_dir: Path, provider_id: str) -> SyncState:
    """Load the sync state for *provider_id*.

    A missing file yields an empty state (after trying legacy migration for
    ``"github"``).

    Raises:
        SyncStateError: If the file exists but cannot be read or parsed.
    """
    path = state_dir / state_filename(provider_id)
    if not path.exists():
        if provider_id == "github":
            return _migrate_legacy_github_state(state_dir)
        return SyncState(provider_id=provider_id)

    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
        return SyncState.model_validate(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise SyncStateError(f"invalid sync state file: {path}") from exc


def save_state(state_dir: Path, provider_id: str, state: SyncState) -> None:
    """Write *state* as ``<provider_id>-sync.json`` under *state_dir*.

    Raises:
        SyncStateError: If the file cannot be written.
    """
    path = state_dir / state_filename(provider_id)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(state.model_dump_json(indent=2, by_alias=True, exclude_none=True), encoding="utf-8")
    except OSError as exc:
        raise SyncStateError(f"failed to write sync state: {path}") from exc


def _migrate_legacy_github_state(state_dir: Path) -> SyncState:
    legacy_path = state_dir / LEGACY_GITHUB_STATE_FILE
    if not legacy_path.exists():
        return SyncState(provider_id="github")

    try:
        legacy = _LegacyGitHubState.model_validate_json(legacy_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise SyncStateError(f"parse legacy {LEGACY_GITHUB_STATE_FILE}: {legacy_path}") from exc

    state = SyncState(
        provider_id="github",
        provider_meta={"owner": legacy.owner, "repo": legacy.repo},
        issues={
            local_id: SyncStateEntry(
                external_id=str(entry.gh_number),
                local_updated_at=entry.td_updated_at,
                remote_updated_at=entry.gh_updated_at,
            )
            for local_id, entry in legacy.issues.items()
        },
    )
    save_state(state_dir, "github", state)
    _LOG.info("Migrated %d entries from %s", len(state.issues), legacy_path)
    return state

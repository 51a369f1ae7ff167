"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class GitHubIntegrationConfig(BaseModel):
    enabled: bool = True


class JiraIntegrationConfig(BaseModel):
    enabled: bool = False
    url: str = ""
    email: str = ""
    api_token: str = ""
    project_key: str = ""

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.url) and bool(self.api_token)


class IntegrationsConfig(BaseModel):
    github: GitHubIntegrationConfig = Field(default_factory=GitHubIntegrationConfig)
    jira: JiraIntegrationConfig = Field(default_factory=JiraIntegrationConfig)


class TdSyncConfig(BaseModel):
    """Top-level configuration for ``tdsync``.

    Attributes:
        integrations: Per-provider settings.
        state_dir: Tracker-state directory holding ``<provider>-sync.json`` files,
            relative to the work directory unless absolute.
        td_binary: Name or path of the local tracker CLI.
        timeout_seconds: Upper bound for a whole sync command and for each Jira request.
    """

    integrations: IntegrationsConfig = Field(default_factory=IntegrationsConfig)
    state_dir: Path = Path(".todos")
    td_binary: str = "td"
    timeout_seconds: float = Field(default=30.0, gt=0)

    def resolve_state_dir(self, work_dir: Path) -> Path:
        if self.state_dir.is_absolute():
            return self.state_dir
        return work_dir / self.state_dir

"""Jira Cloud provider over the REST API v3."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ProviderError, ProviderUnavailableError, TransitionNotFoundError
from tdsync.contracts.issue import EPOCH, RemoteIssue, ensure_aware
from tdsync.contracts.mapper import Mapper
from tdsync.contracts.provider import Provider
from tdsync.mapping.jira import (
    DEFAULT_JIRA_PRIORITY,
    DEFAULT_JIRA_TYPE,
    STATUS_CATEGORY_DONE,
    STATUS_CATEGORY_NEW,
    JiraMapper,
)
from tdsync.providers.jira.adf import adf_to_text, text_to_adf
from tdsync.providers.jira.models import (
    JiraCreatedIssue,
    JiraIssue,
    JiraSearchResponse,
    JiraTransitionsResponse,
)

_LOG = logging.getLogger(__name__)

API_PREFIX = "/rest/api/3"
SEARCH_PAGE_SIZE = 200
SEARCH_FIELDS = "summary,description,status,issuetype,priority,labels,created,updated"

_JIRA_TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S.%fZ",
)


def parse_jira_time(value: str) -> datetime:
    """Parse a Jira timestamp such as ``2024-01-15T10:30:00.000+0000``.

    Raises:
        ValueError: If *value* matches none of the accepted layouts.
    """
    for fmt in _JIRA_TIME_FORMATS:
        try:
            return ensure_aware(datetime.strptime(value, fmt))
        except ValueError:
            continue
    return ensure_aware(datetime.fromisoformat(value))


class JiraProvider(Provider):
    """Syncs with one Jira Cloud project.

    Requests authenticate with HTTP Basic auth built from the account email
    and API token. An ``http_client`` may be injected (tests pass one backed
    by ``httpx.MockTransport``); it is then left open on exit.
    """

    def __init__(
        self,
        *,
        url: str,
        project_key: str,
        email: str,
        api_token: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._url = url.rstrip("/")
        self._project_key = project_key
        self._email = email
        self._api_token = api_token
        self._timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None
        self._auth = httpx.BasicAuth(email, api_token)
        self._mapper = JiraMapper()

    @classmethod
    def from_config(cls, config: TdSyncConfig) -> JiraProvider:
        jira = config.integrations.jira
        return cls(
            url=jira.url,
            project_key=jira.project_key,
            email=jira.email,
            api_token=jira.api_token,
            timeout=config.timeout_seconds,
        )

    @property
    def id(self) -> str:
        return "jira"

    @property
    def name(self) -> str:
        return "Jira"

    @property
    def mapper(self) -> Mapper:
        return self._mapper

    async def __aenter__(self) -> JiraProvider:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._url,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def check_available(self, work_dir: Path) -> None:
        if not self._url:
            raise ProviderUnavailableError("Jira URL not configured (set JIRA_URL or run 'tdsync setup-jira')")
        if not self._api_token:
            raise ProviderUnavailableError("Jira API token not configured (set JIRA_API_TOKEN)")
        if not self._email:
            raise ProviderUnavailableError("Jira email not configured (set JIRA_EMAIL)")

        client = self._require_client()
        try:
            response = await client.get(f"{self._url}{API_PREFIX}/myself", auth=self._auth)
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(f"cannot reach Jira at {self._url}: {exc}") from exc
        if response.status_code != 200:
            raise ProviderUnavailableError(f"Jira auth failed (HTTP {response.status_code})")

    async def list_issues(self, work_dir: Path) -> list[RemoteIssue]:
        issues: list[RemoteIssue] = []
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {
                "jql": f"project={self._project_key} ORDER BY updated DESC",
                "maxResults": SEARCH_PAGE_SIZE,
                "fields": SEARCH_FIELDS,
            }
            if page_token:
                params["nextPageToken"] = page_token

            payload = await self._request("GET", "/search/jql", params=params)
            try:
                page = JiraSearchResponse.model_validate(payload or {})
            except ValidationError as exc:
                raise ProviderError(f"parse Jira search response: {exc}") from exc

            issues.extend(self._remote_from_jira(issue) for issue in page.issues)
            if not page.next_page_token:
                return issues
            page_token = page.next_page_token

    async def create_issue(self, work_dir: Path, issue: RemoteIssue) -> str:
        fields: dict[str, Any] = {
            "project": {"key": self._project_key},
            "summary": issue.title,
            "description": text_to_adf(issue.body).to_payload(),
            "issuetype": {"name": issue.type or DEFAULT_JIRA_TYPE},
            "priority": {"name": issue.priority or DEFAULT_JIRA_PRIORITY},
        }
        if issue.labels:
            fields["labels"] = issue.labels

        payload = await self._request("POST", "/issue", json={"fields": fields})
        try:
            created = JiraCreatedIssue.model_validate(payload or {})
        except ValidationError as exc:
            raise ProviderError(f"parse Jira create response: {exc}") from exc
        _LOG.debug("Created Jira issue %s", created.key)
        return created.key

    async def update_issue(self, work_dir: Path, external_id: str, issue: RemoteIssue) -> None:
        # Issue type is only set on create.
        fields: dict[str, Any] = {
            "summary": issue.title,
            "description": text_to_adf(issue.body).to_payload(),
            "priority": {"name": issue.priority or DEFAULT_JIRA_PRIORITY},
        }
        if issue.labels:
            fields["labels"] = issue.labels
        await self._request("PUT", f"/issue/{external_id}", json={"fields": fields})

    async def close_issue(self, work_dir: Path, external_id: str) -> None:
        await self._transition_to(external_id, STATUS_CATEGORY_DONE)

    async def reopen_issue(self, work_dir: Path, external_id: str) -> None:
        await self._transition_to(external_id, STATUS_CATEGORY_NEW)

    async def _transition_to(self, issue_key: str, category: str) -> None:
        """Apply the first workflow transition that lands in *category*."""
        payload = await self._request("GET", f"/issue/{issue_key}/transitions")
        try:
            available = JiraTransitionsResponse.model_validate(payload or {})
        except ValidationError as exc:
            raise ProviderError(f"parse Jira transitions for {issue_key}: {exc}") from exc

        for transition in available.transitions:
            if transition.to.status_category.key == category:
                await self._request(
                    "POST",
                    f"/issue/{issue_key}/transitions",
                    json={"transition": {"id": transition.id}},
                )
                return

        raise TransitionNotFoundError(
            f"no transition to {category!r} found for {issue_key}",
            issue_key=issue_key,
            category=category,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send one API request and decode its JSON body.

        Returns:
            Decoded JSON, or ``None`` for an empty (e.g. 204) response.

        Raises:
            ProviderError: On transport failure, non-2xx status, or invalid JSON.
        """
        client = self._require_client()
        url = f"{self._url}{API_PREFIX}{path}"
        try:
            response = await client.request(method, url, params=params, json=json, auth=self._auth)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Jira API {method} {path}: {exc}") from exc

        if not response.is_success:
            raise ProviderError(f"Jira API {method} {response.status_code}: {_error_detail(response)}")

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"Jira API {method} {path}: invalid JSON response") from exc

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ProviderError("JiraProvider must be used inside 'async with'")
        return self._client

    @staticmethod
    def _remote_from_jira(issue: JiraIssue) -> RemoteIssue:
        fields = issue.fields
        return RemoteIssue(
            id=issue.key,
            title=fields.summary,
            body=adf_to_text(fields.description),
            state=fields.status.status_category.key,
            labels=fields.labels,
            type=fields.issuetype.name,
            priority=fields.priority.name,
            created_at=_parse_or_epoch(fields.created, issue.key, "created"),
            updated_at=_parse_or_epoch(fields.updated, issue.key, "updated"),
        )


def _parse_or_epoch(value: str, issue_key: str, field: str) -> datetime:
    if not value:
        return EPOCH
    try:
        return parse_jira_time(value)
    except ValueError:
        _LOG.warning("Unparseable %s time %r on %s, treating as unset", field, value, issue_key)
        return EPOCH


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    messages = body.get("errorMessages") if isinstance(body, dict) else None
    if messages:
        return "; ".join(str(message) for message in messages)
    return response.text

"""Jira API client wrapper (REST v3 issue, changelog and comment pagination)."""

from __future__ import annotations

from typing import Any

from jira import JIRA, JIRAError

from .config import JIRA_PAGE_SIZE
from .errors import JiraFetchError


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )

    def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraFetchError("JIRA session unavailable")
        resp = session.get(f"{self.server}/rest/api/3/{path}", params=params)
        if resp.status_code >= 400:
            raise JiraFetchError(f"GET {path} failed {resp.status_code}: {resp.text[:200]}")
        return resp.json()

    def _paged(self, path: str, list_key: str, page_size: int) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        start_at = 0
        while True:
            data = self._get_json(path, {"startAt": start_at, "maxResults": page_size})
            page = data.get(list_key) or []
            out.extend(page)
            start_at += len(page)
            total = data.get("total")
            if not page or data.get("isLast") is True or (isinstance(total, int) and start_at >= total):
                break
        return out

    def fetch_issue_raw(self, issue_key: str) -> dict[str, Any]:
        """Fetch an issue with its complete changelog.

        The embedded changelog is capped by Jira; when it reports more entries
        than it carries, the dedicated changelog endpoint is paged instead.
        """
        try:
            issue = self.client.issue(issue_key, expand="changelog")
        except JIRAError as exc:  # pragma: no cover - network error path
            raise JiraFetchError(f"Failed to fetch issue {issue_key}: {exc}") from exc
        if hasattr(issue, "raw"):
            raw = issue.raw
        elif isinstance(issue, dict):
            raw = issue
        else:
            raise JiraFetchError(f"Unexpected issue payload type for {issue_key}: {type(issue)!r}")

        changelog = raw.get("changelog") or {}
        histories = changelog.get("histories") or []
        total = changelog.get("total")
        if isinstance(total, int) and total > len(histories):
            full = self._paged(f"issue/{issue_key}/changelog", "values", JIRA_PAGE_SIZE)
            raw["changelog"] = {"histories": full, "total": len(full)}
        return raw

    def fetch_comments(self, issue_key: str, page_size: int = JIRA_PAGE_SIZE) -> dict[str, Any]:
        comments = self._paged(f"issue/{issue_key}/comment", "comments", page_size)
        return {"comments": comments, "total": len(comments)}

"""Mapping raw Jira issue and comment JSON into domain values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import ChangeItem, ChangeRecord


def _issue_fields(issue: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(issue, Mapping):
        return {}
    fields = issue.get("fields")
    return fields if isinstance(fields, Mapping) else {}


def _map_change_item(item: Any) -> ChangeItem | None:
    if isinstance(item, Mapping):
        return ChangeItem(
            field=item.get("field"),
            from_string=item.get("fromString"),
            to_string=item.get("toString"),
        )
    # jira.resources objects expose the same attributes
    if hasattr(item, "field"):
        return ChangeItem(
            field=getattr(item, "field", None),
            from_string=getattr(item, "fromString", None),
            to_string=getattr(item, "toString", None),
        )
    return None


def map_change_records(issue: Mapping[str, Any] | None) -> list[ChangeRecord]:
    """Extract the changelog histories of a raw issue as ChangeRecords.

    Returns an empty list when the issue has no changelog or histories. Order
    is preserved exactly as delivered by Jira (callers sort when needed).
    """
    if not isinstance(issue, Mapping):
        return []
    changelog = issue.get("changelog")
    if not isinstance(changelog, Mapping):
        return []
    histories = changelog.get("histories")
    if not isinstance(histories, list):
        return []
    records: list[ChangeRecord] = []
    for history in histories:
        if not isinstance(history, Mapping):
            continue
        items = []
        for raw_item in history.get("items") or []:
            item = _map_change_item(raw_item)
            if item is not None:
                items.append(item)
        records.append(ChangeRecord(created=history.get("created"), items=tuple(items)))
    return records


def extract_comments(comments_response: Mapping[str, Any] | None) -> list[Mapping[str, Any]]:
    if not isinstance(comments_response, Mapping):
        return []
    comments = comments_response.get("comments")
    if not isinstance(comments, list):
        return []
    return [c for c in comments if isinstance(c, Mapping)]


def issue_type_name(issue: Mapping[str, Any] | None) -> str | None:
    issuetype = _issue_fields(issue).get("issuetype")
    if isinstance(issuetype, Mapping):
        name = issuetype.get("name")
        return name if isinstance(name, str) else None
    return None


def sprint_memberships(issue: Mapping[str, Any] | None, field_id: str) -> list[Any]:
    value = _issue_fields(issue).get(field_id)
    return value if isinstance(value, list) else []


def story_points(issue: Mapping[str, Any] | None, field_id: str) -> float | None:
    value = _issue_fields(issue).get(field_id)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)

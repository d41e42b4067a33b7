"""Status transition extraction from an issue's changelog."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jira_assess.core.config import STATUS_FIELD
from jira_assess.core.mappers import map_change_records
from jira_assess.core.models import ChangeItem, ChangeRecord, StatusTransition
from jira_assess.core.status import classify_status

from .dates import normalize_timestamp


def _chronological_key(record: ChangeRecord) -> tuple[int, int]:
    # Unparseable timestamps sort ahead of everything, keeping input order
    ts = normalize_timestamp(record.created)
    if ts is None:
        return (0, 0)
    return (1, ts.value)


def is_field(item: ChangeItem, name: str) -> bool:
    return str(item.field or "").lower() == name


def sort_change_records(records: list[ChangeRecord]) -> list[ChangeRecord]:
    """Stable-sort change records ascending by their creation timestamp."""
    return sorted(records, key=_chronological_key)


def create_transition(item: ChangeItem, timestamp: str | None) -> StatusTransition:
    return StatusTransition(
        from_status=item.from_string,
        to_status=item.to_string,
        from_category=classify_status(item.from_string),
        to_category=classify_status(item.to_string),
        timestamp=timestamp,
    )


def extract_status_transitions(issue: Mapping[str, Any] | None) -> list[StatusTransition]:
    """Extract all status transitions from an issue's changelog.

    Histories are ordered by their ``created`` timestamp first, so the result
    is chronological even when Jira delivers the changelog out of order.
    Several status edits inside one history entry keep their item order.

    Parameters
    ----------
    issue : Mapping | None
        Raw Jira issue JSON (``changelog.histories`` is read).

    Returns
    -------
    list[StatusTransition]
        One transition per status field edit, or an empty list when the issue
        has no changelog.
    """
    transitions: list[StatusTransition] = []
    for record in sort_change_records(map_change_records(issue)):
        for item in record.items:
            if is_field(item, STATUS_FIELD):
                transitions.append(create_transition(item, record.created))
    return transitions

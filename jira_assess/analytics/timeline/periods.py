"""Convert ordered status transitions into status-occupancy periods."""

from __future__ import annotations

from collections.abc import Sequence

from jira_assess.core.models import StatusPeriod, StatusTransition


def build_status_periods(transitions: Sequence[StatusTransition]) -> list[StatusPeriod]:
    """Build contiguous status periods from chronologically sorted transitions.

    The issue enters ``transitions[0].to_status`` at the first timestamp. Each
    later transition closes the current period and opens the next one. The
    last period stays open (``end_time`` is None). Periods whose status is
    unknown (a transition to a null status) are not emitted, and repeated
    visits to one status stay separate periods.
    """
    if not transitions:
        return []

    periods: list[StatusPeriod] = []
    first = transitions[0]
    current_status = first.to_status
    current_category = first.to_category
    current_start = first.timestamp

    for transition in transitions[1:]:
        if current_status is not None:
            periods.append(
                StatusPeriod(
                    status=current_status,
                    category=current_category,
                    start_time=current_start,
                    end_time=transition.timestamp,
                )
            )
        current_status = transition.to_status
        current_category = transition.to_category
        current_start = transition.timestamp

    if current_status is not None:
        periods.append(
            StatusPeriod(
                status=current_status,
                category=current_category,
                start_time=current_start,
                end_time=None,
            )
        )
    return periods

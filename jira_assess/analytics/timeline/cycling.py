"""Status cycling (rework) detection."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import reduce
from typing import Any, NamedTuple

from jira_assess.core.models import StatusCycling, StatusTransition

from .transitions import extract_status_transitions


class CyclingState(NamedTuple):
    counts: Mapping[str, int]
    total_revisits: int


EMPTY_CYCLING_STATE = CyclingState(counts={}, total_revisits=0)


def process_cycling_transition(state: CyclingState, transition: StatusTransition) -> CyclingState:
    status = transition.to_status
    if status is None:
        return state
    if status not in state.counts:
        return CyclingState({**state.counts, status: 0}, state.total_revisits)
    return CyclingState(
        {**state.counts, status: state.counts[status] + 1},
        state.total_revisits + 1,
    )


def detect_status_cycling(transitions: Sequence[StatusTransition]) -> StatusCycling:
    """Count how often each status is re-entered after being visited.

    The first entry into a status records 0 revisits; every later entry into
    the same status adds one to that status and to the total.

    Examples
    --------
    Transitions into A, B, A, A, C give ``{"A": 2, "B": 0, "C": 0}`` with a
    total of 2.
    """
    final = reduce(process_cycling_transition, transitions, EMPTY_CYCLING_STATE)
    return StatusCycling(count=dict(final.counts), total_revisits=final.total_revisits)


def detect_issue_status_cycling(issue: Mapping[str, Any] | None) -> StatusCycling:
    return detect_status_cycling(extract_status_transitions(issue))

"""Domain value objects for change histories, timelines, and assessments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StatusCategory(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ChangeItem:
    field: str | None
    from_string: str | None
    to_string: str | None


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    created: str | None
    items: tuple[ChangeItem, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusTransition:
    from_status: str | None
    to_status: str | None
    from_category: StatusCategory
    to_category: StatusCategory
    timestamp: str | None


@dataclass(frozen=True, slots=True)
class StatusPeriod:
    status: str
    category: StatusCategory
    start_time: str | None
    end_time: str | None = None


@dataclass(frozen=True, slots=True)
class BlockedPeriod:
    start_time: str | None
    end_time: str | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class SprintChange:
    from_sprints: tuple[str, ...] | None
    to_sprints: tuple[str, ...] | None
    timestamp: str | None


@dataclass(frozen=True, slots=True)
class InProgressDuration:
    in_progress_days: int | None
    first_in_progress: str | None
    last_done: str | None


@dataclass(frozen=True, slots=True)
class SprintBoundaries:
    exceeds_sprint: bool
    sprint_reassignments: int


@dataclass(frozen=True, slots=True)
class StatusCycling:
    count: dict[str, int] = field(default_factory=dict)
    total_revisits: int = 0


@dataclass(frozen=True, slots=True)
class BlockedTime:
    total_days: int = 0
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class StatusTimeline:
    first_in_progress: str | None
    last_done: str | None
    average_time_in_status: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DurationAssessment:
    in_progress_days: int | None
    exceeds_sprint: bool
    sprint_reassignments: int
    point_to_duration_ratio: float | None
    status_transitions: StatusTimeline
    status_cycling: StatusCycling
    blocked_time: BlockedTime
    anomalies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase shape consumed by reporting layers."""
        return {
            "inProgressDays": self.in_progress_days,
            "exceedsSprint": self.exceeds_sprint,
            "sprintReassignments": self.sprint_reassignments,
            "pointToDurationRatio": self.point_to_duration_ratio,
            "statusTransitions": {
                "firstInProgress": self.status_transitions.first_in_progress,
                "lastDone": self.status_transitions.last_done,
                "averageTimeInStatus": dict(self.status_transitions.average_time_in_status),
            },
            "statusCycling": {
                "count": dict(self.status_cycling.count),
                "totalRevisits": self.status_cycling.total_revisits,
            },
            "blockedTime": {
                "totalDays": self.blocked_time.total_days,
                "reasons": list(self.blocked_time.reasons),
            },
            "anomalies": list(self.anomalies),
        }

"""Central configuration, constants, and tunable assessment settings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Timezone
# =============================================================================
# Business-day boundaries (start of day, weekends) are evaluated in this zone.
TIMEZONE = "UTC"

# =============================================================================
# Status Category Keywords
# Matched as case-insensitive substrings, in this order (first match wins).
# =============================================================================
DONE_KEYWORDS: tuple[str, ...] = ("done", "complete", "resolved")
IN_PROGRESS_KEYWORDS: tuple[str, ...] = ("in progress", "review", "dev")
TO_DO_KEYWORDS: tuple[str, ...] = ("to do", "backlog", "open")

# Statuses containing any of these are treated as blocked/impeded
BLOCKING_KEYWORDS: tuple[str, ...] = (
    "blocked",
    "on hold",
    "waiting",
    "pending",
    "impediment",
)

# =============================================================================
# Changelog Field Names
# =============================================================================
STATUS_FIELD = "status"
SPRINT_FIELD = "sprint"

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "sprint": "customfield_10600",
    "story_points": "customfield_10105",
}

# =============================================================================
# Comment Correlation
# =============================================================================
COMMENT_WINDOW_HOURS: float = 24.0
COMPLEX_COMMENT_REASON = "Found in comment (complex format)"

# Changelog/comment page size for the REST client
JIRA_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class AssessmentSettings:
    """Tunable knobs for one assessment run.

    Built fresh at each call boundary (``AssessmentSettings()`` for defaults or
    :func:`jira_assess.core.settings.load_settings` for a YAML override).
    """

    timezone: str = TIMEZONE
    blocking_keywords: Sequence[str] = BLOCKING_KEYWORDS
    comment_window_hours: float = COMMENT_WINDOW_HOURS
    sprint_field_id: str = FIELD_IDS["sprint"]
    story_points_field_id: str = FIELD_IDS["story_points"]

    # Anomaly thresholds (strictly greater/less than triggers)
    long_duration_days: int = 10
    sprint_reassignment_threshold: int = 1
    low_velocity_ratio: float = 0.5
    high_velocity_ratio: float = 3.0
    status_cycling_threshold: int = 3
    bug_duration_days: int = 5
    task_duration_days: int = 3

    # Service layer
    max_workers: int = 8

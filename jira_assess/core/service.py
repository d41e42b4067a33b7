"""AssessmentService: orchestrates fetching issues and running duration assessments."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

import pandas as pd

from jira_assess.analytics.aggregations.frame import build_assessment_frame
from jira_assess.analytics.assessment import get_duration_assessment

from .clock import Clock, utc_now
from .config import AssessmentSettings
from .jira_client import JiraAPI
from .models import DurationAssessment

ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class AssessmentService:
    def __init__(
        self,
        api: JiraAPI,
        settings: AssessmentSettings | None = None,
        clock: Clock | None = None,
    ):
        self.api = api
        self.settings = settings or AssessmentSettings()
        self.clock = clock or utc_now

    def assess_issue(self, issue_key: str) -> DurationAssessment:
        """Fetch one issue with its comments and assess it."""
        issue = self.api.fetch_issue_raw(issue_key)
        comments = self.api.fetch_comments(issue_key)
        logger.debug(
            "Fetched %s: %s histories, %s comments",
            issue_key,
            len((issue.get("changelog") or {}).get("histories") or []),
            len(comments.get("comments") or []),
        )
        return get_duration_assessment(issue, comments, settings=self.settings, clock=self.clock)

    def assess_many(
        self,
        issue_keys: Sequence[str],
        *,
        progress: ProgressCallback | None = None,
    ) -> dict[str, DurationAssessment]:
        """Assess several issues concurrently.

        Fetches are I/O bound, so they run on a thread pool of
        ``settings.max_workers``. Issues that fail to fetch are logged and
        left out of the result. The result follows the order of
        ``issue_keys``.
        """
        keys = list(dict.fromkeys(issue_keys))
        if not keys:
            return {}
        results: dict[str, DurationAssessment] = {}
        if progress:
            progress("Assessing issues", 0, len(keys))
        completed = 0
        with ThreadPoolExecutor(max_workers=max(1, self.settings.max_workers)) as pool:
            futures = {pool.submit(self.assess_issue, key): key for key in keys}
            for fut in as_completed(futures):
                key = futures[fut]
                try:
                    results[key] = fut.result()
                except Exception as exc:
                    logger.warning("Assessment of %s failed: %s", key, exc)
                finally:
                    completed += 1
                    if progress:
                        progress("Assessing issues", completed, len(keys))
        return {key: results[key] for key in keys if key in results}

    def assess_frame(
        self,
        issue_keys: Sequence[str],
        *,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        return build_assessment_frame(self.assess_many(issue_keys, progress=progress))

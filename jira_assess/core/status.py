"""Status categorization utilities.

Statuses are free-text workflow labels that differ between projects. This
module maps them onto coarse lifecycle categories using the keyword tuples in
config.py (DONE_KEYWORDS, IN_PROGRESS_KEYWORDS, TO_DO_KEYWORDS) and detects
blocking-like statuses (BLOCKING_KEYWORDS).
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import BLOCKING_KEYWORDS, DONE_KEYWORDS, IN_PROGRESS_KEYWORDS, TO_DO_KEYWORDS
from .models import StatusCategory


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def is_done_status(status_lower: str) -> bool:
    return _contains_any(status_lower, DONE_KEYWORDS)


def is_in_progress_status(status_lower: str) -> bool:
    return _contains_any(status_lower, IN_PROGRESS_KEYWORDS)


def is_to_do_status(status_lower: str) -> bool:
    return _contains_any(status_lower, TO_DO_KEYWORDS)


def classify_status(value: str | None) -> StatusCategory:
    """Map a raw status label to its lifecycle category.

    Keyword groups are checked in order done, in-progress, new; the first
    group with a substring match wins. Labels matching nothing (and empty or
    missing labels) map to ``StatusCategory.UNKNOWN``.

    Parameters
    ----------
    value : str | None
        Raw status string from the changelog.

    Returns
    -------
    StatusCategory

    Examples
    --------
    >>> classify_status("In Review").value
    'in-progress'
    >>> classify_status("Resolved").value
    'done'
    >>> classify_status("Blocked").value
    'unknown'
    """
    if not value:
        return StatusCategory.UNKNOWN
    text = str(value).lower()
    if is_done_status(text):
        return StatusCategory.DONE
    if is_in_progress_status(text):
        return StatusCategory.IN_PROGRESS
    if is_to_do_status(text):
        return StatusCategory.NEW
    return StatusCategory.UNKNOWN


def is_blocked_status(value: str | None, keywords: Iterable[str] = BLOCKING_KEYWORDS) -> bool:
    """Check if a status label indicates an external impediment.

    Parameters
    ----------
    value : str | None
        Raw status string.
    keywords : Iterable[str]
        Lowercase blocking vocabulary.

    Returns
    -------
    bool
        True if the lowercased label contains any blocking keyword.
    """
    if not value:
        return False
    return _contains_any(str(value).lower(), keywords)

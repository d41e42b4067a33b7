"""Load AssessmentSettings from YAML (with in-code defaults)."""

from __future__ import annotations

from dataclasses import fields, replace
from pathlib import Path

import pytz
import yaml

from .config import AssessmentSettings
from .errors import SettingsError

_SEQUENCE_KEYS = {"blocking_keywords"}


def _check_timezone(name) -> None:
    if not isinstance(name, str):
        raise SettingsError("'timezone' must be a timezone name")
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise SettingsError(f"Unknown timezone '{name}'") from exc


def load_settings(path: str | Path | None = None) -> AssessmentSettings:
    """Build settings from defaults overridden by an optional YAML file.

    The file holds a flat mapping, optionally nested under an ``assessment``
    key::

        assessment:
          timezone: America/Santiago
          long_duration_days: 15
          blocking_keywords: [blocked, on hold]

    A missing path returns defaults. Unreadable YAML, a non-mapping document,
    unknown keys or an unknown timezone raise SettingsError.
    """
    defaults = AssessmentSettings()
    if path is None:
        return defaults
    yaml_path = Path(path)
    if not yaml_path.exists():
        return defaults
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SettingsError(f"Cannot read settings file {yaml_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {yaml_path} must contain a mapping")
    section = data.get("assessment", data)
    if not isinstance(section, dict):
        raise SettingsError(f"'assessment' section in {yaml_path} must be a mapping")

    known = {f.name for f in fields(AssessmentSettings)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise SettingsError(f"Unknown settings in {yaml_path}: {', '.join(unknown)}")

    overrides = dict(section)
    for key in _SEQUENCE_KEYS & set(overrides):
        value = overrides[key]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SettingsError(f"'{key}' must be a list of strings")
        overrides[key] = tuple(v.lower() for v in value)
    if "timezone" in overrides:
        _check_timezone(overrides["timezone"])
    return replace(defaults, **overrides)

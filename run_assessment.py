"""Command line launcher for duration assessments.

Usage:
  python run_assessment.py OBS-1 OBS-2 [--config settings.yaml] [-v]

Credentials are read from JIRA_SERVER, JIRA_EMAIL and JIRA_API_TOKEN
(JIRA_TOKEN is accepted as a fallback). Prints a JSON object keyed by issue.
"""

import argparse
import json
import logging
import os
import sys

from jira_assess.core.errors import AssessmentError
from jira_assess.core.jira_client import JiraAPI
from jira_assess.core.service import AssessmentService
from jira_assess.core.settings import load_settings


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Assess Jira issue durations.")
    parser.add_argument("keys", nargs="+", help="Issue keys, e.g. OBS-123")
    parser.add_argument("--config", help="YAML file overriding assessment settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = os.getenv("JIRA_SERVER", "")
    email = os.getenv("JIRA_EMAIL", "")
    token = os.getenv("JIRA_API_TOKEN") or os.getenv("JIRA_TOKEN", "")
    if not server or not email or not token:
        logging.error("JIRA_SERVER, JIRA_EMAIL and JIRA_API_TOKEN must be set")
        return 2

    try:
        settings = load_settings(args.config)
    except AssessmentError as exc:
        logging.error("%s", exc)
        return 2

    service = AssessmentService(JiraAPI(server, email, token), settings=settings)
    assessments = service.assess_many(args.keys)
    json.dump({key: a.to_dict() for key, a in assessments.items()}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if len(assessments) == len(set(args.keys)) else 1


if __name__ == "__main__":
    sys.exit(main())

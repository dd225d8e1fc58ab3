# The MIT License (MIT)
# Copyright © 2025 Entrius

from datetime import datetime

from gitactivity.classes import ActivityResult, RawRepoReport
from gitactivity.utils.utils import parse_github_timestamp


def classify(raw_report: RawRepoReport, repository: str, since: datetime, into: ActivityResult) -> None:
    """Append a repository's PRs to the report buckets.

    Merged PRs are kept only when merged strictly after ``since``; a missing or
    unparseable ``merged_at`` counts as not after it. Open PRs go to the
    "with activity" bucket when they have at least one timeline event since the
    cutoff, otherwise to "without activity". Never raises.
    """
    for pull_request in raw_report.merged_prs:
        pull_request.repository = repository
        merged_at = parse_github_timestamp(pull_request.merged_at)
        if merged_at is not None and merged_at > since:
            into.merged_prs.append(pull_request)

    for pull_request in raw_report.open_prs:
        pull_request.repository = repository
        if pull_request.activity_event_count > 0:
            into.open_prs_with_activity.append(pull_request)
        else:
            into.open_prs_without_activity.append(pull_request)

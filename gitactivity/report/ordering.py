# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Presentation orderings for report buckets. Both sorts are stable and return new lists."""

from datetime import datetime
from typing import Callable, Dict, Iterable, List

from gitactivity.classes import PullRequest
from gitactivity.utils.utils import EARLIEST_TIMESTAMP, parse_github_timestamp


def _created_at_key(pull_request: PullRequest) -> datetime:
    return parse_github_timestamp(pull_request.created_at) or EARLIEST_TIMESTAMP


def sort_by_activity(pull_requests: Iterable[PullRequest]) -> List[PullRequest]:
    """Most timeline events first."""
    return sorted(pull_requests, key=lambda pr: pr.activity_event_count, reverse=True)


def sort_by_age(pull_requests: Iterable[PullRequest]) -> List[PullRequest]:
    """Oldest first; unparseable ``created_at`` sorts before everything else."""
    return sorted(pull_requests, key=_created_at_key)


SORT_KEYS: Dict[str, Callable[[Iterable[PullRequest]], List[PullRequest]]] = {
    'activity': sort_by_activity,
    'age': sort_by_age,
}

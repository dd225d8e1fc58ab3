# The MIT License (MIT)
# Copyright © 2025 Entrius

from typing import Optional

import bittensor as bt

from gitactivity.classes import RateLimitSnapshot
from gitactivity.constants import RATE_LIMIT_MIN_REMAINING
from gitactivity.utils.logging import LogSink, make_logf


class RateLimitObserver:
    """Reports the rate-limit snapshot attached to every GraphQL response.

    Purely observational: it never delays or blocks a request.
    """

    def __init__(self, log: Optional[LogSink] = None, min_remaining: int = RATE_LIMIT_MIN_REMAINING):
        self._logf = make_logf(log)
        self.min_remaining = min_remaining
        self.last: Optional[RateLimitSnapshot] = None

    def observe(self, snapshot: Optional[RateLimitSnapshot]) -> None:
        if snapshot is None:
            return

        self.last = snapshot
        self._logf("Credits remaining %d", snapshot.remaining)

        if snapshot.remaining <= self.min_remaining:
            bt.logging.warning(
                f"Approaching GitHub GraphQL rate limit: {snapshot.remaining}/{snapshot.limit} points remaining, "
                f"resets at {snapshot.reset_at}"
            )

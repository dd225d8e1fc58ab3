# The MIT License (MIT)
# Copyright © 2025 Entrius

from typing import TYPE_CHECKING, Callable, Optional

import bittensor as bt

if TYPE_CHECKING:
    from gitactivity.classes import ActivityResult, RateLimitSnapshot

LogSink = Callable[[str], None]


def make_logf(sink: Optional[LogSink]) -> Callable[..., None]:
    """Return a printf-style logger writing to ``sink``, or a no-op when there is none."""

    def logf(fmt: str, *args) -> None:
        if sink is None:
            return
        sink(fmt % args if args else fmt)

    return logf


def bittensor_sink(level: str = 'info') -> LogSink:
    """Log sink that forwards to bittensor's logger at the given level."""
    return getattr(bt.logging, level)


def log_report_summary(
    logf: Callable[..., None], result: 'ActivityResult', rate_limit: Optional['RateLimitSnapshot'] = None
) -> None:
    """Log bucket sizes of a finished report."""
    logf("Nb merged pr:%d", len(result.merged_prs))
    logf("Nb open pr with activity:%d", len(result.open_prs_with_activity))
    logf("Nb open pr without activity:%d", len(result.open_prs_without_activity))
    if rate_limit is not None:
        logf("Final rate limit: %s", rate_limit)

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Organization activity report.

Usage:
    report = ActivityReport('my-org', token, 7, log=print)
    report.run()
    report.result.merged_prs
"""

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import datetime, timedelta, timezone
from typing import Iterator, List, Optional, Tuple

from gitactivity.classes import ActivityResult, RawRepoReport
from gitactivity.errors import GitActivityError, RunError, RunPhase
from gitactivity.report.classify import classify
from gitactivity.report.fetcher import fetch_report
from gitactivity.report.rate_limit import RateLimitObserver
from gitactivity.report.repositories import list_repositories
from gitactivity.utils.github_api_tools import GitHubGraphQLClient
from gitactivity.utils.logging import LogSink, log_report_summary, make_logf


class ActivityReport:
    """Pull-request activity of every repository owned by an organization over the last ``window_days``.

    ``result`` is None until ``run()`` completes successfully. A failed run
    raises RunError and leaves ``result`` untouched, so a partial report is
    never exposed.
    """

    def __init__(
        self,
        organization: str,
        token: str,
        window_days: int,
        log: Optional[LogSink] = None,
        exhaustive: bool = True,
        workers: int = 1,
        client: Optional[GitHubGraphQLClient] = None,
    ):
        self.organization = organization
        self.window_days = window_days
        self.exhaustive = exhaustive
        self.workers = max(1, workers)
        self.generated_at: Optional[datetime] = None
        self.since: Optional[datetime] = None
        self.result: Optional[ActivityResult] = None
        self.repositories: List[str] = []

        self._token = token
        self._client = client
        self._logf = make_logf(log)
        self.rate_limit = RateLimitObserver(log)

    def _get_client(self) -> GitHubGraphQLClient:
        if self._client is None:
            self._client = GitHubGraphQLClient(self._token)
        return self._client

    def _iter_sequential(
        self, client: GitHubGraphQLClient, repositories: List[str], since: datetime
    ) -> Iterator[Tuple[str, RawRepoReport]]:
        for repository in repositories:
            try:
                raw_report = fetch_report(client, self.organization, repository, since, self.rate_limit)
            except GitActivityError as e:
                raise RunError.from_error(e, RunPhase.REPORT, repository) from e
            yield repository, raw_report

    def _iter_parallel(
        self, client: GitHubGraphQLClient, repositories: List[str], since: datetime
    ) -> Iterator[Tuple[str, RawRepoReport]]:
        executor = ThreadPoolExecutor(max_workers=self.workers)
        try:
            futures = [
                (repository, executor.submit(fetch_report, client, self.organization, repository, since, self.rate_limit))
                for repository in repositories
            ]
            done, _ = wait([future for _, future in futures], return_when=FIRST_EXCEPTION)

            if any(future.exception() is not None for future in done):
                # only futures that have not started yet are cancelled, running ones finish
                for _, future in futures:
                    future.cancel()
                # earliest repository in enumeration order among the ones that failed
                for repository, future in futures:
                    if future.cancelled():
                        continue
                    error = future.exception()
                    if error is None:
                        continue
                    if not isinstance(error, GitActivityError):
                        raise error
                    raise RunError.from_error(error, RunPhase.REPORT, repository) from error
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        # results come back in enumeration order, not completion order
        for repository, future in futures:
            yield repository, future.result()

    def run(self) -> None:
        """Build the report.

        Raises:
            RunError: on the first failure while listing repositories or fetching a report
        """
        owns_client = self._client is None
        client = self._get_client()
        try:
            self._run(client)
        finally:
            if owns_client:
                client.close()
                self._client = None

    def _run(self, client: GitHubGraphQLClient) -> None:
        now = datetime.now(timezone.utc)
        since = now - timedelta(days=self.window_days)

        try:
            repositories = list_repositories(client, self.organization, self.exhaustive, self.rate_limit)
        except GitActivityError as e:
            raise RunError.from_error(e, RunPhase.LISTING) from e

        self._logf("Found %d repositories in %s", len(repositories), self.organization)

        if self.workers > 1 and len(repositories) > 1:
            raw_reports = self._iter_parallel(client, repositories, since)
        else:
            raw_reports = self._iter_sequential(client, repositories, since)

        result = ActivityResult()
        for repository, raw_report in raw_reports:
            if raw_report.truncated:
                self._logf(
                    "Report for %s truncated: %d/%d merged PRs, %d/%d open PRs",
                    repository,
                    len(raw_report.merged_prs),
                    raw_report.merged_total_count,
                    len(raw_report.open_prs),
                    raw_report.open_total_count,
                )
            classify(raw_report, repository, since, result)

        self.generated_at = now
        self.since = since
        self.repositories = repositories
        self.result = result
        log_report_summary(self._logf, result, self.rate_limit.last)

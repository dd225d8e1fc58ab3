# The MIT License (MIT)
# Copyright © 2025 Entrius

from datetime import datetime
from typing import Any, Dict, List, Optional

from gitactivity.classes import BranchHistory, PRState, PullRequest, RateLimitSnapshot, RawRepoReport
from gitactivity.constants import REPORT_PAGE_SIZE
from gitactivity.errors import RemoteQueryError, TransportError
from gitactivity.queries import REPORT_QUERY
from gitactivity.report.rate_limit import RateLimitObserver
from gitactivity.utils.github_api_tools import GitHubGraphQLClient
from gitactivity.utils.utils import format_github_timestamp

REPORT_QUERY_NAME = 'report'


def _parse_pull_requests(connection: Dict[str, Any], repository: str, default_state: PRState) -> List[PullRequest]:
    pull_requests = []
    for pr_raw in connection.get('nodes') or []:
        if not pr_raw:
            continue
        pull_request = PullRequest.from_graphql_response(pr_raw, default_state=default_state)
        pull_request.repository = repository
        pull_requests.append(pull_request)
    return pull_requests


def fetch_report(
    client: GitHubGraphQLClient,
    organization: str,
    repository: str,
    since: datetime,
    observer: Optional[RateLimitObserver] = None,
    page_size: int = REPORT_PAGE_SIZE,
) -> RawRepoReport:
    """
    Fetch merged PRs, open PRs and branch histories of one repository in a single query.

    Each connection is capped at ``page_size`` and never paginated further, so
    repositories with more PRs than that are truncated (see RawRepoReport.truncated).
    Open PRs carry the number of timeline events after ``since``.

    Args:
        client (GitHubGraphQLClient): Transport used for the request
        organization (str): Repository owner
        repository (str): Repository name
        since (datetime): Cutoff of the reporting window
        observer (Optional[RateLimitObserver]): Receives the response's rate limit
        page_size (int): Nodes requested per connection

    Returns:
        RawRepoReport: Typed report with every PR stamped with ``repository``

    Raises:
        RemoteQueryError: if the request fails, the repository is missing from the response
            or a node cannot be mapped
    """
    since_str = format_github_timestamp(since)
    variables = {
        'organization': organization,
        'repo': repository,
        'date': since_str,
        'date2': since_str,
        'size': page_size,
    }

    try:
        data = client.execute(REPORT_QUERY, variables)
    except TransportError as e:
        raise RemoteQueryError(str(e), REPORT_QUERY_NAME, repository=repository) from e

    rate_limit = RateLimitSnapshot.from_graphql_response(data.get('rateLimit'))
    if observer is not None:
        observer.observe(rate_limit)

    repo_data = data.get('repository')
    if not repo_data:
        raise RemoteQueryError("repository not found in response", REPORT_QUERY_NAME, repository=repository)

    merged_connection = repo_data.get('mergedPR') or {}
    open_connection = repo_data.get('openPR') or {}
    refs = repo_data.get('refs') or {}

    try:
        return RawRepoReport(
            name=repo_data.get('name') or repository,
            merged_prs=_parse_pull_requests(merged_connection, repository, PRState.MERGED),
            open_prs=_parse_pull_requests(open_connection, repository, PRState.OPEN),
            branches=[BranchHistory.from_graphql_response(ref) for ref in refs.get('nodes') or [] if ref],
            merged_total_count=merged_connection.get('totalCount', 0),
            open_total_count=open_connection.get('totalCount', 0),
            rate_limit=rate_limit,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise RemoteQueryError(
            f"malformed node in response: {e!r}", REPORT_QUERY_NAME, repository=repository
        ) from e

# The MIT License (MIT)
# Copyright © 2025 Entrius

from typing import List, Optional

from gitactivity.constants import REPOSITORIES_PAGE_SIZE, REPOSITORIES_SAMPLE_SIZE
from gitactivity.queries import REPOSITORIES, REPOSITORIES_SAMPLE
from gitactivity.report.pagination import fetch_first_page, traverse
from gitactivity.report.rate_limit import RateLimitObserver
from gitactivity.utils.github_api_tools import GitHubGraphQLClient


def list_repositories(
    client: GitHubGraphQLClient,
    organization: str,
    exhaustive: bool = True,
    observer: Optional[RateLimitObserver] = None,
) -> List[str]:
    """List names of the repositories owned by an organization.

    Args:
        client (GitHubGraphQLClient): Transport used for the requests
        organization (str): Organization login
        exhaustive (bool): Follow every page when True, otherwise return a single
            page of at most REPOSITORIES_SAMPLE_SIZE names
        observer (Optional[RateLimitObserver]): Receives each response's rate limit

    Returns:
        List[str]: Repository names in the order GitHub returned them (not sorted)
    """
    if exhaustive:
        return traverse(client, REPOSITORIES, organization, REPOSITORIES_PAGE_SIZE, observer=observer)
    return fetch_first_page(client, REPOSITORIES_SAMPLE, organization, REPOSITORIES_SAMPLE_SIZE, observer=observer)

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitHub GraphQL queries used by the activity report.

Every query also selects ``rateLimit`` so each response carries a snapshot of
the remaining call budget.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple


@dataclass(frozen=True)
class QueryDescriptor:
    """A paginated query and where its connection lives in the response.

    The query must accept ``$organization``, ``$size`` and a nullable
    ``$cursor`` bound to the connection's ``after`` argument.
    """

    name: str
    query: str
    connection_path: Tuple[str, ...]
    parse_node: Callable[[Dict[str, Any]], Any]


RATE_LIMIT_FRAGMENT = """
    rateLimit {
      limit
      cost
      remaining
      resetAt
    }
"""

REPOSITORIES_QUERY = (
    """
    query($organization: String!, $size: Int!, $cursor: String) {
      organization(login: $organization) {
        repositories(first: $size, after: $cursor, affiliations: OWNER) {
          nodes {
            name
            owner {
              login
            }
          }
          pageInfo {
            hasNextPage
            endCursor
          }
          totalCount
        }
      }
    """
    + RATE_LIMIT_FRAGMENT
    + """
    }
    """
)

# single page from the end of the listing, for cheap dry runs
REPOSITORIES_SAMPLE_QUERY = (
    """
    query($organization: String!, $size: Int!, $cursor: String) {
      organization(login: $organization) {
        repositories(last: $size, before: $cursor, affiliations: OWNER) {
          nodes {
            name
            owner {
              login
            }
          }
          pageInfo {
            hasNextPage
            endCursor
          }
          totalCount
        }
      }
    """
    + RATE_LIMIT_FRAGMENT
    + """
    }
    """
)

REPORT_QUERY = (
    """
    query($organization: String!, $repo: String!, $date: GitTimestamp!, $date2: DateTime!, $size: Int!) {
      repository(owner: $organization, name: $repo) {
        name
        mergedPR: pullRequests(last: $size, states: [MERGED], orderBy: {field: UPDATED_AT, direction: ASC}) {
          nodes {
            number
            title
            createdAt
            mergedAt
            state
            participants(last: $size) {
              nodes {
                login
              }
              totalCount
            }
          }
          totalCount
        }
        openPR: pullRequests(last: $size, states: [OPEN]) {
          nodes {
            number
            title
            createdAt
            mergedAt
            state
            participants(last: $size) {
              nodes {
                login
              }
              totalCount
            }
            timeline(since: $date2) {
              totalCount
            }
          }
          pageInfo {
            hasNextPage
            endCursor
          }
          totalCount
        }
        refs(refPrefix: "refs/heads/", first: $size) {
          nodes {
            ... on Ref {
              name
              target {
                ... on Commit {
                  history(first: $size, since: $date) {
                    nodes {
                      ... on Commit {
                        oid
                        committedDate
                        author {
                          name
                        }
                        message
                      }
                    }
                    pageInfo {
                      hasNextPage
                      endCursor
                    }
                    totalCount
                  }
                }
              }
            }
          }
          pageInfo {
            hasNextPage
            endCursor
          }
          totalCount
        }
      }
    """
    + RATE_LIMIT_FRAGMENT
    + """
    }
    """
)


def _repository_name(node: Dict[str, Any]) -> str:
    return node['name']


REPOSITORIES = QueryDescriptor(
    name='repositories',
    query=REPOSITORIES_QUERY,
    connection_path=('organization', 'repositories'),
    parse_node=_repository_name,
)

REPOSITORIES_SAMPLE = QueryDescriptor(
    name='repositories_sample',
    query=REPOSITORIES_SAMPLE_QUERY,
    connection_path=('organization', 'repositories'),
    parse_node=_repository_name,
)

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Cursor-following traversal of paginated GraphQL connections.

Pages are produced by a generator so the caller owns accumulation and can stop
early; ``traverse`` folds every page into one list, ``fetch_first_page`` is the
bounded variant that never follows ``hasNextPage``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from gitactivity.classes import PageInfo, RateLimitSnapshot
from gitactivity.errors import RemoteQueryError, TransportError
from gitactivity.queries import QueryDescriptor
from gitactivity.report.rate_limit import RateLimitObserver
from gitactivity.utils.github_api_tools import GitHubGraphQLClient


@dataclass
class Page:
    """One page of a connection"""

    number: int
    nodes: List[Any] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)
    rate_limit: Optional[RateLimitSnapshot] = None


def _resolve_connection(data: Dict[str, Any], path) -> Optional[Dict[str, Any]]:
    node: Any = data
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def fetch_page(
    client: GitHubGraphQLClient,
    descriptor: QueryDescriptor,
    variables: Dict[str, Any],
    cursor: Optional[str] = None,
    page_number: int = 1,
) -> Page:
    """Issue one request for a page of ``descriptor``'s connection.

    Args:
        client (GitHubGraphQLClient): Transport used for the request
        descriptor (QueryDescriptor): Query and connection location
        variables (Dict[str, Any]): Bound variables, ``cursor`` is added here
        cursor (Optional[str]): Where the page starts, None for the first page
        page_number (int): 1-based page index, for error context

    Returns:
        Page: Mapped nodes, page info and rate-limit snapshot

    Raises:
        RemoteQueryError: if the transport fails, the connection is missing or a node is malformed
    """
    try:
        data = client.execute(descriptor.query, {**variables, 'cursor': cursor})
    except TransportError as e:
        raise RemoteQueryError(str(e), descriptor.name, page=page_number, cursor=cursor) from e

    connection = _resolve_connection(data, descriptor.connection_path)
    if connection is None:
        raise RemoteQueryError(
            f"response has no {'.'.join(descriptor.connection_path)} connection",
            descriptor.name,
            page=page_number,
            cursor=cursor,
        )

    try:
        nodes = [descriptor.parse_node(node) for node in connection.get('nodes') or [] if node]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise RemoteQueryError(
            f"malformed node in response: {e!r}", descriptor.name, page=page_number, cursor=cursor
        ) from e

    return Page(
        number=page_number,
        nodes=nodes,
        page_info=PageInfo.from_graphql_response(connection.get('pageInfo')),
        rate_limit=RateLimitSnapshot.from_graphql_response(data.get('rateLimit')),
    )


def iter_pages(
    client: GitHubGraphQLClient,
    descriptor: QueryDescriptor,
    variables: Dict[str, Any],
    observer: Optional[RateLimitObserver] = None,
    cursor: Optional[str] = None,
) -> Iterator[Page]:
    """Yield pages until GitHub reports no further page.

    There is no page cap; termination relies on ``hasNextPage`` eventually
    being false. Starting from ``cursor`` resumes a previous traversal.
    """
    page_number = 1
    while True:
        page = fetch_page(client, descriptor, variables, cursor=cursor, page_number=page_number)
        if observer is not None:
            observer.observe(page.rate_limit)

        yield page

        if not page.page_info.has_next_page:
            return
        if not page.page_info.end_cursor:
            raise RemoteQueryError(
                "hasNextPage is set but endCursor is empty", descriptor.name, page=page_number, cursor=cursor
            )

        cursor = page.page_info.end_cursor
        page_number += 1


def traverse(
    client: GitHubGraphQLClient,
    descriptor: QueryDescriptor,
    organization: str,
    page_size: int,
    observer: Optional[RateLimitObserver] = None,
) -> List[Any]:
    """Collect every node of a paginated connection, in page order.

    The first failing page aborts the traversal; nothing collected so far is returned.
    """
    variables = {'organization': organization, 'size': page_size}
    items: List[Any] = []
    for page in iter_pages(client, descriptor, variables, observer=observer):
        items.extend(page.nodes)
    return items


def fetch_first_page(
    client: GitHubGraphQLClient,
    descriptor: QueryDescriptor,
    organization: str,
    page_size: int,
    observer: Optional[RateLimitObserver] = None,
) -> List[Any]:
    """Return the nodes of the first page only, ignoring ``hasNextPage``."""
    page = fetch_page(client, descriptor, {'organization': organization, 'size': page_size})
    if observer is not None:
        observer.observe(page.rate_limit)
    return list(page.nodes)

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitHub GraphQL transport.

A thin request/response client: it posts a query with bound variables and
returns the ``data`` object of the response. Retrying and throttling are not
done here; every failure is raised as a TransportError.
"""

from typing import Any, Dict, Optional

import bittensor as bt
import requests

from gitactivity.config import GRAPHQL_URL, REQUEST_TIMEOUT
from gitactivity.errors import TransportError
from gitactivity.utils.utils import mask_secret


def make_headers(token: str) -> Dict[str, str]:
    """Build GitHub GraphQL HTTP headers for a PAT.

    Args:
        token (str): Github pat
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def _format_graphql_errors(errors: Any) -> str:
    if isinstance(errors, list):
        messages = [e.get('message', str(e)) if isinstance(e, dict) else str(e) for e in errors]
        return '; '.join(messages)
    return str(errors)


class GitHubGraphQLClient:
    """Executes GraphQL queries against the GitHub API with a bearer token.

    The token is never inspected or refreshed, only attached to requests.
    """

    def __init__(
        self,
        token: str,
        url: str = GRAPHQL_URL,
        timeout: int = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(make_headers(token))
        bt.logging.debug(f"GraphQL client for {url} using token {mask_secret(token)}")

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a query and return its ``data`` object.

        Args:
            query (str): GraphQL document
            variables (Optional[Dict[str, Any]]): Values bound to the query's variables

        Returns:
            Dict[str, Any]: The response's ``data`` object

        Raises:
            TransportError: on connection failures, non-200 statuses, undecodable
                bodies and GraphQL ``errors``
        """
        payload: Dict[str, Any] = {"query": query, "variables": variables or {}}
        bt.logging.debug(f"GraphQL request variables: {variables}")

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GraphQL request failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"GraphQL request failed with status {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"GraphQL response is not valid JSON: {e}", status_code=response.status_code) from e

        if not isinstance(body, dict):
            raise TransportError("GraphQL response is not a JSON object", status_code=response.status_code)

        if body.get('errors'):
            raise TransportError(
                f"GraphQL errors: {_format_graphql_errors(body['errors'])}", status_code=response.status_code
            )

        data = body.get('data')
        if data is None:
            raise TransportError("GraphQL response has no data", status_code=response.status_code)

        return data

    def close(self) -> None:
        self.session.close()

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared fixtures: a scripted GraphQL client and builders for GitHub-shaped responses.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from gitactivity.constants import ISO_FORMAT


def iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime(ISO_FORMAT)


def days_ago(days: float) -> str:
    return iso(datetime.now(timezone.utc) - timedelta(days=days))


class FakeGraphQLClient:
    """Stands in for GitHubGraphQLClient.

    ``responses`` are consumed in order (an Exception entry is raised), or a
    ``handler(query, variables)`` answers every request.
    """

    def __init__(self, responses: Optional[List[Any]] = None, handler: Optional[Callable] = None):
        self.responses = list(responses or [])
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        variables = dict(variables or {})
        with self._lock:
            self.calls.append({'query': query, 'variables': variables})
            if self.handler is None:
                if not self.responses:
                    raise AssertionError(f'Unexpected request with variables {variables}')
                response = self.responses.pop(0)
        if self.handler is not None:
            response = self.handler(query, variables)
        if isinstance(response, Exception):
            raise response
        return response


class GraphQLResponses:
    """Builders for the ``data`` objects returned by GitHub."""

    iso = staticmethod(iso)
    days_ago = staticmethod(days_ago)

    @staticmethod
    def rate_limit(remaining: int = 4999, limit: int = 5000, cost: int = 1) -> Dict[str, Any]:
        return {'limit': limit, 'cost': cost, 'remaining': remaining, 'resetAt': '2026-10-18T13:00:00Z'}

    @classmethod
    def repositories_page(
        cls, names: List[str], has_next: bool = False, end_cursor: Optional[str] = None, remaining: int = 4999
    ) -> Dict[str, Any]:
        return {
            'organization': {
                'repositories': {
                    'nodes': [{'name': name, 'owner': {'login': 'acme'}} for name in names],
                    'pageInfo': {'hasNextPage': has_next, 'endCursor': end_cursor},
                    'totalCount': len(names),
                }
            },
            'rateLimit': cls.rate_limit(remaining=remaining),
        }

    @staticmethod
    def pr_node(
        number: int,
        created_at: str = '2026-10-01T10:00:00Z',
        merged_at: Optional[str] = None,
        state: str = 'OPEN',
        timeline: Optional[int] = None,
        participants: Optional[List[str]] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        participants = participants or []
        node = {
            'number': number,
            'title': title or f'PR #{number}',
            'createdAt': created_at,
            'mergedAt': merged_at,
            'state': state,
            'participants': {
                'nodes': [{'login': login} for login in participants],
                'totalCount': len(participants),
            },
        }
        if timeline is not None:
            node['timeline'] = {'totalCount': timeline}
        return node

    @staticmethod
    def ref_node(name: str, commits: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        commits = commits or []
        return {
            'name': name,
            'target': {
                'history': {
                    'nodes': commits,
                    'pageInfo': {'hasNextPage': False, 'endCursor': None},
                    'totalCount': len(commits),
                }
            },
        }

    @classmethod
    def report(
        cls,
        name: str,
        merged: Optional[List[Dict[str, Any]]] = None,
        open_prs: Optional[List[Dict[str, Any]]] = None,
        refs: Optional[List[Dict[str, Any]]] = None,
        merged_total: Optional[int] = None,
        open_total: Optional[int] = None,
        remaining: int = 4990,
    ) -> Dict[str, Any]:
        merged = merged or []
        open_prs = open_prs or []
        refs = refs or []
        return {
            'repository': {
                'name': name,
                'mergedPR': {
                    'nodes': merged,
                    'totalCount': len(merged) if merged_total is None else merged_total,
                },
                'openPR': {
                    'nodes': open_prs,
                    'pageInfo': {'hasNextPage': False, 'endCursor': None},
                    'totalCount': len(open_prs) if open_total is None else open_total,
                },
                'refs': {
                    'nodes': refs,
                    'pageInfo': {'hasNextPage': False, 'endCursor': None},
                    'totalCount': len(refs),
                },
            },
            'rateLimit': cls.rate_limit(remaining=remaining),
        }


@pytest.fixture
def gql():
    return GraphQLResponses


@pytest.fixture
def make_client():
    def _make(responses=None, handler=None):
        return FakeGraphQLClient(responses=responses, handler=handler)

    return _make


@pytest.fixture
def log_lines():
    """A list-backed log sink: ``log_lines.append`` is passed as the sink."""
    return []

# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Tests for cursor-following pagination: page concatenation, cursor binding,
rate-limit observation and failure handling.
"""

from unittest.mock import Mock

import pytest

from gitactivity.classes import PageInfo, RateLimitSnapshot
from gitactivity.errors import RemoteQueryError, TransportError
from gitactivity.queries import REPOSITORIES
from gitactivity.report.pagination import fetch_first_page, fetch_page, iter_pages, traverse


# ============================================================================
# PageInfo / RateLimitSnapshot mapping
# ============================================================================


class TestPageInfo:
    def test_defaults_when_missing(self):
        info = PageInfo.from_graphql_response(None)
        assert info == PageInfo(has_next_page=False, end_cursor='', start_cursor='', has_previous_page=False)

    def test_null_cursor_becomes_empty(self):
        info = PageInfo.from_graphql_response({'hasNextPage': False, 'endCursor': None})
        assert info.end_cursor == ''

    def test_full_mapping(self):
        info = PageInfo.from_graphql_response(
            {'hasNextPage': True, 'endCursor': 'c2', 'startCursor': 'c1', 'hasPreviousPage': True}
        )
        assert info.has_next_page is True
        assert info.end_cursor == 'c2'
        assert info.start_cursor == 'c1'
        assert info.has_previous_page is True


class TestRateLimitSnapshot:
    def test_missing_block_is_none(self):
        assert RateLimitSnapshot.from_graphql_response(None) is None

    def test_mapping(self):
        snapshot = RateLimitSnapshot.from_graphql_response(
            {'limit': 5000, 'cost': 1, 'remaining': 4321, 'resetAt': '2026-10-18T13:00:00Z'}
        )
        assert snapshot == RateLimitSnapshot(limit=5000, cost=1, remaining=4321, reset_at='2026-10-18T13:00:00Z')


# ============================================================================
# traverse
# ============================================================================


class TestTraverse:
    def test_concatenates_pages_in_order(self, make_client, gql):
        client = make_client(
            [
                gql.repositories_page(['a', 'b'], has_next=True, end_cursor='c1'),
                gql.repositories_page(['c', 'd'], has_next=True, end_cursor='c2'),
                gql.repositories_page(['e'], has_next=False),
            ]
        )

        result = traverse(client, REPOSITORIES, 'acme', 2)

        assert result == ['a', 'b', 'c', 'd', 'e']
        assert len(client.calls) == 3

    def test_binds_end_cursor_of_previous_page(self, make_client, gql):
        client = make_client(
            [
                gql.repositories_page(['a'], has_next=True, end_cursor='c1'),
                gql.repositories_page(['b'], has_next=True, end_cursor='c2'),
                gql.repositories_page(['c']),
            ]
        )

        traverse(client, REPOSITORIES, 'acme', 1)

        assert [call['variables']['cursor'] for call in client.calls] == [None, 'c1', 'c2']
        for call in client.calls:
            assert call['variables']['organization'] == 'acme'
            assert call['variables']['size'] == 1
            assert call['query'] == REPOSITORIES.query

    def test_single_page(self, make_client, gql):
        client = make_client([gql.repositories_page(['only'])])
        assert traverse(client, REPOSITORIES, 'acme', 50) == ['only']
        assert len(client.calls) == 1

    def test_empty_organization(self, make_client, gql):
        client = make_client([gql.repositories_page([])])
        assert traverse(client, REPOSITORIES, 'acme', 50) == []

    def test_observer_sees_every_page(self, make_client, gql):
        client = make_client(
            [
                gql.repositories_page(['a'], has_next=True, end_cursor='c1', remaining=100),
                gql.repositories_page(['b'], has_next=True, end_cursor='c2', remaining=99),
                gql.repositories_page(['c'], remaining=98),
            ]
        )
        observer = Mock()

        traverse(client, REPOSITORIES, 'acme', 1, observer=observer)

        remaining = [c.args[0].remaining for c in observer.observe.call_args_list]
        assert remaining == [100, 99, 98]

    def test_failure_on_second_page_aborts(self, make_client, gql):
        client = make_client(
            [
                gql.repositories_page(['a'], has_next=True, end_cursor='c1'),
                TransportError('boom', status_code=502),
            ]
        )

        with pytest.raises(RemoteQueryError) as exc_info:
            traverse(client, REPOSITORIES, 'acme', 1)

        error = exc_info.value
        assert error.query_name == 'repositories'
        assert error.page == 2
        assert error.cursor == 'c1'
        assert isinstance(error.__cause__, TransportError)
        assert 'boom' in str(error)

    def test_next_page_without_cursor_is_an_error(self, make_client, gql):
        client = make_client([gql.repositories_page(['a'], has_next=True, end_cursor=None)])

        with pytest.raises(RemoteQueryError, match='endCursor'):
            traverse(client, REPOSITORIES, 'acme', 1)
        assert len(client.calls) == 1

    def test_node_without_name_is_remote_error(self, make_client, gql):
        page = gql.repositories_page(['a'], has_next=True, end_cursor='c1')
        broken = gql.repositories_page([])
        broken['organization']['repositories']['nodes'] = [{'owner': {'login': 'acme'}}]
        client = make_client([page, broken])

        with pytest.raises(RemoteQueryError, match='malformed node') as exc_info:
            traverse(client, REPOSITORIES, 'acme', 1)

        error = exc_info.value
        assert error.query_name == REPOSITORIES.name
        assert error.page == 2
        assert error.cursor == 'c1'
        assert isinstance(error.__cause__, KeyError)

    def test_missing_connection(self, make_client, gql):
        client = make_client([{'organization': None, 'rateLimit': gql.rate_limit()}])

        with pytest.raises(RemoteQueryError, match='organization.repositories'):
            traverse(client, REPOSITORIES, 'acme', 1)


# ============================================================================
# iter_pages / fetch_page
# ============================================================================


class TestIterPages:
    def test_lazy_early_exit(self, make_client, gql):
        client = make_client(
            [
                gql.repositories_page(['a'], has_next=True, end_cursor='c1'),
                gql.repositories_page(['b']),
            ]
        )

        pages = iter_pages(client, REPOSITORIES, {'organization': 'acme', 'size': 1})
        first = next(pages)

        assert first.number == 1
        assert first.nodes == ['a']
        assert len(client.calls) == 1

    def test_resume_from_cursor(self, make_client, gql):
        client = make_client([gql.repositories_page(['b'])])

        pages = list(iter_pages(client, REPOSITORIES, {'organization': 'acme', 'size': 1}, cursor='c1'))

        assert [p.nodes for p in pages] == [['b']]
        assert client.calls[0]['variables']['cursor'] == 'c1'

    def test_fetch_page_maps_rate_limit(self, make_client, gql):
        client = make_client([gql.repositories_page(['a'], remaining=42)])

        page = fetch_page(client, REPOSITORIES, {'organization': 'acme', 'size': 1})

        assert page.rate_limit.remaining == 42
        assert page.page_info.has_next_page is False


# ============================================================================
# fetch_first_page
# ============================================================================


class TestFetchFirstPage:
    def test_ignores_has_next_page(self, make_client, gql):
        client = make_client([gql.repositories_page(['a', 'b'], has_next=True, end_cursor='c1')])
        observer = Mock()

        result = fetch_first_page(client, REPOSITORIES, 'acme', 2, observer=observer)

        assert result == ['a', 'b']
        assert len(client.calls) == 1
        assert client.calls[0]['variables']['cursor'] is None
        observer.observe.assert_called_once()

    def test_failure_propagates(self, make_client):
        client = make_client([TransportError('unauthorized', status_code=401)])

        with pytest.raises(RemoteQueryError) as exc_info:
            fetch_first_page(client, REPOSITORIES, 'acme', 10)
        assert exc_info.value.page == 1

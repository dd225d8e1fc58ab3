# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for repository enumeration in exhaustive and sample mode."""

import pytest

from gitactivity.constants import REPOSITORIES_PAGE_SIZE, REPOSITORIES_SAMPLE_SIZE
from gitactivity.errors import RemoteQueryError, TransportError
from gitactivity.queries import REPOSITORIES, REPOSITORIES_SAMPLE
from gitactivity.report.repositories import list_repositories


@pytest.fixture
def two_pages(gql):
    return [
        gql.repositories_page(['api', 'web'], has_next=True, end_cursor='c1'),
        gql.repositories_page(['docs'], has_next=False),
    ]


class TestListRepositories:
    def test_exhaustive_returns_every_page(self, make_client, two_pages):
        client = make_client(two_pages)

        assert list_repositories(client, 'acme', exhaustive=True) == ['api', 'web', 'docs']
        assert len(client.calls) == 2
        assert client.calls[1]['variables']['cursor'] == 'c1'

    def test_sample_returns_first_page_only(self, make_client, two_pages):
        client = make_client(two_pages)

        assert list_repositories(client, 'acme', exhaustive=False) == ['api', 'web']
        assert len(client.calls) == 1

    def test_page_sizes_and_queries(self, make_client, gql):
        client = make_client([gql.repositories_page(['a']), gql.repositories_page(['a'])])

        list_repositories(client, 'acme', exhaustive=True)
        list_repositories(client, 'acme', exhaustive=False)

        full, sample = client.calls
        assert full['query'] == REPOSITORIES.query
        assert full['variables']['size'] == REPOSITORIES_PAGE_SIZE
        assert sample['query'] == REPOSITORIES_SAMPLE.query
        assert sample['variables']['size'] == REPOSITORIES_SAMPLE_SIZE

    def test_keeps_remote_order(self, make_client, gql):
        client = make_client([gql.repositories_page(['zeta', 'alpha', 'mu'])])
        assert list_repositories(client, 'acme') == ['zeta', 'alpha', 'mu']

    def test_error_propagates(self, make_client):
        client = make_client([TransportError('Could not resolve to an Organization')])

        with pytest.raises(RemoteQueryError, match='Could not resolve'):
            list_repositories(client, 'missing-org')

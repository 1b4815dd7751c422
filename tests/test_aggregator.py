"""
Unit tests for per-repository PR aggregation
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import Mock
from org_pr_stats.aggregator import aggregate_pull_requests
from org_pr_stats.api_client import AggregationError, GraphQLError, TransportError
from org_pr_stats.queries import PULL_REQUESTS_QUERY


UTC = timezone.utc


def pr_node(number, author, additions, deletions, merged_at='2025-08-05T10:00:00Z', base='main'):
    return {
        'number': number,
        'mergedAt': merged_at,
        'additions': additions,
        'deletions': deletions,
        'baseRefName': base,
        'author': {'login': author} if author is not None else None
    }


def pr_page(nodes, has_next=False, cursor=None):
    return {
        'repository': {
            'pullRequests': {
                'pageInfo': {'hasNextPage': has_next, 'endCursor': cursor},
                'nodes': nodes
            }
        }
    }


@pytest.fixture
def client():
    return Mock()


class TestAggregatePullRequests:
    """Test cases for paging and accumulating merged PRs."""

    def test_accumulates_per_author(self, client):
        client.execute.return_value = pr_page([
            pr_node(1, 'alice', 100, 10),
            pr_node(2, 'bob', 7, 3),
            pr_node(3, 'alice', 50, 5),
        ])

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'])

        assert set(totals) == {'alice', 'bob'}
        assert (totals['alice'].additions, totals['alice'].deletions, totals['alice'].prs) == (150, 15, 2)
        assert (totals['bob'].additions, totals['bob'].deletions, totals['bob'].prs) == (7, 3, 1)

    def test_query_variables(self, client):
        """Test that the cursor is omitted on the first page and passed afterwards."""
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 1, 1)], has_next=True, cursor='c1'),
            pr_page([pr_node(2, 'alice', 1, 1)]),
        ]

        aggregate_pull_requests(client, 'acme', 'repo-a', ['develop'])

        first, second = client.execute.call_args_list
        assert first.args == (PULL_REQUESTS_QUERY, {'owner': 'acme', 'name': 'repo-a', 'base': 'develop'})
        assert second.args[1] == {'owner': 'acme', 'name': 'repo-a', 'base': 'develop', 'cursor': 'c1'}

    def test_date_window_scenario(self, client):
        """Test that only PRs merged inside the window are counted."""
        client.execute.return_value = pr_page([
            pr_node(1, 'alice', 100, 10, merged_at='2025-08-05T00:00:00Z'),
            pr_node(2, 'alice', 50, 5, merged_at='2025-09-01T00:00:00Z'),
        ])

        totals = aggregate_pull_requests(
            client, 'acme', 'repo-a', ['main'],
            since=datetime(2025, 8, 1, tzinfo=UTC),
            until=datetime(2025, 8, 31, tzinfo=UTC)
        )

        alice = totals['alice']
        assert (alice.additions, alice.deletions, alice.prs) == (100, 10, 1)

    def test_window_bounds_inclusive(self, client):
        client.execute.return_value = pr_page([
            pr_node(1, 'alice', 1, 0, merged_at='2025-08-01T00:00:00Z'),
            pr_node(2, 'alice', 2, 0, merged_at='2025-08-31T00:00:00Z'),
        ])

        totals = aggregate_pull_requests(
            client, 'acme', 'repo-a', ['main'],
            since=datetime(2025, 8, 1, tzinfo=UTC),
            until=datetime(2025, 8, 31, tzinfo=UTC)
        )

        assert totals['alice'].prs == 2

    def test_out_of_window_page_does_not_stop_scan(self, client):
        """Test that older merges do not end the scan early."""
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 1, 0, merged_at='2020-01-01T00:00:00Z')], has_next=True, cursor='c1'),
            pr_page([pr_node(2, 'alice', 5, 0, merged_at='2025-08-10T00:00:00Z')]),
        ]

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'],
                                         since=datetime(2025, 8, 1, tzinfo=UTC))

        assert client.execute.call_count == 2
        assert totals['alice'].additions == 5

    def test_unknown_authors_aggregated_together(self, client):
        client.execute.return_value = pr_page([
            pr_node(1, '', 10, 1),
            pr_node(2, None, 20, 2),
        ])

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'])

        assert list(totals) == ['(unknown)']
        assert totals['(unknown)'].prs == 2
        assert totals['(unknown)'].additions == 30

    def test_max_per_branch_one_scans_single_node(self, client):
        """Test that the scan cap truncates even qualifying PRs."""
        client.execute.return_value = pr_page([
            pr_node(1, 'alice', 100, 10),
            pr_node(2, 'bob', 50, 5),
        ], has_next=True, cursor='c1')

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'], max_per_branch=1)

        assert list(totals) == ['alice']
        assert client.execute.call_count == 1

    def test_cap_counts_out_of_window_nodes(self, client):
        """Test that scanned nodes count toward the cap even when filtered out."""
        client.execute.return_value = pr_page([
            pr_node(1, 'alice', 1, 0, merged_at='2020-01-01T00:00:00Z'),
            pr_node(2, 'alice', 1, 0, merged_at='2020-01-02T00:00:00Z'),
            pr_node(3, 'bob', 1, 0, merged_at='2025-08-02T00:00:00Z'),
        ])

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'],
                                         since=datetime(2025, 8, 1, tzinfo=UTC), max_per_branch=2)

        assert totals == {}

    def test_zero_cap_scans_single_node(self, client):
        """Test that a zero cap stops the branch after the first node."""
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 10, 1), pr_node(2, 'alice', 20, 2)], has_next=True, cursor='c1'),
            pr_page([pr_node(3, 'alice', 30, 3)]),
        ]

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'], max_per_branch=0)

        assert (totals['alice'].prs, totals['alice'].additions) == (1, 10)
        assert client.execute.call_count == 1

    def test_negative_cap_scans_single_node(self, client):
        client.execute.return_value = pr_page([pr_node(1, 'alice', 1, 0), pr_node(2, 'bob', 1, 0)])

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'], max_per_branch=-5)

        assert list(totals) == ['alice']

    def test_cap_is_per_branch(self, client):
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 1, 0, base='main'), pr_node(2, 'alice', 1, 0, base='main')]),
            pr_page([pr_node(3, 'alice', 1, 0, base='develop')]),
        ]

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main', 'develop'], max_per_branch=1)

        assert totals['alice'].prs == 2

    def test_cap_across_pages(self, client):
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 1, 0), pr_node(2, 'alice', 1, 0)], has_next=True, cursor='c1'),
            pr_page([pr_node(3, 'alice', 1, 0), pr_node(4, 'alice', 1, 0)], has_next=True, cursor='c2'),
        ]

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main'], max_per_branch=3)

        assert totals['alice'].prs == 3
        assert client.execute.call_count == 2

    def test_empty_page_stops_branch(self, client):
        client.execute.return_value = pr_page([], has_next=True, cursor='c1')

        assert aggregate_pull_requests(client, 'acme', 'repo-a', ['main']) == {}
        assert client.execute.call_count == 1

    def test_totals_sum_across_branches(self, client):
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 10, 1, base='main')]),
            pr_page([pr_node(2, 'alice', 20, 2, base='develop')]),
        ]

        totals = aggregate_pull_requests(client, 'acme', 'repo-a', ['main', 'develop'])

        assert (totals['alice'].additions, totals['alice'].deletions, totals['alice'].prs) == (30, 3, 2)

    def test_no_branches(self, client):
        assert aggregate_pull_requests(client, 'acme', 'repo-a', []) == {}
        client.execute.assert_not_called()

    def test_missing_repository(self, client):
        client.execute.return_value = {'repository': None}

        assert aggregate_pull_requests(client, 'acme', 'gone', ['main']) == {}


class TestAggregationErrors:
    """Test cases for error context."""

    def test_graphql_error_wrapped_with_context(self, client):
        cause = GraphQLError(['Something went wrong', 'Again'])
        client.execute.side_effect = cause

        with pytest.raises(AggregationError) as excinfo:
            aggregate_pull_requests(client, 'acme', 'repo-a', ['main'])

        assert str(excinfo.value) == 'repo acme/repo-a base main: Something went wrong; Again'
        assert excinfo.value.__cause__ is cause

    def test_transport_error_wrapped(self, client):
        client.execute.side_effect = [
            pr_page([pr_node(1, 'alice', 1, 0)]),
            TransportError('server 502: bad gateway'),
        ]

        with pytest.raises(AggregationError, match='base develop: server 502'):
            aggregate_pull_requests(client, 'acme', 'repo-a', ['main', 'develop'])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

"""
Unit tests for data models
"""

import pytest
from datetime import datetime, timezone
from org_pr_stats.models import (
    Aggregate,
    PullRequest,
    Repository,
    Row,
    SummaryRow,
    UNKNOWN_AUTHOR,
)


class TestAggregate:
    """Test cases for the Aggregate accumulator."""

    def test_initialization(self):
        """Test that Aggregate initializes with zeros."""
        agg = Aggregate()
        assert agg.additions == 0
        assert agg.deletions == 0
        assert agg.prs == 0

    def test_add_pull_request(self):
        """Test accumulating pull requests."""
        agg = Aggregate()
        agg.add_pull_request(PullRequest(1, None, 100, 10, 'main', 'alice'))
        agg.add_pull_request(PullRequest(2, None, 5, 1, 'main', 'alice'))

        assert agg.additions == 105
        assert agg.deletions == 11
        assert agg.prs == 2

    def test_merge(self):
        """Test component-wise merge."""
        agg = Aggregate(1, 2, 3)
        agg.merge(Aggregate(10, 20, 30))
        assert (agg.additions, agg.deletions, agg.prs) == (11, 22, 33)


class TestScore:
    """Test cases for the ranking score."""

    def test_row_score(self):
        row = Row('org', 'repo', 'alice', 100, 10, 1)
        assert row.score == 110

    def test_negative_deletions_counted_absolute(self):
        """Test that the score never goes negative."""
        row = Row('org', 'repo', 'alice', 0, -50, 1)
        assert row.score == 50
        assert SummaryRow('alice', 3, -4, 1).score == 7
        assert Aggregate(3, -4, 1).score == 7


class TestFromNode:
    """Test cases for building models from GraphQL nodes."""

    def test_repository_from_node(self):
        repo = Repository.from_node({'name': 'api', 'isFork': True, 'isArchived': False, 'isPrivate': True})
        assert repo == Repository('api', is_fork=True, is_archived=False, is_private=True)

    def test_pull_request_from_node(self):
        pr = PullRequest.from_node({
            'number': 7,
            'mergedAt': '2025-08-05T10:00:00Z',
            'additions': 100,
            'deletions': 10,
            'baseRefName': 'main',
            'author': {'login': 'alice'}
        })
        assert pr.number == 7
        assert pr.merged_at == datetime(2025, 8, 5, 10, 0, tzinfo=timezone.utc)
        assert pr.author == 'alice'
        assert pr.base_ref_name == 'main'

    @pytest.mark.parametrize('author', [None, {}, {'login': ''}, {'login': None}])
    def test_missing_author_is_unknown(self, author):
        """Test that deleted or empty authors normalize to the sentinel."""
        pr = PullRequest.from_node({'number': 1, 'mergedAt': None, 'additions': 1,
                                    'deletions': 0, 'baseRefName': 'main', 'author': author})
        assert pr.author == UNKNOWN_AUTHOR == '(unknown)'
        assert pr.merged_at is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

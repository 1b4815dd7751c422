"""Org PR Stats - merged pull request line statistics per author across a GitHub organization."""

from .models import Aggregate, PullRequest, Repository, Row, SummaryRow, UNKNOWN_AUTHOR
from .api_client import GitHubAPIClient, TransportError, AuthenticationError, GraphQLError, AggregationError
from .branches import select_branches, CANDIDATE_BRANCHES
from .repositories import list_repositories
from .aggregator import aggregate_pull_requests
from .org_pr_analyzer import OrgPRStatsAnalyzer
from .output import OutputFormatter

__all__ = [
    'Aggregate',
    'PullRequest',
    'Repository',
    'Row',
    'SummaryRow',
    'UNKNOWN_AUTHOR',
    'GitHubAPIClient',
    'TransportError',
    'AuthenticationError',
    'GraphQLError',
    'AggregationError',
    'select_branches',
    'CANDIDATE_BRANCHES',
    'list_repositories',
    'aggregate_pull_requests',
    'OrgPRStatsAnalyzer',
    'OutputFormatter',
]

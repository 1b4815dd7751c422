"""Per-repository aggregation of merged pull requests by author."""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional

from .api_client import AggregationError, GitHubAPIClient
from .models import Aggregate, PullRequest
from .queries import PULL_REQUESTS_QUERY
from .timeutil import in_range


DEFAULT_MAX_PER_BRANCH = 1000


def aggregate_pull_requests(
    client: GitHubAPIClient,
    org: str,
    repo: str,
    branches: List[str],
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    max_per_branch: int = DEFAULT_MAX_PER_BRANCH
) -> Dict[str, Aggregate]:
    """Sum additions, deletions and PR counts per author for one repository.

    Totals are summed over all given base branches.

    Args:
        client: GraphQL API client
        org: Repository owner
        repo: Repository name
        branches: Base branches to scan
        since: Only count PRs merged at or after this time
        until: Only count PRs merged at or before this time
        max_per_branch: Stop scanning a branch once this many PRs were scanned

    Returns:
        Author login -> Aggregate

    Raises:
        AggregationError: If fetching any page fails
    """
    totals: Dict[str, Aggregate] = defaultdict(Aggregate)

    for base in branches:
        try:
            scanned, counted = _scan_branch(client, org, repo, base, since, until, max_per_branch, totals)
        except Exception as e:
            raise AggregationError(f"repo {org}/{repo} base {base}: {e}") from e
        logging.debug(f"{org}/{repo} [{base}]: scanned {scanned} PRs, counted {counted}")

    return dict(totals)


def _scan_branch(client, org, repo, base, since, until, max_per_branch, totals):
    """Page through merged PRs of one base branch, adding in-window ones to totals.

    Pages are ordered by update time, not merge time, so an out-of-window page
    does not end the scan.
    """
    scanned = 0
    counted = 0
    cursor: Optional[str] = None

    while True:
        variables = {'owner': org, 'name': repo, 'base': base}
        if cursor is not None:
            variables['cursor'] = cursor

        data = client.execute(PULL_REQUESTS_QUERY, variables)
        connection = (data.get('repository') or {}).get('pullRequests') or {}
        nodes = connection.get('nodes') or []
        if not nodes:
            break

        for node in nodes:
            scanned += 1
            pr = PullRequest.from_node(node)
            if in_range(pr.merged_at, since, until):
                totals[pr.author].add_pull_request(pr)
                counted += 1
            if _cap_reached(scanned, max_per_branch):
                break

        if _cap_reached(scanned, max_per_branch):
            logging.debug(f"{org}/{repo} [{base}]: scan cap of {max_per_branch} reached")
            break

        page_info = connection.get('pageInfo') or {}
        if not page_info.get('hasNextPage'):
            break
        cursor = page_info.get('endCursor')

    return scanned, counted


def _cap_reached(scanned: int, max_per_branch: int) -> bool:
    return scanned >= max_per_branch

"""Flattening and deterministic ranking of aggregated statistics."""

from collections import defaultdict
from typing import Dict, List

from .models import Aggregate, Row, SummaryRow


def build_rows(org: str, per_repo: Dict[str, Dict[str, Aggregate]]) -> List[Row]:
    """Build one row per (repository, author) pair, sorted by rank.

    Args:
        org: Organization login
        per_repo: Repository name -> author login -> Aggregate

    Returns:
        Sorted rows
    """
    rows = [
        Row(org=org, repo=repo, user=user,
            additions=agg.additions, deletions=agg.deletions, prs=agg.prs)
        for repo, authors in per_repo.items()
        for user, agg in authors.items()
    ]
    return sort_rows(rows)


def build_org_totals(per_repo: Dict[str, Dict[str, Aggregate]]) -> Dict[str, Aggregate]:
    """Sum each author's aggregates over all repositories."""
    totals: Dict[str, Aggregate] = defaultdict(Aggregate)
    for authors in per_repo.values():
        for user, agg in authors.items():
            totals[user].merge(agg)
    return dict(totals)


def build_summary_rows(org_totals: Dict[str, Aggregate]) -> List[SummaryRow]:
    """Build organization-level rows, sorted by rank."""
    rows = [
        SummaryRow(user=user, additions=agg.additions, deletions=agg.deletions, prs=agg.prs)
        for user, agg in org_totals.items()
    ]
    return sort_summary_rows(rows)


def sort_rows(rows: List[Row]) -> List[Row]:
    """Score descending, then user, org and repository ascending."""
    return sorted(rows, key=lambda r: (-r.score, r.user, r.org, r.repo))


def sort_summary_rows(rows: List[SummaryRow]) -> List[SummaryRow]:
    """Score descending, then user ascending."""
    return sorted(rows, key=lambda r: (-r.score, r.user))

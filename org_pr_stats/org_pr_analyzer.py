"""Organization-wide merged PR statistics analyzer."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .aggregator import aggregate_pull_requests
from .api_client import GitHubAPIClient
from .branches import select_branches
from .config import AnalysisConfig, ConfigError
from .models import Aggregate, Row, SummaryRow
from .ranking import build_org_totals, build_rows, build_summary_rows
from .repositories import list_repositories


@dataclass
class AnalysisResult:
    """Ranked output of one analysis run."""
    rows: List[Row] = field(default_factory=list)
    summary_rows: List[SummaryRow] = field(default_factory=list)
    repositories: List[str] = field(default_factory=list)
    branches: List[str] = field(default_factory=list)


class OrgPRStatsAnalyzer:
    """Aggregates merged PR statistics per author across an organization's repositories."""

    def __init__(self, config: AnalysisConfig, api_client: GitHubAPIClient = None):
        """Initialize the analyzer.

        Args:
            config: Run configuration
            api_client: Client to use instead of one built from the config token
        """
        self.config = config
        self.api_client = api_client or GitHubAPIClient(config.token)

        # Statistics: repository -> author -> Aggregate
        self.per_repo: Dict[str, Dict[str, Aggregate]] = {}

        logging.info(f"Initialized analyzer for organization '{config.org}'")

    def run(self) -> AnalysisResult:
        """Scan every selected repository and branch and rank the results.

        Raises:
            ConfigError: If the branch regex is invalid
            GraphQLError: If listing repositories fails
            AggregationError: If aggregating any repository fails
        """
        config = self.config

        try:
            branches = select_branches(config.branches_regex)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if not branches:
            logging.warning("No branches match regex; nothing to do")
            return AnalysisResult()
        logging.info(f"Scanning base branches: {', '.join(branches)}")

        repos = list_repositories(
            self.api_client,
            config.org,
            include_forks=config.include_forks,
            include_archived=config.include_archived,
            visibility=config.visibility,
            max_repos=config.max_repos
        )
        if not repos:
            logging.warning("No repositories to scan")
            return AnalysisResult(branches=branches)

        for i, repo in enumerate(repos, start=1):
            logging.info(f"[{i}/{len(repos)}] {config.org}/{repo}")
            self.per_repo[repo] = aggregate_pull_requests(
                self.api_client,
                config.org,
                repo,
                branches,
                since=config.since,
                until=config.until,
                max_per_branch=config.max_per_branch
            )

        org_totals = build_org_totals(self.per_repo)
        return AnalysisResult(
            rows=build_rows(config.org, self.per_repo),
            summary_rows=build_summary_rows(org_totals),
            repositories=repos,
            branches=branches
        )

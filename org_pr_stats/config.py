"""
Run configuration for the organization PR statistics.

Settings come from command-line flags, falling back to environment
variables (a .env file is loaded first) and then to built-in defaults.
"""

import os
import logging
import argparse
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv

from .aggregator import DEFAULT_MAX_PER_BRANCH
from .branches import DEFAULT_BRANCH_PATTERN, select_branches
from .timeutil import parse_time_filter


TOKEN_ENV_VARS = ('GITHUB_ACCESS_TOKEN', 'GITHUB_TOKEN')


class ConfigError(Exception):
    """Raised for missing or invalid required settings."""


@dataclass
class AnalysisConfig:
    """Settings for one analysis run."""
    org: str
    token: str
    branches_regex: str = DEFAULT_BRANCH_PATTERN
    since: Optional[datetime] = None
    until: Optional[datetime] = None
    include_forks: bool = False
    include_archived: bool = False
    visibility: str = 'all'
    max_repos: int = 0
    max_per_branch: int = DEFAULT_MAX_PER_BRANCH
    output_file: str = ''
    log_level: str = 'INFO'


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logging.warning(f"Invalid {name} value '{value}', using default: {default}")
        return default


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; defaults are read from the environment."""
    p = argparse.ArgumentParser(
        description="Aggregate merged PR line statistics per author across a GitHub organization"
    )
    p.add_argument("--org", default=os.environ.get('GITHUB_ORG', ''),
                   help="GitHub organization login (required, or set GITHUB_ORG)")
    p.add_argument("--branches", default=os.environ.get('BRANCHES_REGEX', DEFAULT_BRANCH_PATTERN),
                   help="Regex of base branches to include")
    p.add_argument("--since", default=os.environ.get('SINCE', ''),
                   help="Include PRs merged at or after this time (RFC3339 or YYYY-MM-DD)")
    p.add_argument("--until", default=os.environ.get('UNTIL', ''),
                   help="Include PRs merged at or before this time (RFC3339 or YYYY-MM-DD)")
    p.add_argument("--include-forks", action="store_true", default=_env_bool('INCLUDE_FORKS'),
                   help="Include forked repositories")
    p.add_argument("--include-archived", action="store_true", default=_env_bool('INCLUDE_ARCHIVED'),
                   help="Include archived repositories")
    p.add_argument("--visibility", default=os.environ.get('VISIBILITY', 'all'),
                   help="Repository visibility: all|public|private")
    p.add_argument("--max-repos", type=int, default=_env_int('MAX_REPOS', 0),
                   help="Safety cap: stop after N repositories (0 = no cap)")
    p.add_argument("--max-per-branch", type=int, default=_env_int('MAX_PER_BRANCH', DEFAULT_MAX_PER_BRANCH),
                   help="Safety cap: max PRs to scan per branch per repository")
    p.add_argument("--out", default=os.environ.get('OUTPUT_FILE', ''),
                   help="Write CSV to this file (default stdout)")
    p.add_argument("--log-level", default=os.environ.get('LOG_LEVEL', 'INFO'),
                   help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return p


def get_token() -> Optional[str]:
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            return token
    return None


def load_config(argv: List[str] = None) -> AnalysisConfig:
    """Load the run configuration.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        The resolved configuration

    Raises:
        ConfigError: If the organization or the token is missing, or the branch regex is invalid
    """
    # Load environment variables from .env file if it exists
    load_dotenv()

    args = build_parser().parse_args(argv)

    org = args.org.strip()
    if not org:
        raise ConfigError("--org is required")

    token = get_token()
    if not token:
        raise ConfigError(
            "set GITHUB_ACCESS_TOKEN env var with a PAT that can read the org repos"
        )

    try:
        select_branches(args.branches)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return AnalysisConfig(
        org=org,
        token=token,
        branches_regex=args.branches,
        since=parse_time_filter(args.since, 'since'),
        until=parse_time_filter(args.until, 'until'),
        include_forks=args.include_forks,
        include_archived=args.include_archived,
        visibility=args.visibility,
        max_repos=args.max_repos,
        max_per_branch=args.max_per_branch,
        output_file=args.out,
        log_level=args.log_level.upper()
    )

"""Data models for organization PR statistics."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from .timeutil import parse_timestamp


UNKNOWN_AUTHOR = "(unknown)"


class RepositoryPrivacy(str, Enum):
    """Repository privacy filter values."""
    PUBLIC = 'PUBLIC'
    PRIVATE = 'PRIVATE'


@dataclass(frozen=True)
class Repository:
    """A repository of the organization."""
    name: str
    is_fork: bool = False
    is_archived: bool = False
    is_private: bool = False

    @classmethod
    def from_node(cls, node: Dict) -> 'Repository':
        return cls(
            name=node['name'],
            is_fork=bool(node.get('isFork')),
            is_archived=bool(node.get('isArchived')),
            is_private=bool(node.get('isPrivate'))
        )


@dataclass(frozen=True)
class PullRequest:
    """A merged pull request as seen on one page of results."""
    number: int
    merged_at: Optional[datetime]
    additions: int
    deletions: int
    base_ref_name: str
    author: str

    @classmethod
    def from_node(cls, node: Dict) -> 'PullRequest':
        # author is null for deleted accounts
        login = (node.get('author') or {}).get('login') or UNKNOWN_AUTHOR
        merged_at = parse_timestamp(node['mergedAt']) if node.get('mergedAt') else None
        return cls(
            number=node.get('number', 0),
            merged_at=merged_at,
            additions=node.get('additions') or 0,
            deletions=node.get('deletions') or 0,
            base_ref_name=node.get('baseRefName', ''),
            author=login
        )


@dataclass
class Aggregate:
    """Accumulated statistics for one author."""
    additions: int = 0
    deletions: int = 0
    prs: int = 0

    @property
    def score(self) -> int:
        return self.additions + abs(self.deletions)

    def add_pull_request(self, pr: PullRequest):
        self.additions += pr.additions
        self.deletions += pr.deletions
        self.prs += 1

    def merge(self, other: 'Aggregate'):
        self.additions += other.additions
        self.deletions += other.deletions
        self.prs += other.prs


@dataclass(frozen=True)
class Row:
    """One CSV output row: an author's totals within one repository."""
    org: str
    repo: str
    user: str
    additions: int
    deletions: int
    prs: int

    @property
    def score(self) -> int:
        """Touched lines: additions plus absolute deletions."""
        return self.additions + abs(self.deletions)


@dataclass(frozen=True)
class SummaryRow:
    """An author's totals across the whole organization."""
    user: str
    additions: int
    deletions: int
    prs: int

    @property
    def score(self) -> int:
        return self.additions + abs(self.deletions)

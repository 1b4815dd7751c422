"""Selection of the base branches to scan.

Branches are not discovered per repository; a fixed list of well-known
names is filtered once with the configured regular expression.
"""

import re
from typing import Iterable, List


CANDIDATE_BRANCHES = ('master', 'main', 'develop', 'staging', 'testing')
DEFAULT_BRANCH_PATTERN = '^(master|main|develop|staging|testing)$'


def select_branches(pattern: str, candidates: Iterable[str] = CANDIDATE_BRANCHES) -> List[str]:
    """Return the candidate branch names matching ``pattern``, in candidate order.

    Args:
        pattern: Regular expression matched against each branch name
        candidates: Branch names to choose from

    Returns:
        Matching branch names; an empty list means there is nothing to scan

    Raises:
        ValueError: If the pattern is not a valid regular expression
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid branch regex {pattern!r}: {e}") from e

    return [name for name in candidates if regex.search(name)]

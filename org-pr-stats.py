#!/usr/bin/env python3
"""
Org PR Stats
Aggregates merged PR additions, deletions and counts per author across a GitHub organization.
"""

import sys

from org_pr_stats.cli import main


if __name__ == "__main__":
    sys.exit(main())

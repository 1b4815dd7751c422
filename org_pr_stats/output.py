"""Output formatting: CSV export and the top contributors summary."""

import csv
import sys
import logging
from typing import List, TextIO

from .models import Row, SummaryRow


# ANSI color codes
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'

CSV_HEADER = ['org', 'repo', 'user', 'additions', 'deletions', 'prs']


class OutputFormatter:
    """Writes ranked rows as CSV and prints the organization summary."""

    def __init__(self, summary_limit: int = 10, use_color: bool = None):
        """Initialize the output formatter.

        Args:
            summary_limit: Number of contributors shown in the summary
            use_color: Force ANSI colors on/off (None = only when writing to a terminal)
        """
        self.summary_limit = summary_limit
        self.use_color = use_color

    def write_csv(self, rows: List[Row], stream: TextIO):
        """Write the header and one line per row to an open text stream."""
        writer = csv.writer(stream, lineterminator='\n')
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow([row.org, row.repo, row.user, row.additions, row.deletions, row.prs])

    def write_csv_file(self, rows: List[Row], path: str = ''):
        """Write rows to ``path``, or to stdout if the path is empty.

        Raises:
            OSError: If the file cannot be written
        """
        if not path:
            self.write_csv(rows, sys.stdout)
            sys.stdout.flush()
            return

        with open(path, 'w', newline='', encoding='utf-8') as f:
            self.write_csv(rows, f)
        logging.info(f"Wrote {len(rows)} rows to {path}")

    def print_summary(self, summary_rows: List[SummaryRow], repo_count: int, stream: TextIO = None):
        """Print the top contributors across the organization.

        Args:
            summary_rows: Organization-level rows, already ranked
            repo_count: Number of repositories scanned
            stream: Destination (default stderr, so CSV on stdout stays clean)
        """
        stream = stream or sys.stderr
        header = f"Scanned {repo_count} repos. Top contributors (org total):"
        if self._color_enabled(stream):
            header = f"{BOLD}{CYAN}{header}{RESET}"
        print(header, file=stream)

        for i, row in enumerate(summary_rows[:self.summary_limit], start=1):
            print(f"  {i}) {row.user:<20}  +{row.additions} / -{row.deletions}  PRs:{row.prs}", file=stream)

    def _color_enabled(self, stream: TextIO) -> bool:
        if self.use_color is not None:
            return self.use_color
        isatty = getattr(stream, 'isatty', None)
        return bool(isatty and isatty())

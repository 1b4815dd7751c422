"""Command-line entry point."""

import os
import logging
from typing import List

from .api_client import AggregationError, GraphQLError, TransportError
from .config import ConfigError, load_config
from .org_pr_analyzer import OrgPRStatsAnalyzer
from .output import OutputFormatter


def setup_logging(level_name: str):
    """Send log records to stderr; unknown level names fall back to INFO."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )
    logging.getLogger().setLevel(level)


def main(argv: List[str] = None) -> int:
    """Run the analysis and return the process exit status."""
    # Configure logging early so configuration warnings are shown
    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))

    try:
        config = load_config(argv)
    except ConfigError as e:
        logging.error(str(e))
        return 1
    setup_logging(config.log_level)

    analyzer = OrgPRStatsAnalyzer(config)
    try:
        result = analyzer.run()
    except AggregationError as e:
        logging.error(f"Aggregation failed on {config.org}: {e}")
        return 1
    except (GraphQLError, TransportError) as e:
        logging.error(f"Fetching repos failed: {e}")
        return 1
    except ConfigError as e:
        logging.error(str(e))
        return 1
    finally:
        analyzer.api_client.close()

    if not result.repositories:
        return 0

    formatter = OutputFormatter()
    try:
        formatter.write_csv_file(result.rows, config.output_file)
    except OSError as e:
        logging.error(f"Writing csv failed: {e}")
        return 1

    formatter.print_summary(result.summary_rows, len(result.repositories))
    return 0

"""Logging setup - all logs go to stderr so stdout stays free for MCP stdio."""

import logging
import sys


def setup_logging(verbose: bool = False):
    """Setup logging to stderr. Use ERROR level for MCP, INFO for CLI."""
    level = logging.INFO if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

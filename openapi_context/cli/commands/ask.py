"""Ask command - run the ask tool from the command line."""

import logging
from typing import Optional

from ...mcp_server.askAPI import askAPI
from ..config import Config
from ._resources import load_resources, print_payload

logger = logging.getLogger(__name__)


def ask_command(config: Config, query: str, include_schemas: bool = True, limit: Optional[int] = None):
    """Print the assembled context for a question as JSON."""
    logger.info(f"Query: {query}")
    resources = load_resources(config)
    print_payload(askAPI(resources, query, include_schemas=include_schemas, limit=limit))

"""Serve command - builds the index and starts the MCP server."""

import logging
import sys

from ...openapi_processor.errors import SpecError
from ..config import Config

logger = logging.getLogger(__name__)


def serve_command(config: Config, verbose: bool = False):
    """Load the API description and serve it over MCP stdio."""
    if verbose:
        logger.info(f"Starting {config.mcp_server_name}...")
        logger.info(f"API description: {config.openapi_spec_path}")
        logger.info(f"Embedding backend: {config.embedding_backend}")

    try:
        from ...mcp_server.server import start_server
        from ...mcp_server.shared_resources import SharedResources

        resources = SharedResources()
        resources.load_from_config(config)
    except ImportError as e:
        logger.error(f"Failed to import MCP server: {e}")
        sys.exit(1)
    except SpecError as e:
        logger.error(f"Failed to load API description: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to initialize resources: {e}")
        sys.exit(1)

    try:
        start_server(config, resources)
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}")
        sys.exit(1)

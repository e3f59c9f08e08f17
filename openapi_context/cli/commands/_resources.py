"""Resource loading shared by the one-shot query commands."""

import json
import logging
import sys
from typing import Any, Dict

from ...mcp_server.shared_resources import SharedResources
from ...openapi_processor.errors import SpecError
from ..config import Config

logger = logging.getLogger(__name__)


def load_resources(config: Config) -> SharedResources:
    """Build the index the same way the MCP server does; exit 1 on failure."""
    resources = SharedResources()
    try:
        resources.load_from_config(config)
    except SpecError as e:
        logger.error(f"Failed to load API description: {e}")
        sys.exit(1)
    return resources


def print_payload(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))

"""Search command - run the search tool from the command line."""

from typing import List, Optional

from ...mcp_server.searchAPI import searchAPI
from ..config import Config
from ._resources import load_resources, print_payload


def search_command(
    config: Config,
    query: str,
    type: str = "all",
    tags: Optional[List[str]] = None,
    method: Optional[str] = None,
    max_results: Optional[int] = None,
):
    """Print ranked endpoints and schemas as JSON."""
    resources = load_resources(config)
    if max_results is None:
        max_results = config.search_default_max_results
    print_payload(searchAPI(resources, query, type=type, tags=tags, method=method, max_results=max_results))

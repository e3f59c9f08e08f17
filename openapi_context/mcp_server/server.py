"""FastMCP server exposing the OpenAPI context tools."""

import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from ..cli.config import Config
from ..utils.logging_config import setup_logging
from .askAPI import askAPI
from .schemaAPI import schemaAPI
from .searchAPI import searchAPI
from .shared_resources import SharedResources

logger = logging.getLogger(__name__)


def create_server(resources: SharedResources, name: str = "OpenAPI Context Server") -> FastMCP:
    """Create the MCP server and register the tools against the given resources."""
    mcp = FastMCP(name)
    default_max_results = resources.config.search_default_max_results if resources.config else 10

    @mcp.tool()
    async def search(
        query: str,
        type: str = "all",
        tags: Optional[List[str]] = None,
        method: Optional[str] = None,
        max_results: int = default_max_results,
    ) -> Dict[str, Any]:
        """
        WHEN TO USE: Find endpoints or schemas of the API by free-text description.

        BEST FOR:
        - Discovering which operation does something ("create an order", "list users")
        - Narrowing endpoints to a tag or HTTP method
        - Finding the schema that models a concept

        EXAMPLES:
        - search("create item", type="endpoint")
        - search("pagination", tags=["items"], method="GET")
        - search("error response", type="schema")

        Args:
            query: Free-text search query
            type: "endpoint", "schema" or "all"
            tags: Only return endpoints carrying any of these tags
            method: Only return endpoints with this HTTP method (GET, POST, PUT, DELETE, PATCH)
            max_results: Maximum results per list (1-20)

        Returns:
            Ranked endpoint and schema summaries with similarity scores
        """
        return searchAPI(resources, query, type=type, tags=tags, method=method, max_results=max_results)

    @mcp.tool()
    async def schema(
        name: Optional[str] = None,
        operation_id: Optional[str] = None,
        part: str = "full",
    ) -> Dict[str, Any]:
        """
        WHEN TO USE: Direct lookup of a schema definition you already know the name of,
        or of every schema an operation uses.

        Provide exactly one of name or operation_id.

        Args:
            name: Schema name as declared under components.schemas (e.g. "Widget")
            operation_id: Operation whose request and response schemas should be returned
            part: "overview" (name, description, required), "properties" or "full"

        Returns:
            The schema, or {operation_id, schemas, count} when looked up by operation
        """
        return schemaAPI(resources, name=name, operation_id=operation_id, part=part)

    @mcp.tool()
    async def ask(query: str, include_schemas: bool = True, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        WHEN TO USE: Natural-language questions about the API where you do not know
        the exact operation or schema names.

        The question is classified (specific endpoint, schema, tag/method listing or
        general) and the matching fragments of the API description are returned.

        EXAMPLES:
        - "How do I call getItem?"
        - "What fields does the Widget schema have?"
        - "Which POST endpoints exist for items?"
        - "What does this API do?"

        Args:
            query: Question about the API
            include_schemas: Attach schemas related to the returned endpoints
            limit: Maximum entities per list

        Returns:
            {type, classification, data} with the assembled context
        """
        return askAPI(resources, query, include_schemas=include_schemas, limit=limit)

    return mcp


def start_server(config: Config, resources: Optional[SharedResources] = None):
    """Build the index, then serve the tools over stdio until the transport closes."""
    resources = resources or SharedResources()
    if not resources.is_ready():
        resources.load_from_config(config)

    mcp = create_server(resources, config.mcp_server_name)
    resources.start_background_tasks()
    logger.info(f"{config.mcp_server_name} ready")
    try:
        mcp.run()
    finally:
        resources.shutdown()


if __name__ == "__main__":
    setup_logging(verbose=False)
    start_server(Config())

"""ask tool implementation: typed context for a natural-language question."""

from typing import Any, Dict, Optional

from .response_assembler import INVALID_INPUT, error_payload, not_initialized_payload
from .shared_resources import SharedResources

MAX_LIMIT = 20


def askAPI(
    resources: SharedResources,
    query: str,
    include_schemas: bool = True,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Ask a question about the API and get the most relevant fragments.

    Args:
        resources: Loaded shared resources
        query: Natural language question about endpoints, schemas or the API in general
        include_schemas: Attach related or similar schemas
        limit: Maximum entities per list (defaults to CONTEXT_DEFAULT_LIMIT)

    Returns:
        Serialized ContextResult ({type, classification, data}) or an error payload
    """
    if not resources.is_ready():
        return not_initialized_payload()

    if not isinstance(query, str):
        return error_payload("Parameter 'query' must be a string", INVALID_INPUT)

    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT):
        return error_payload(f"Parameter 'limit' must be an integer between 1 and {MAX_LIMIT}", INVALID_INPUT)

    context = resources.provider.get_context_for_query(query, include_schemas=include_schemas, limit=limit)
    return context.to_dict()

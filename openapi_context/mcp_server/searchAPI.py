"""search tool implementation: ranked endpoints and schemas for a query."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..openapi_processor.data_classes import Endpoint, HttpMethod
from ..retriever.spec_index import SpecIndex
from ..vector_store.embedding_store import ENDPOINTS, SCHEMAS
from .response_assembler import INVALID_INPUT, error_payload, not_initialized_payload
from .shared_resources import SharedResources

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("endpoint", "schema", "all")
MIN_RESULTS = 1
MAX_RESULTS = 20


def _validate(
    query: Any, type: Any, tags: Any, method: Any, max_results: Any
) -> Tuple[Optional[str], Optional[HttpMethod], List[str]]:
    """Return (error message, parsed method, tag list)."""
    if not isinstance(query, str) or not query.strip():
        return "Parameter 'query' must be a non-empty string", None, []

    if type not in SEARCH_TYPES:
        return f"Parameter 'type' must be one of {', '.join(SEARCH_TYPES)}", None, []

    tag_list: List[str] = []
    if tags is not None:
        if isinstance(tags, str) or not isinstance(tags, (list, tuple)) or not all(isinstance(t, str) for t in tags):
            return "Parameter 'tags' must be a list of strings", None, []
        tag_list = list(tags)

    parsed_method = None
    if method is not None:
        parsed_method = HttpMethod.parse(method)
        if parsed_method is None:
            allowed = ", ".join(m.value for m in HttpMethod)
            return f"Parameter 'method' must be one of {allowed}", None, []

    if isinstance(max_results, bool) or not isinstance(max_results, int) or not (
        MIN_RESULTS <= max_results <= MAX_RESULTS
    ):
        return f"Parameter 'max_results' must be an integer between {MIN_RESULTS} and {MAX_RESULTS}", None, []

    return None, parsed_method, tag_list


def _search_endpoints(
    index: SpecIndex, query: str, tags: Sequence[str], method: Optional[HttpMethod], max_results: int
) -> List[Tuple[Endpoint, Optional[float]]]:
    store = index.store

    if tags:
        endpoints = index.lookup.endpoints_by_tags(tags)
        if method:
            endpoints = [endpoint for endpoint in endpoints if endpoint.method == method]

        # Order the filtered endpoints by their rank over the whole corpus
        ranked = store.search_with_scores(query, store.size(ENDPOINTS), ENDPOINTS)
        rank = {endpoint.operation_id: (position, score) for position, (endpoint, score) in enumerate(ranked)}
        unranked = (len(rank), None)
        endpoints.sort(key=lambda endpoint: rank.get(endpoint.operation_id, unranked)[0])
        scored = [(endpoint, rank.get(endpoint.operation_id, unranked)[1]) for endpoint in endpoints]
    elif method:
        ranked = store.search_with_scores(query, store.size(ENDPOINTS), ENDPOINTS)
        scored = [(endpoint, score) for endpoint, score in ranked if endpoint.method == method]
    else:
        scored = store.search_with_scores(query, max_results, ENDPOINTS)

    return scored[:max_results]


def _with_score(summary: Dict[str, Any], score: Optional[float]) -> Dict[str, Any]:
    if score is not None:
        summary["score"] = round(score, 4)
    return summary


def searchAPI(
    resources: SharedResources,
    query: str,
    type: str = "all",
    tags: Optional[List[str]] = None,
    method: Optional[str] = None,
    max_results: int = 10,
) -> Dict[str, Any]:
    """
    Search endpoints and schemas of the loaded API description.

    Args:
        resources: Loaded shared resources
        query: Free-text search query
        type: "endpoint", "schema" or "all"
        tags: Only endpoints carrying any of these tags
        method: Only endpoints with this HTTP method
        max_results: Maximum results per list (1-20)

    Returns:
        {query, type, filter, endpoints, schemas, counts} or a structured error payload
    """
    if not resources.is_ready():
        return not_initialized_payload()

    error, parsed_method, tag_list = _validate(query, type, tags, method, max_results)
    if error:
        logger.warning(f"Invalid search parameters: {error}")
        return error_payload(error, INVALID_INPUT)

    logger.info(f"Search tool called: query='{query}', type={type}, tags={tag_list}, method={method}")
    index = resources.index

    endpoints: List[Tuple[Endpoint, Optional[float]]] = []
    if type in ("endpoint", "all"):
        endpoints = _search_endpoints(index, query, tag_list, parsed_method, max_results)

    schemas = []
    if type in ("schema", "all"):
        schemas = index.store.search_with_scores(query, max_results, SCHEMAS)

    return {
        "query": query,
        "type": type,
        "filter": {"tags": tag_list, "method": parsed_method.value if parsed_method else "any"},
        "endpoints": [_with_score(endpoint.to_summary(), score) for endpoint, score in endpoints],
        "schemas": [_with_score(schema.to_summary(), score) for schema, score in schemas],
        "counts": {"endpoints": len(endpoints), "schemas": len(schemas)},
    }

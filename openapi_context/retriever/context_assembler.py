"""Context assembly: picks a retrieval strategy for a classified query."""

import logging
from typing import List, Optional

from ..openapi_processor.data_classes import Endpoint
from .data_classes import (
    ENDPOINT,
    RESULT_ENDPOINT,
    RESULT_ENDPOINTS,
    RESULT_ERROR,
    RESULT_GENERAL,
    RESULT_SCHEMA,
    RESULT_SCHEMAS,
    SCHEMA,
    ContextResult,
    QueryClassification,
)
from .spec_index import SpecIndex

logger = logging.getLogger(__name__)


class ContextAssembler:
    """Turns a classification into a typed ContextResult using a SpecIndex."""

    def __init__(self, index: Optional[SpecIndex]):
        self.index = index

    def assemble(
        self,
        classification: QueryClassification,
        query: str,
        include_schemas: bool = True,
        limit: int = 5,
    ) -> ContextResult:
        """
        Assemble context for a query.

        Args:
            classification: Output of the query classifier
            query: Original query text, used for similarity fallbacks
            include_schemas: Attach related/similar schemas
            limit: Maximum number of entities per list in the result

        Returns:
            ContextResult; an "error" result only when no index is loaded
        """
        if self.index is None:
            logger.warning("API specification not loaded, cannot provide context")
            return ContextResult(type=RESULT_ERROR, classification=classification, error="API specification not loaded")

        if classification.kind == ENDPOINT:
            result = self._endpoint_context(classification, query, include_schemas, limit)
        elif classification.kind == SCHEMA:
            result = self._schema_context(classification, query, limit)
        else:
            result = self._semantic_context(classification, query, include_schemas, limit)

        return self._truncate(result, limit)

    def _endpoint_context(
        self, classification: QueryClassification, query: str, include_schemas: bool, limit: int
    ) -> ContextResult:
        entities = classification.entities

        if entities.operation_id:
            endpoint = self.index.lookup.get_endpoint(entities.operation_id)
            if endpoint is not None:
                related = self.index.related_schemas(endpoint) if include_schemas else []
                return ContextResult(
                    type=RESULT_ENDPOINT,
                    classification=classification,
                    endpoint=endpoint,
                    related_schemas=related,
                )
            logger.info(f"Operation '{entities.operation_id}' not found, trying tag/method filters")

        if entities.tags or entities.method:
            endpoints = self._filter_endpoints(classification, query, limit)
            if endpoints:
                return ContextResult(
                    type=RESULT_ENDPOINTS,
                    classification=classification,
                    endpoints=endpoints,
                    method=entities.method,
                    tags=entities.tags,
                )
            logger.info("No endpoints matched tag/method filters, falling back to semantic search")

        return self._semantic_context(classification, query, include_schemas, limit)

    def _filter_endpoints(self, classification: QueryClassification, query: str, limit: int) -> List[Endpoint]:
        entities = classification.entities

        if entities.tags:
            endpoints = self.index.lookup.endpoints_by_tags(entities.tags)
            if entities.method:
                endpoints = [endpoint for endpoint in endpoints if endpoint.method == entities.method]
        else:
            candidates = self.index.store.search_endpoints(query, limit * 2)
            endpoints = [endpoint for endpoint in candidates if endpoint.method == entities.method]

        return endpoints[:limit]

    def _schema_context(self, classification: QueryClassification, query: str, limit: int) -> ContextResult:
        schema_name = classification.entities.schema_name

        if schema_name:
            schema = self.index.lookup.get_schema(schema_name)
            if schema is not None:
                return ContextResult(type=RESULT_SCHEMA, classification=classification, schema=schema)
            logger.info(f"Schema '{schema_name}' not found, falling back to schema search")

        return ContextResult(
            type=RESULT_SCHEMAS,
            classification=classification,
            schemas=self.index.store.search_schemas(query, limit),
        )

    def _semantic_context(
        self, classification: QueryClassification, query: str, include_schemas: bool, limit: int
    ) -> ContextResult:
        endpoints = self.index.store.search_endpoints(query, limit)
        schemas = self.index.store.search_schemas(query, limit) if include_schemas else []

        return ContextResult(
            type=RESULT_GENERAL,
            classification=classification,
            overview=self.index.specification.overview(),
            endpoints=endpoints,
            schemas=schemas,
        )

    def _truncate(self, result: ContextResult, limit: int) -> ContextResult:
        """Cap every list in the result at limit."""
        limit = max(limit, 0)
        result.related_schemas = result.related_schemas[:limit]
        result.endpoints = result.endpoints[:limit]
        result.schemas = result.schemas[:limit]
        return result

"""In-memory embedding store with cosine top-K search over endpoints and schemas."""

import logging
import weakref
from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

from ..openapi_processor.data_classes import Endpoint, Schema, Specification
from .embedders import Embedder
from .embedding_utils import cosine_similarities, validate_embedding_dimensions

logger = logging.getLogger(__name__)

ENDPOINTS = "endpoints"
SCHEMAS = "schemas"
CORPORA = (ENDPOINTS, SCHEMAS)

Entity = Union[Endpoint, Schema]


@dataclass(frozen=True)
class EmbeddingRecord:
    """Vector for one entity; the entity itself is owned by the Specification."""

    entity_ref: "weakref.ReferenceType"
    vector: np.ndarray

    @property
    def entity(self):
        return self.entity_ref()


@dataclass(frozen=True)
class _Corpus:
    records: Tuple[EmbeddingRecord, ...]
    matrix: np.ndarray


def endpoint_text(endpoint: Endpoint) -> str:
    """Text that represents an endpoint for vectorization."""
    return " ".join(
        [
            endpoint.summary,
            endpoint.description,
            endpoint.path,
            endpoint.operation_id,
            " ".join(endpoint.tags),
        ]
    )


def schema_text(schema: Schema) -> str:
    """Text that represents a schema for vectorization."""
    property_descriptions = " ".join(f"{name}: {prop.description}" for name, prop in schema.properties.items())
    return " ".join([schema.name, schema.description, property_descriptions])


class EmbeddingStore:
    """Holds one vector per endpoint and schema and ranks them against queries."""

    def __init__(self, embedder: Embedder):
        self.embedder = embedder
        empty = _Corpus(records=(), matrix=np.zeros((0, embedder.dimension), dtype=np.float32))
        self._corpora = {ENDPOINTS: empty, SCHEMAS: empty}

    def build(self, specification: Specification) -> None:
        """
        Vectorize every endpoint and schema of the specification.

        The previous contents stay visible until the new corpora are complete,
        then both are swapped in with a single assignment.
        """
        endpoints = self._build_corpus(specification.endpoints, [endpoint_text(e) for e in specification.endpoints])
        schemas = self._build_corpus(specification.schemas, [schema_text(s) for s in specification.schemas])

        self._corpora = {ENDPOINTS: endpoints, SCHEMAS: schemas}

        logger.info(
            f"Created vector embeddings for {len(endpoints.records)} endpoints "
            f"and {len(schemas.records)} schemas ({self.embedder.name}, dim={self.embedder.dimension})"
        )

    def _build_corpus(self, entities, texts: List[str]) -> _Corpus:
        if not entities:
            return _Corpus(records=(), matrix=np.zeros((0, self.embedder.dimension), dtype=np.float32))

        matrix = np.asarray(self.embedder.embed_documents(texts), dtype=np.float32)
        if matrix.shape != (len(entities), self.embedder.dimension) or not validate_embedding_dimensions(matrix):
            raise ValueError(
                f"Embedder returned shape {matrix.shape}, expected ({len(entities)}, {self.embedder.dimension})"
            )

        records = tuple(
            EmbeddingRecord(entity_ref=weakref.ref(entity), vector=matrix[i]) for i, entity in enumerate(entities)
        )
        return _Corpus(records=records, matrix=matrix)

    def size(self, corpus: str) -> int:
        return len(self._corpora[corpus].records)

    def search_with_scores(self, query_text: str, k: int, corpus: str = ENDPOINTS) -> List[Tuple[Entity, float]]:
        """
        Rank a corpus against a query.

        Args:
            query_text: Free-text query
            k: Maximum number of results
            corpus: "endpoints" or "schemas"

        Returns:
            (entity, similarity) pairs, highest similarity first, ties in insertion order.
            Any internal failure is logged and yields an empty list.
        """
        if corpus not in CORPORA:
            logger.error(f"Unknown search corpus: {corpus}")
            return []

        current = self._corpora[corpus]
        if k <= 0 or not current.records:
            return []

        try:
            query_vector = self.embedder.embed_query(query_text)
            similarities = cosine_similarities(query_vector, current.matrix)
            order = np.argsort(-similarities, kind="stable")

            results = []
            for index in order:
                entity = current.records[index].entity
                if entity is None:
                    continue
                results.append((entity, float(similarities[index])))
                if len(results) >= k:
                    break
            return results

        except Exception as e:
            logger.error(f"Error during {corpus} semantic search: {e}")
            return []

    def search(self, query_text: str, k: int, corpus: str = ENDPOINTS) -> List[Entity]:
        """Top-k entities of a corpus for a query."""
        return [entity for entity, _ in self.search_with_scores(query_text, k, corpus)]

    def search_endpoints(self, query_text: str, k: int = 5) -> List[Endpoint]:
        return self.search(query_text, k, ENDPOINTS)

    def search_schemas(self, query_text: str, k: int = 5) -> List[Schema]:
        return self.search(query_text, k, SCHEMAS)

"""The process-owned index: specification, lookup maps and embedding store."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..openapi_processor.data_classes import Endpoint, Schema, Specification
from ..openapi_processor.processor import SpecLoader
from ..openapi_processor.reference_resolver import ref_to_name
from ..openapi_processor.reference_scanner import ReferenceScanner
from ..openapi_processor.validator import ValidatorConfig
from ..vector_store.embedders import Embedder
from ..vector_store.embedding_store import EmbeddingStore
from .lookup_index import LookupIndex

logger = logging.getLogger(__name__)


class SpecIndex:
    """
    Immutable bundle of everything query-time components read.

    Only built through build()/from_file(), which vectorize the specification
    before returning, so a SpecIndex never exists without its embedding store.
    """

    def __init__(self, specification: Specification, lookup: LookupIndex, store: EmbeddingStore):
        self.specification = specification
        self.lookup = lookup
        self.store = store
        self._scanner = ReferenceScanner()

    @classmethod
    def build(cls, specification: Specification, embedder: Embedder) -> "SpecIndex":
        """Create lookup maps and embeddings for a loaded specification."""
        lookup = LookupIndex(specification)
        logger.info("Creating vector embeddings for semantic search")
        store = EmbeddingStore(embedder)
        store.build(specification)
        return cls(specification, lookup, store)

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        embedder: Embedder,
        validator_config: Optional[ValidatorConfig] = None,
    ) -> "SpecIndex":
        """Load, validate and index an API description file (raises LoadError/ValidationError)."""
        specification = SpecLoader(validator_config).load(file_path)
        index = cls.build(specification, embedder)
        logger.info("OpenAPI specification parsed and indexed successfully")
        return index

    def related_schema_names(self, endpoint: Endpoint) -> List[str]:
        """Schema names referenced by the request body and responses, first-seen order."""
        contents = []
        if endpoint.request_body is not None:
            contents.append(endpoint.request_body.to_dict())
        contents.extend(response.to_dict() for response in endpoint.responses.values())

        names = {}
        for ref in self._scanner.find_references_in(*contents):
            name = ref_to_name(ref)
            if name is not None:
                names.setdefault(name, None)
        return list(names)

    def related_schemas(self, endpoint: Endpoint) -> List[Schema]:
        """Declared schemas referenced by an endpoint; unresolved names are dropped."""
        return self.lookup.get_schemas(self.related_schema_names(endpoint))

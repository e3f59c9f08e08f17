"""Exact-key lookup maps over a loaded specification."""

from typing import Dict, Iterable, List, Optional

from ..openapi_processor.data_classes import Endpoint, Schema, Specification


class LookupIndex:
    """Operation id and schema name maps, built once and never mutated."""

    def __init__(self, specification: Specification):
        self.specification = specification
        self._endpoints: Dict[str, Endpoint] = {e.operation_id: e for e in specification.endpoints}
        self._schemas: Dict[str, Schema] = {s.name: s for s in specification.schemas}

    def get_endpoint(self, operation_id: str) -> Optional[Endpoint]:
        """Endpoint with this operation id, or None."""
        return self._endpoints.get(operation_id)

    def get_schema(self, name: str) -> Optional[Schema]:
        """Schema with this name, or None."""
        return self._schemas.get(name)

    def get_schemas(self, names: Iterable[str]) -> List[Schema]:
        """Schemas for the given names in order; unknown names are skipped."""
        return [self._schemas[name] for name in names if name in self._schemas]

    def endpoints_by_tags(self, tags: Iterable[str]) -> List[Endpoint]:
        """Endpoints carrying any of the tags, in specification order."""
        wanted = set(tags)
        if not wanted:
            return []
        return [endpoint for endpoint in self.specification.endpoints if wanted.intersection(endpoint.tags)]

"""Data classes for query classification and assembled context."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..openapi_processor.data_classes import Endpoint, HttpMethod, Schema

if TYPE_CHECKING:
    from ..cli.config import Config

# Classification kinds
ENDPOINT = "endpoint"
SCHEMA = "schema"
GENERAL = "general"
UNKNOWN = "unknown"

# Context result types
RESULT_ENDPOINT = "endpoint"
RESULT_ENDPOINTS = "endpoints"
RESULT_SCHEMA = "schema"
RESULT_SCHEMAS = "schemas"
RESULT_GENERAL = "general"
RESULT_ERROR = "error"


@dataclass(frozen=True)
class QueryEntities:
    """Entities extracted from a query; unset fields were not found."""

    operation_id: Optional[str] = None
    schema_name: Optional[str] = None
    tags: Tuple[str, ...] = ()
    method: Optional[HttpMethod] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.operation_id is not None:
            result["operation_id"] = self.operation_id
        if self.schema_name is not None:
            result["schema_name"] = self.schema_name
        if self.tags:
            result["tags"] = list(self.tags)
        if self.method is not None:
            result["method"] = self.method.value
        return result


@dataclass(frozen=True)
class QueryClassification:
    """Intent guess for a free-text query."""

    kind: str
    confidence: float
    entities: QueryEntities = field(default_factory=QueryEntities)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind, "confidence": self.confidence}
        entities = self.entities.to_dict()
        if entities:
            result["entities"] = entities
        return result


@dataclass
class ContextResult:
    """Typed retrieval result; only the fields for its type are populated."""

    type: str
    classification: Optional[QueryClassification] = None
    endpoint: Optional[Endpoint] = None
    related_schemas: List[Schema] = field(default_factory=list)
    endpoints: List[Endpoint] = field(default_factory=list)
    schema: Optional[Schema] = None
    schemas: List[Schema] = field(default_factory=list)
    overview: Optional[Dict[str, Any]] = None
    method: Optional[HttpMethod] = None
    tags: Tuple[str, ...] = ()
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible rendering: {type, classification, data}."""
        if self.type == RESULT_ERROR:
            data: Dict[str, Any] = {"error": self.error}
        elif self.type == RESULT_ENDPOINT:
            data = {
                "endpoint": self.endpoint.to_dict(),
                "related_schemas": [schema.to_dict() for schema in self.related_schemas],
            }
        elif self.type == RESULT_ENDPOINTS:
            data = {
                "endpoints": [endpoint.to_dict() for endpoint in self.endpoints],
                "method": self.method.value if self.method else None,
                "tags": list(self.tags),
            }
        elif self.type == RESULT_SCHEMA:
            data = {"schema": self.schema.to_dict()}
        elif self.type == RESULT_SCHEMAS:
            data = {"schemas": [schema.to_dict() for schema in self.schemas]}
        else:
            data = {
                "overview": self.overview or {},
                "endpoints": [endpoint.to_dict() for endpoint in self.endpoints],
                "schemas": [schema.to_dict() for schema in self.schemas],
            }

        result: Dict[str, Any] = {"type": self.type, "data": data}
        if self.classification is not None:
            result["classification"] = self.classification.to_dict()
        return result


@dataclass
class RetrieverConfig:
    """Configuration for context retrieval and caching."""

    default_limit: int = 5
    cache_ttl_seconds: float = 300.0
    cache_check_period_seconds: float = 60.0
    cache_max_entries: int = 1000

    @classmethod
    def from_config(cls, config: "Config") -> "RetrieverConfig":
        """Create config from Config object."""
        return cls(
            default_limit=config.context_default_limit,
            cache_ttl_seconds=config.context_cache_ttl,
            cache_check_period_seconds=config.context_cache_check_period,
            cache_max_entries=config.context_cache_max_entries,
        )

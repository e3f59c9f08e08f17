"""Data classes for the normalized in-memory API specification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class HttpMethod(str, Enum):
    """HTTP methods that produce endpoints, in classification scan order."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: Any) -> Optional["HttpMethod"]:
        """Return the method for a case-insensitive verb, or None."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class OpaqueNode:
    """Passthrough for structure that is not a recognised OpenAPI construct."""

    raw: Any

    def to_dict(self) -> Any:
        return self.raw


@dataclass(frozen=True)
class SchemaRef:
    """A $ref pointer; name is set when it points at components/schemas."""

    ref: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"$ref": self.ref}


@dataclass(frozen=True)
class InlineSchema:
    """An inline schema object (has a type, properties or a composition keyword)."""

    raw: Dict[str, Any]
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.raw


SchemaNode = Union[SchemaRef, InlineSchema, OpaqueNode]


@dataclass(frozen=True)
class MediaType:
    """One content-type entry of a request body or response."""

    content_type: str
    schema: Optional[SchemaNode]
    raw: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return self.raw


@dataclass(frozen=True)
class Parameter:
    """Operation or path-level parameter."""

    name: str
    location: str  # "query", "path", "header", "cookie"
    required: bool
    description: str
    schema: Optional[SchemaNode]
    raw: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return self.raw


@dataclass(frozen=True)
class RequestBody:
    """Request body descriptor."""

    description: str
    required: bool
    content: Dict[str, MediaType]
    raw: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return self.raw


@dataclass(frozen=True)
class Response:
    """Response descriptor for one status code."""

    status_code: str
    description: str
    content: Dict[str, MediaType]
    raw: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return self.raw


@dataclass(frozen=True)
class PropertyDescriptor:
    """A single schema property."""

    name: str
    description: str
    type: Optional[str]
    ref_name: Optional[str]
    raw: Any

    def to_dict(self) -> Any:
        return self.raw


@dataclass(eq=False)
class Endpoint:
    """One (path, method) operation of the API."""

    path: str
    method: HttpMethod
    operation_id: str
    summary: str = ""
    description: str = ""
    parameters: List[Union[Parameter, SchemaRef, OpaqueNode]] = field(default_factory=list)
    request_body: Optional[Union[RequestBody, SchemaRef, OpaqueNode]] = None
    responses: Dict[str, Union[Response, SchemaRef, OpaqueNode]] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Full JSON-compatible rendering of the endpoint."""
        result = {
            "operation_id": self.operation_id,
            "path": self.path,
            "method": self.method.value,
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags),
            "parameters": [param.to_dict() for param in self.parameters],
            "responses": {code: response.to_dict() for code, response in self.responses.items()},
        }
        if self.request_body is not None:
            result["request_body"] = self.request_body.to_dict()
        return result

    def to_summary(self) -> Dict[str, Any]:
        """Short rendering used in search listings."""
        return {
            "operation_id": self.operation_id,
            "path": self.path,
            "method": self.method.value,
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags),
        }


@dataclass(eq=False)
class Schema:
    """One named component schema."""

    name: str
    schema: Any
    description: str = ""
    properties: Dict[str, PropertyDescriptor] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)

    def properties_dict(self) -> Dict[str, Any]:
        return {name: prop.to_dict() for name, prop in self.properties.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "properties": self.properties_dict(),
            "required": list(self.required),
            "schema": self.schema,
        }

    def to_summary(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": list(self.required)}


@dataclass(frozen=True)
class TagInfo:
    """Declared top-level tag."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class Specification:
    """Normalized, read-only API specification."""

    title: str
    version: str
    description: str
    base_url: str
    endpoints: Tuple[Endpoint, ...]
    schemas: Tuple[Schema, ...]
    tags: Tuple[TagInfo, ...] = ()
    openapi_version: str = ""
    source_path: str = ""
    unresolved_refs: Tuple[str, ...] = ()

    def overview(self) -> Dict[str, Any]:
        """Constant overview block returned with general queries."""
        return {
            "title": self.title,
            "version": self.version,
            "description": self.description,
            "base_url": self.base_url,
            "tags": [{"name": tag.name, "description": tag.description} for tag in self.tags],
        }

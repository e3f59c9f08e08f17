"""Element Extractor turning a parsed OpenAPI document into typed records."""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from .data_classes import (
    Endpoint,
    HttpMethod,
    InlineSchema,
    MediaType,
    OpaqueNode,
    Parameter,
    PropertyDescriptor,
    RequestBody,
    Response,
    Schema,
    SchemaNode,
    SchemaRef,
    TagInfo,
)
from .reference_resolver import ref_to_name

logger = logging.getLogger(__name__)

INLINE_SCHEMA_KEYS = ("type", "properties", "items", "allOf", "oneOf", "anyOf", "enum", "additionalProperties")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _schema_node(raw: Any) -> Optional[SchemaNode]:
    """Classify a schema-shaped value into the known constructs."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        if isinstance(raw.get("$ref"), str):
            return SchemaRef(ref=raw["$ref"], name=ref_to_name(raw["$ref"]))
        if any(key in raw for key in INLINE_SCHEMA_KEYS):
            schema_type = raw.get("type")
            return InlineSchema(raw=raw, type=schema_type if isinstance(schema_type, str) else None)
    return OpaqueNode(raw=raw)


def _media_types(content: Any) -> Dict[str, MediaType]:
    if not isinstance(content, dict):
        return {}
    media_types = {}
    for content_type, media in content.items():
        if not isinstance(media, dict):
            continue
        media_types[content_type] = MediaType(
            content_type=content_type, schema=_schema_node(media.get("schema")), raw=media
        )
    return media_types


def _reference(raw: Any) -> Optional[SchemaRef]:
    if isinstance(raw, dict) and isinstance(raw.get("$ref"), str):
        return SchemaRef(ref=raw["$ref"], name=ref_to_name(raw["$ref"]))
    return None


class ElementExtractor:
    """Extracts endpoints, schemas and document metadata from a parsed description."""

    def extract_endpoints(self, spec: Dict[str, Any]) -> List[Endpoint]:
        """
        Build one Endpoint per (path, method) pair in document order.

        Missing operation ids are synthesized from method and path; a numeric
        suffix keeps synthesized ids unique.
        """
        paths = spec.get("paths")
        if not isinstance(paths, dict):
            return []

        declared_ids = self._declared_operation_ids(paths)
        used_ids: Set[str] = set()
        endpoints = []

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue

            shared_parameters = path_item.get("parameters", [])

            for key, operation in path_item.items():
                # Verbs are lowercase keys in OpenAPI; "parameters", "summary" etc. are skipped
                method = HttpMethod.parse(key) if isinstance(key, str) and key.islower() else None
                if method is None or not isinstance(operation, dict):
                    continue

                operation_id = operation.get("operationId")
                if not isinstance(operation_id, str) or not operation_id.strip():
                    operation_id = self._synthesize_operation_id(method, path, declared_ids | used_ids)
                    logger.debug(f"Synthesized operationId '{operation_id}' for {method.value} {path}")
                used_ids.add(operation_id)

                endpoints.append(self._extract_endpoint(path, method, operation_id, operation, shared_parameters))

        return endpoints

    def extract_schemas(self, spec: Dict[str, Any]) -> List[Schema]:
        """Build one Schema per entry in components.schemas."""
        components = spec.get("components")
        if not isinstance(components, dict):
            return []

        schemas_section = components.get("schemas")
        if not isinstance(schemas_section, dict):
            return []

        return [self._extract_schema(str(name), raw) for name, raw in schemas_section.items()]

    def extract_info(self, spec: Dict[str, Any]) -> Dict[str, str]:
        """Extract title, version, description and base URL."""
        info = spec.get("info") if isinstance(spec.get("info"), dict) else {}

        base_url = ""
        servers = spec.get("servers")
        if isinstance(servers, list) and servers and isinstance(servers[0], dict):
            base_url = _text(servers[0].get("url"))

        version = info.get("version", "")
        return {
            "title": _text(info.get("title")),
            "version": version if isinstance(version, str) else str(version),
            "description": _text(info.get("description")),
            "base_url": base_url,
        }

    def extract_tags(self, spec: Dict[str, Any]) -> List[TagInfo]:
        """Extract the declared top-level tags section."""
        tags = spec.get("tags")
        if not isinstance(tags, list):
            return []
        return [
            TagInfo(name=tag["name"], description=_text(tag.get("description")))
            for tag in tags
            if isinstance(tag, dict) and isinstance(tag.get("name"), str)
        ]

    def _declared_operation_ids(self, paths: Dict[str, Any]) -> Set[str]:
        declared = set()
        for path_item in paths.values():
            if not isinstance(path_item, dict):
                continue
            for operation in path_item.values():
                operation_id = operation.get("operationId") if isinstance(operation, dict) else None
                if isinstance(operation_id, str) and operation_id.strip():
                    declared.add(operation_id)
        return declared

    def _synthesize_operation_id(self, method: HttpMethod, path: str, taken: Set[str]) -> str:
        base = f"{method.value.lower()}{path}"
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        return candidate

    def _extract_endpoint(
        self,
        path: str,
        method: HttpMethod,
        operation_id: str,
        operation: Dict[str, Any],
        shared_parameters: Any,
    ) -> Endpoint:
        tags = operation.get("tags", [])
        unique_tags: Dict[str, None] = {}
        if isinstance(tags, list):
            for tag in tags:
                if isinstance(tag, str):
                    unique_tags.setdefault(tag, None)

        responses = {}
        raw_responses = operation.get("responses")
        if isinstance(raw_responses, dict):
            responses = {str(code): self._extract_response(str(code), raw) for code, raw in raw_responses.items()}

        request_body = None
        if "requestBody" in operation:
            request_body = self._extract_request_body(operation["requestBody"])

        return Endpoint(
            path=path,
            method=method,
            operation_id=operation_id,
            summary=_text(operation.get("summary")),
            description=_text(operation.get("description")),
            parameters=self._merge_parameters(shared_parameters, operation.get("parameters", [])),
            request_body=request_body,
            responses=responses,
            tags=tuple(unique_tags),
        )

    def _merge_parameters(
        self, shared: Any, own: Any
    ) -> List[Union[Parameter, SchemaRef, OpaqueNode]]:
        """Combine path-level and operation-level parameters; the operation wins on (name, in)."""
        merged: Dict[Tuple[str, str], Union[Parameter, SchemaRef, OpaqueNode]] = {}
        unkeyed = []

        for raw_list in (shared, own):
            if not isinstance(raw_list, list):
                continue
            for raw in raw_list:
                parameter = self._extract_parameter(raw)
                if isinstance(parameter, Parameter):
                    merged[(parameter.name, parameter.location)] = parameter
                else:
                    unkeyed.append(parameter)

        return list(merged.values()) + unkeyed

    def _extract_parameter(self, raw: Any) -> Union[Parameter, SchemaRef, OpaqueNode]:
        reference = _reference(raw)
        if reference is not None:
            return reference
        if isinstance(raw, dict) and isinstance(raw.get("name"), str) and isinstance(raw.get("in"), str):
            return Parameter(
                name=raw["name"],
                location=raw["in"],
                required=bool(raw.get("required", False)),
                description=_text(raw.get("description")),
                schema=_schema_node(raw.get("schema")),
                raw=raw,
            )
        return OpaqueNode(raw=raw)

    def _extract_request_body(self, raw: Any) -> Union[RequestBody, SchemaRef, OpaqueNode]:
        reference = _reference(raw)
        if reference is not None:
            return reference
        if isinstance(raw, dict):
            return RequestBody(
                description=_text(raw.get("description")),
                required=bool(raw.get("required", False)),
                content=_media_types(raw.get("content")),
                raw=raw,
            )
        return OpaqueNode(raw=raw)

    def _extract_response(self, status_code: str, raw: Any) -> Union[Response, SchemaRef, OpaqueNode]:
        reference = _reference(raw)
        if reference is not None:
            return reference
        if isinstance(raw, dict):
            return Response(
                status_code=status_code,
                description=_text(raw.get("description")),
                content=_media_types(raw.get("content")),
                raw=raw,
            )
        return OpaqueNode(raw=raw)

    def _extract_schema(self, name: str, raw: Any) -> Schema:
        if not isinstance(raw, dict):
            return Schema(name=name, schema=raw)

        properties = {}
        raw_properties = raw.get("properties")
        if isinstance(raw_properties, dict):
            for prop_name, prop in raw_properties.items():
                properties[str(prop_name)] = self._extract_property(str(prop_name), prop)

        required = raw.get("required", [])
        return Schema(
            name=name,
            schema=raw,
            description=_text(raw.get("description")),
            properties=properties,
            required=[item for item in required if isinstance(item, str)] if isinstance(required, list) else [],
        )

    def _extract_property(self, name: str, raw: Any) -> PropertyDescriptor:
        if not isinstance(raw, dict):
            return PropertyDescriptor(name=name, description="", type=None, ref_name=None, raw=raw)

        prop_type = raw.get("type")
        ref_name = ref_to_name(raw.get("$ref"))
        if ref_name is None and isinstance(raw.get("items"), dict):
            ref_name = ref_to_name(raw["items"].get("$ref"))

        return PropertyDescriptor(
            name=name,
            description=_text(raw.get("description")),
            type=prop_type if isinstance(prop_type, str) else None,
            ref_name=ref_name,
            raw=raw,
        )

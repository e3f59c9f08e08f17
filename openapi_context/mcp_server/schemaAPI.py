"""schema tool implementation: schema fragments by name or by operation."""

import logging
from typing import Any, Dict, Optional

from .response_assembler import (
    INVALID_INPUT,
    NOT_FOUND,
    SCHEMA_PARTS,
    error_payload,
    format_schema,
    not_initialized_payload,
)
from .shared_resources import SharedResources

logger = logging.getLogger(__name__)


def schemaAPI(
    resources: SharedResources,
    name: Optional[str] = None,
    operation_id: Optional[str] = None,
    part: str = "full",
) -> Dict[str, Any]:
    """
    Retrieve schema information.

    Exactly one of name / operation_id must be given. By name the schema is
    returned in the requested part; by operation id every schema referenced
    by the operation's request body and responses is returned.
    """
    if not resources.is_ready():
        return not_initialized_payload()

    if part not in SCHEMA_PARTS:
        return error_payload(f"Parameter 'part' must be one of {', '.join(SCHEMA_PARTS)}", INVALID_INPUT)

    for label, value in (("name", name), ("operation_id", operation_id)):
        if value is not None and not isinstance(value, str):
            return error_payload(f"Parameter '{label}' must be a string", INVALID_INPUT)

    has_name = bool(name)
    has_operation_id = bool(operation_id)

    if not has_name and not has_operation_id:
        logger.warning("Neither schema name nor operation ID provided")
        return error_payload("Either schema name or operation ID must be provided", INVALID_INPUT)

    if has_name and has_operation_id:
        logger.warning("Both schema name and operation ID provided")
        return error_payload("Provide either schema name or operation ID, not both", INVALID_INPUT)

    index = resources.index
    logger.info(f"Schema tool called: name={name}, operation_id={operation_id}, part={part}")

    if has_name:
        schema = index.lookup.get_schema(name)
        if schema is None:
            return error_payload(f"Schema '{name}' not found in the API specification", NOT_FOUND)
        return format_schema(schema, part)

    endpoint = index.lookup.get_endpoint(operation_id)
    if endpoint is None:
        return error_payload(f"Operation '{operation_id}' not found in the API specification", NOT_FOUND)

    schemas = [format_schema(schema, part) for schema in index.related_schemas(endpoint)]
    return {"operation_id": endpoint.operation_id, "schemas": schemas, "count": len(schemas)}

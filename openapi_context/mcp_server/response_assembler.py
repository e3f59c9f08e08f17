"""Formatting of tool responses and structured error payloads."""

from typing import Any, Dict

from ..openapi_processor.data_classes import Schema

INVALID_INPUT = "invalid_input"
NOT_FOUND = "not_found"
NOT_INITIALIZED = "not_initialized"

SCHEMA_PARTS = ("overview", "properties", "full")


def error_payload(message: str, error_type: str) -> Dict[str, Any]:
    """Structured error returned to the caller instead of raising."""
    return {"error": message, "error_type": error_type}


def not_initialized_payload() -> Dict[str, Any]:
    return error_payload(
        "Server not properly initialized: the API specification has not been loaded", NOT_INITIALIZED
    )


def format_schema(schema: Schema, part: str = "full") -> Dict[str, Any]:
    """Render the requested part of a schema."""
    if part == "overview":
        return schema.to_summary()

    if part == "properties":
        return {"name": schema.name, "properties": schema.properties_dict()}

    return schema.to_dict()

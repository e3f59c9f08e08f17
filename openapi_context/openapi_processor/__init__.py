"""Loading and normalization of OpenAPI descriptions."""

from .data_classes import Endpoint, HttpMethod, Schema, Specification
from .errors import LoadError, SpecError, ValidationError
from .processor import SpecLoader, load_specification
from .reference_resolver import ref_to_name

__all__ = [
    "Endpoint",
    "HttpMethod",
    "Schema",
    "Specification",
    "LoadError",
    "SpecError",
    "ValidationError",
    "SpecLoader",
    "load_specification",
    "ref_to_name",
]

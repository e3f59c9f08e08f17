"""MCP tool layer: search, schema and ask over a loaded API description."""

from .askAPI import askAPI
from .schemaAPI import schemaAPI
from .searchAPI import searchAPI
from .shared_resources import SharedResources

__all__ = ["SharedResources", "askAPI", "schemaAPI", "searchAPI"]

"""Schema command - run the schema tool from the command line."""

from typing import Optional

from ...mcp_server.schemaAPI import schemaAPI
from ..config import Config
from ._resources import load_resources, print_payload


def schema_command(config: Config, name: Optional[str] = None, operation_id: Optional[str] = None, part: str = "full"):
    resources = load_resources(config)
    print_payload(schemaAPI(resources, name=name, operation_id=operation_id, part=part))

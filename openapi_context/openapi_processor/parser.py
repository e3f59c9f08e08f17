"""OpenAPI Parser for JSON and YAML files."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml


@dataclass
class ParseResult:
    """Result of parsing an OpenAPI file."""

    success: bool
    data: Dict[str, Any] = None
    error: str = None
    file_type: str = None  # 'json' or 'yaml'


class OpenAPIParser:
    """Parses OpenAPI description files in JSON or YAML format."""

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse an OpenAPI description file.

        Args:
            file_path: Path to the OpenAPI file (.json, .yaml, .yml)

        Returns:
            ParseResult with parsed data or error information
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return ParseResult(success=False, error=f"File not found: {file_path}")

        if not file_path.is_file():
            return ParseResult(success=False, error=f"Path is not a file: {file_path}")

        file_type = self._get_file_type(file_path)
        if file_type == "unknown":
            return ParseResult(success=False, error=f"Unsupported file extension: {file_path.suffix}")

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}", file_type=file_type)
        except OSError as e:
            return ParseResult(success=False, error=f"Error reading file: {e}", file_type=file_type)

        return self.parse_content(content, file_type)

    def parse_content(self, content: str, file_type: str) -> ParseResult:
        """Parse already-read content of the given type ('json' or 'yaml')."""
        if file_type == "json":
            return self._parse_json(content)
        if file_type == "yaml":
            return self._parse_yaml(content)
        return ParseResult(success=False, error=f"Unsupported file type: {file_type}")

    def _get_file_type(self, file_path: Path) -> str:
        """Determine file type from extension."""
        extension = file_path.suffix.lower()
        if extension == ".json":
            return "json"
        elif extension in [".yaml", ".yml"]:
            return "yaml"
        else:
            return "unknown"

    def _parse_json(self, content: str) -> ParseResult:
        """Parse JSON content."""
        try:
            data = json.loads(content)
            return ParseResult(success=True, data=data, file_type="json")
        except json.JSONDecodeError as e:
            return ParseResult(success=False, error=f"Invalid JSON format: {e}", file_type="json")

    def _parse_yaml(self, content: str) -> ParseResult:
        """Parse YAML content."""
        try:
            data = yaml.safe_load(content)
            return ParseResult(success=True, data=data, file_type="yaml")
        except yaml.YAMLError as e:
            return ParseResult(success=False, error=f"Invalid YAML format: {e}", file_type="yaml")

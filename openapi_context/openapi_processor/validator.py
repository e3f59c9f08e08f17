"""Structural validation of a parsed OpenAPI description."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .data_classes import HttpMethod

if TYPE_CHECKING:
    from ..cli.config import Config


@dataclass
class ValidationResult:
    """Result of OpenAPI validation."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ValidatorConfig:
    """Configuration for OpenAPI validation."""

    min_openapi_version: str = "3.0.0"
    require_info_section: bool = True
    require_paths_or_components: bool = True

    @classmethod
    def from_config(cls, config: "Config") -> "ValidatorConfig":
        """Create config from Config object."""
        return cls(
            min_openapi_version=config.min_openapi_version,
            require_info_section=config.require_info_section,
            require_paths_or_components=config.require_paths_or_components,
        )


OPERATION_KEYS = tuple(method.value.lower() for method in HttpMethod)

COMPONENT_SECTIONS = {
    "schemas",
    "responses",
    "parameters",
    "examples",
    "requestBodies",
    "headers",
    "securitySchemes",
    "links",
    "callbacks",
}


class OpenAPIValidator:
    """Validates OpenAPI description structure and requirements."""

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()

    def validate(self, spec_data: Any) -> ValidationResult:
        """
        Validate an OpenAPI description.

        Args:
            spec_data: Parsed OpenAPI document

        Returns:
            ValidationResult with validation status and any errors/warnings
        """
        if spec_data is None:
            return ValidationResult(is_valid=False, errors=["Specification data is None"])

        if not isinstance(spec_data, dict):
            return ValidationResult(is_valid=False, errors=["Specification data must be a dictionary"])

        errors: List[str] = []
        warnings: List[str] = []

        openapi_error = self._validate_openapi_version(spec_data)
        if openapi_error:
            errors.append(openapi_error)

        if self.config.require_info_section:
            info_error = self._validate_info_section(spec_data)
            if info_error:
                errors.append(info_error)

        if self.config.require_paths_or_components:
            if "paths" not in spec_data and "components" not in spec_data:
                errors.append("Specification must have either 'paths' or 'components' section")

        if "paths" in spec_data:
            errors.extend(self._validate_paths_section(spec_data["paths"]))

        if "components" in spec_data:
            errors.extend(self._validate_components_section(spec_data["components"], warnings))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)

    def _validate_openapi_version(self, spec_data: Dict[str, Any]) -> Optional[str]:
        """Validate the openapi version field."""
        if "openapi" not in spec_data:
            return "Missing required 'openapi' field"

        openapi_version = spec_data["openapi"]

        if not isinstance(openapi_version, str):
            return "OpenAPI version must be a string"

        if not self._is_version_supported(openapi_version):
            return (
                f"OpenAPI version {openapi_version} is below minimum required version {self.config.min_openapi_version}"
            )

        return None

    def _is_version_supported(self, spec_version: str) -> bool:
        """Compare dotted numeric versions, padding the shorter one with zeros."""
        try:
            spec_parts = [int(x) for x in spec_version.split(".")]
            min_parts = [int(x) for x in self.config.min_openapi_version.split(".")]
        except ValueError:
            return False

        max_len = max(len(spec_parts), len(min_parts))
        spec_parts.extend([0] * (max_len - len(spec_parts)))
        min_parts.extend([0] * (max_len - len(min_parts)))

        return spec_parts >= min_parts

    def _validate_info_section(self, spec_data: Dict[str, Any]) -> Optional[str]:
        """Validate the info section."""
        if "info" not in spec_data:
            return "Missing required 'info' section"

        info = spec_data["info"]
        if not isinstance(info, dict):
            return "Info section must be an object"

        if "title" not in info:
            return "Info section missing required 'title' field"

        if "version" not in info:
            return "Info section missing required 'version' field"

        return None

    def _validate_paths_section(self, paths: Any) -> List[str]:
        """Validate path items, their operations and operation id uniqueness."""
        errors = []

        if not isinstance(paths, dict):
            errors.append("Paths section must be an object")
            return errors

        seen_operation_ids: Dict[str, str] = {}

        for path, path_item in paths.items():
            if not isinstance(path, str):
                errors.append(f"Path key must be a string, got {type(path).__name__}")
                continue

            if not path.startswith("/"):
                errors.append(f"Path '{path}' must start with '/'")

            if not isinstance(path_item, dict):
                errors.append(f"Path item for '{path}' must be an object")
                continue

            for method in OPERATION_KEYS:
                if method not in path_item:
                    continue

                operation = path_item[method]
                location = f"{method.upper()} {path}"
                if not isinstance(operation, dict):
                    errors.append(f"Operation {location} must be an object")
                    continue

                operation_id = operation.get("operationId")
                # Blank ids are treated as absent and synthesized during extraction
                if operation_id is None or (isinstance(operation_id, str) and not operation_id.strip()):
                    continue
                if not isinstance(operation_id, str):
                    errors.append(f"Operation {location} has an invalid operationId")
                elif operation_id in seen_operation_ids:
                    errors.append(
                        f"Duplicate operationId '{operation_id}' in {location} "
                        f"(already used by {seen_operation_ids[operation_id]})"
                    )
                else:
                    seen_operation_ids[operation_id] = location

        return errors

    def _validate_components_section(self, components: Any, warnings: List[str]) -> List[str]:
        """Validate the components section structure."""
        errors = []

        if not isinstance(components, dict):
            errors.append("Components section must be an object")
            return errors

        for component_type, component_items in components.items():
            if component_type not in COMPONENT_SECTIONS:
                # Extensions are allowed
                warnings.append(f"Unknown component type '{component_type}'")
                continue

            if not isinstance(component_items, dict):
                errors.append(f"Component type '{component_type}' must be an object")

        return errors

"""Spec loader orchestrating parse, validate, extract and reference checks."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .data_classes import Specification
from .errors import LoadError, ValidationError
from .extractor import ElementExtractor
from .parser import OpenAPIParser
from .reference_resolver import ReferenceResolver
from .reference_scanner import ReferenceScanner
from .validator import OpenAPIValidator, ValidatorConfig

logger = logging.getLogger(__name__)


class SpecLoader:
    """Loads one OpenAPI description into an immutable Specification."""

    def __init__(self, validator_config: Optional[ValidatorConfig] = None):
        self.parser = OpenAPIParser()
        self.validator = OpenAPIValidator(validator_config)
        self.extractor = ElementExtractor()
        self.scanner = ReferenceScanner()

    def load(self, file_path: Union[str, Path]) -> Specification:
        """
        Parse, validate and normalize an API description file.

        Args:
            file_path: Path to a .json, .yaml or .yml OpenAPI document

        Returns:
            The normalized Specification

        Raises:
            LoadError: the file is missing, unreadable or not parseable
            ValidationError: the document is not a valid OpenAPI description
        """
        logger.info(f"Parsing OpenAPI specification from {file_path}")
        parse_result = self.parser.parse_file(file_path)
        if not parse_result.success:
            logger.error(f"Failed to load OpenAPI specification: {parse_result.error}")
            raise LoadError(parse_result.error)

        return self.load_data(parse_result.data, source_path=str(file_path))

    def load_data(self, spec_data: Any, source_path: str = "") -> Specification:
        """Validate and normalize an already-parsed document."""
        logger.info("Validating OpenAPI specification")
        validation_result = self.validator.validate(spec_data)
        for warning in validation_result.warnings:
            logger.warning(f"Validation warning: {warning}")
        if not validation_result.is_valid:
            logger.error(f"OpenAPI specification is invalid: {validation_result.errors}")
            raise ValidationError("Invalid OpenAPI specification", validation_result.errors)

        return self._build_specification(spec_data, source_path)

    def _build_specification(self, spec_data: Dict[str, Any], source_path: str) -> Specification:
        info = self.extractor.extract_info(spec_data)
        endpoints = self.extractor.extract_endpoints(spec_data)
        schemas = self.extractor.extract_schemas(spec_data)

        resolver = ReferenceResolver(schema.name for schema in schemas)
        refs = self.scanner.find_references_in(spec_data.get("paths"), spec_data.get("components"))
        unresolved = resolver.find_unresolved(refs)
        for ref in unresolved:
            logger.warning(f"Unresolved reference: {ref}")

        specification = Specification(
            title=info["title"],
            version=info["version"],
            description=info["description"],
            base_url=info["base_url"],
            endpoints=tuple(endpoints),
            schemas=tuple(schemas),
            tags=tuple(self.extractor.extract_tags(spec_data)),
            openapi_version=spec_data.get("openapi", ""),
            source_path=source_path,
            unresolved_refs=tuple(unresolved),
        )

        logger.info(
            f"Loaded '{specification.title}' {specification.version}: "
            f"{len(endpoints)} endpoints, {len(schemas)} schemas, {len(unresolved)} unresolved references"
        )
        return specification


def load_specification(
    file_path: Union[str, Path], validator_config: Optional[ValidatorConfig] = None
) -> Specification:
    """Convenience wrapper around SpecLoader.load."""
    return SpecLoader(validator_config).load(file_path)

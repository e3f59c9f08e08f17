"""Tests for OpenAPI Validator."""

from openapi_context.openapi_processor.validator import OpenAPIValidator, ValidatorConfig


class TestOpenAPIValidator:
    """Test cases for OpenAPIValidator."""

    def test_validate_valid_minimal_spec(self):
        """Test validation of a minimal valid OpenAPI spec."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {},
        }

        validator = OpenAPIValidator()
        result = validator.validate(spec_data)

        assert result.is_valid is True
        assert len(result.errors) == 0

    def test_validate_spec_with_components_only(self):
        """Test validation of spec with components but no paths."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "components": {"schemas": {"Pet": {"type": "object"}}},
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is True

    def test_validate_missing_openapi_field(self):
        """Test validation failure when openapi field is missing."""
        spec_data = {"info": {"title": "Test API", "version": "1.0.0"}, "paths": {}}

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("Missing required 'openapi' field" in error for error in result.errors)

    def test_validate_missing_info_section(self):
        """Test validation failure when info section is missing."""
        spec_data = {"openapi": "3.0.0", "paths": {}}

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("Missing required 'info' section" in error for error in result.errors)

    def test_validate_missing_title_and_version(self):
        """Test validation failure when info.title or info.version is missing."""
        validator = OpenAPIValidator()

        no_title = validator.validate({"openapi": "3.0.0", "info": {"version": "1.0.0"}, "paths": {}})
        no_version = validator.validate({"openapi": "3.0.0", "info": {"title": "Test API"}, "paths": {}})

        assert any("missing required 'title' field" in error for error in no_title.errors)
        assert any("missing required 'version' field" in error for error in no_version.errors)

    def test_validate_missing_paths_and_components(self):
        """Test validation failure when both paths and components are missing."""
        spec_data = {"openapi": "3.0.0", "info": {"title": "Test API", "version": "1.0.0"}}

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("either 'paths' or 'components'" in error for error in result.errors)

    def test_validate_version_below_minimum(self):
        """Test that Swagger 2.0 documents are rejected."""
        spec_data = {"openapi": "2.0", "info": {"title": "Test API", "version": "1.0.0"}, "paths": {}}

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("below minimum required version" in error for error in result.errors)

    def test_validate_short_version_is_padded(self):
        """Test that '3.0' compares equal to the 3.0.0 minimum."""
        spec_data = {"openapi": "3.0", "info": {"title": "Test API", "version": "1.0.0"}, "paths": {}}

        assert OpenAPIValidator().validate(spec_data).is_valid is True

    def test_validate_non_dict(self):
        """Test validation of documents that are not objects."""
        validator = OpenAPIValidator()

        assert validator.validate(None).is_valid is False
        assert validator.validate(["openapi"]).errors == ["Specification data must be a dictionary"]

    def test_validate_path_must_start_with_slash(self):
        """Test that relative path keys are rejected."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {"pets": {}},
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("must start with '/'" in error for error in result.errors)

    def test_validate_operation_must_be_object(self):
        """Test that non-object operations are rejected."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {"/pets": {"get": "list pets"}},
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert "Operation GET /pets must be an object" in result.errors

    def test_validate_duplicate_operation_ids(self):
        """Test that operation ids must be unique across the document."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {
                "/pets": {"get": {"operationId": "listPets", "responses": {}}},
                "/animals": {"get": {"operationId": "listPets", "responses": {}}},
            },
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert any("Duplicate operationId 'listPets'" in error for error in result.errors)

    def test_validate_blank_operation_id_is_allowed(self):
        """Test that blank operation ids are left for synthesis, not rejected."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {
                "/pets": {"get": {"operationId": "", "responses": {}}},
                "/animals": {"get": {"operationId": " ", "responses": {}}},
                "/owners": {"get": {"operationId": 42, "responses": {}}},
            },
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.errors == ["Operation GET /owners has an invalid operationId"]

    def test_validate_unknown_component_type_is_warning(self):
        """Test that extension component sections only produce warnings."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "components": {"x-custom": {}, "schemas": {}},
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is True
        assert result.warnings == ["Unknown component type 'x-custom'"]

    def test_validate_component_section_must_be_object(self):
        """Test that known component sections must be objects."""
        spec_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "components": {"schemas": ["Pet"]},
        }

        result = OpenAPIValidator().validate(spec_data)

        assert result.is_valid is False
        assert "Component type 'schemas' must be an object" in result.errors

    def test_relaxed_config(self):
        """Test that info and paths requirements can be switched off."""
        config = ValidatorConfig(require_info_section=False, require_paths_or_components=False)

        result = OpenAPIValidator(config).validate({"openapi": "3.1.0"})

        assert result.is_valid is True

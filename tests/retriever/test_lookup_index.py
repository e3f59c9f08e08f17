"""Tests for LookupIndex and SpecIndex."""

from openapi_context.retriever.lookup_index import LookupIndex
from openapi_context.retriever.spec_index import SpecIndex
from openapi_context.vector_store.embedders import HashingEmbedder


class TestLookupIndex:
    """Test cases for LookupIndex."""

    def test_every_endpoint_found_by_operation_id(self, specification):
        """Test that lookup by operation id returns each endpoint."""
        lookup = LookupIndex(specification)

        for endpoint in specification.endpoints:
            assert lookup.get_endpoint(endpoint.operation_id) is endpoint

    def test_schema_names_are_a_bijection(self, specification):
        """Test that lookup by name maps each declared name to its own schema."""
        lookup = LookupIndex(specification)

        assert len({s.name for s in specification.schemas}) == len(specification.schemas)
        for schema in specification.schemas:
            assert lookup.get_schema(schema.name) is schema

    def test_misses(self, specification):
        """Test that unknown keys return None."""
        lookup = LookupIndex(specification)

        assert lookup.get_endpoint("deleteEverything") is None
        assert lookup.get_schema("widget") is None

    def test_get_schemas_skips_unknown(self, specification):
        """Test that batch lookup keeps order and drops unknown names."""
        lookup = LookupIndex(specification)

        schemas = lookup.get_schemas(["Widget", "Missing", "ItemRecord"])

        assert [s.name for s in schemas] == ["Widget", "ItemRecord"]

    def test_endpoints_by_tags(self, specification):
        """Test any-of tag filtering in specification order."""
        lookup = LookupIndex(specification)

        inventory = lookup.endpoints_by_tags(["inventory"])
        both = lookup.endpoints_by_tags(["inventory", "items"])

        assert [e.operation_id for e in inventory] == ["listWidgets", "replaceWidgets"]
        assert len(both) == 6
        assert lookup.endpoints_by_tags([]) == []
        assert lookup.endpoints_by_tags(["Items"]) == []



class TestSpecIndex:
    """Test cases for SpecIndex."""

    def test_from_file(self, spec_file):
        """Test loading and indexing a description file."""
        index = SpecIndex.from_file(spec_file, HashingEmbedder())

        assert index.specification.title == "Catalog API"
        assert index.lookup.get_endpoint("createItem") is not None
        assert index.store.size("endpoints") == 7

    def test_related_schemas_in_first_seen_order(self, spec_index):
        """Test schemas referenced by request body then responses."""
        endpoint = spec_index.lookup.get_endpoint("createItem")

        assert spec_index.related_schema_names(endpoint) == ["NewItemRequest", "ItemRecord", "ErrorResponse"]
        assert [s.name for s in spec_index.related_schemas(endpoint)] == [
            "NewItemRequest",
            "ItemRecord",
            "ErrorResponse",
        ]

    def test_related_schemas_nested_and_deduplicated(self, spec_index):
        """Test array item references and repeated references."""
        get_item = spec_index.lookup.get_endpoint("getItem")
        replace_widgets = spec_index.lookup.get_endpoint("replaceWidgets")

        assert spec_index.related_schema_names(get_item) == ["ItemRecord", "ErrorResponse"]
        assert spec_index.related_schema_names(replace_widgets) == ["Widget"]

    def test_unresolved_related_schemas_dropped(self, spec_index):
        """Test that references to undeclared schemas are skipped."""
        legacy = spec_index.lookup.get_endpoint("getLegacy")

        assert spec_index.related_schema_names(legacy) == ["Missing"]
        assert spec_index.related_schemas(legacy) == []

    def test_endpoint_without_schemas(self, spec_index):
        """Test an endpoint with no request body or response content."""
        delete_item = spec_index.lookup.get_endpoint("delete/items/{itemId}")

        assert spec_index.related_schemas(delete_item) == []

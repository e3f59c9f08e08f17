"""Tests for the ask tool and shared resources."""

import pytest

from openapi_context.cli.config import Config
from openapi_context.mcp_server.askAPI import askAPI
from openapi_context.mcp_server.shared_resources import SharedResources
from openapi_context.openapi_processor.errors import LoadError


class TestAskTool:
    """Test cases for askAPI."""

    def test_endpoint_question(self, resources):
        """Test a question naming an operation."""
        response = askAPI(resources, "create item")

        assert response["type"] == "endpoint"
        assert response["classification"]["kind"] == "endpoint"
        assert response["classification"]["confidence"] == 0.9
        assert response["data"]["endpoint"]["operation_id"] == "createItem"
        assert len(response["data"]["related_schemas"]) == 3

    def test_schema_question(self, resources):
        """Test a question naming a schema."""
        response = askAPI(resources, "What fields does the Widget schema have?")

        assert response["type"] == "schema"
        assert response["data"]["schema"]["name"] == "Widget"

    def test_general_question(self, resources):
        """Test a question with no recognisable entities."""
        response = askAPI(resources, "hello there", include_schemas=False, limit=2)

        assert response["type"] == "general"
        assert response["data"]["overview"]["title"] == "Catalog API"
        assert len(response["data"]["endpoints"]) == 2
        assert response["data"]["schemas"] == []

    @pytest.mark.parametrize("limit", [0, 21, "5", True])
    def test_invalid_limit(self, resources, limit):
        """Test that limit must be an integer in range."""
        response = askAPI(resources, "create item", limit=limit)

        assert response["error_type"] == "invalid_input"

    def test_not_initialized(self):
        """Test calling the tool before the index is loaded."""
        response = askAPI(SharedResources(), "create item")

        assert response["error_type"] == "not_initialized"


@pytest.fixture
def hashing_env(monkeypatch, spec_file):
    """Environment selecting the catalog file and the hashing embedder."""
    monkeypatch.setenv("OPENAPI_SPEC_PATH", str(spec_file))
    monkeypatch.setenv("EMBEDDING_BACKEND", "hashing")
    monkeypatch.setenv("EMBEDDING_DIMENSION", "128")
    monkeypatch.setenv("CONTEXT_DEFAULT_LIMIT", "3")


class TestSharedResources:
    """Test cases for SharedResources."""

    def test_not_ready_before_load(self):
        """Test that fresh resources are not ready."""
        assert SharedResources().is_ready() is False

    def test_load_from_config(self, hashing_env):
        """Test building the index from configuration."""
        resources = SharedResources()
        resources.load_from_config(Config())

        assert resources.is_ready() is True
        assert resources.index.store.embedder.dimension == 128
        assert resources.provider.config.default_limit == 3

    def test_failed_load_leaves_resources_unready(self, hashing_env, monkeypatch, tmp_path):
        """Test that a load failure propagates and nothing is attached."""
        monkeypatch.setenv("OPENAPI_SPEC_PATH", str(tmp_path / "missing.yaml"))
        resources = SharedResources()

        with pytest.raises(LoadError):
            resources.load_from_config(Config())

        assert resources.is_ready() is False

    def test_background_tasks(self, resources):
        """Test starting and stopping the cache sweeper."""
        resources.start_background_tasks()
        resources.shutdown()

        assert resources.is_ready() is True

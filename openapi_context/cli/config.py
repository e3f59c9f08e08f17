"""Configuration management for the OpenAPI context server."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Config:
    """Configuration loaded from .env file and environment variables."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from project root .env
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # API description
        self.openapi_spec_path = os.getenv("OPENAPI_SPEC_PATH", "./openapi/openapi.json")

        # Validation
        self.min_openapi_version = os.getenv("MIN_OPENAPI_VERSION", "3.0.0")
        self.require_info_section = os.getenv("REQUIRE_INFO_SECTION", "true").lower() == "true"
        self.require_paths_or_components = os.getenv("REQUIRE_PATHS_OR_COMPONENTS", "true").lower() == "true"

        # Embeddings
        self.embedding_backend = os.getenv("EMBEDDING_BACKEND", "sentence-transformers")
        self.embedding_model = os.getenv("EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
        self.embedding_device = os.getenv("EMBEDDING_DEVICE", "cpu")
        self.max_tokens = int(os.getenv("MAX_TOKENS", "256"))
        self.embedding_dimension = int(os.getenv("EMBEDDING_DIMENSION", "256"))
        self.embedding_cache_path = os.getenv("EMBEDDING_CACHE_PATH", "")

        # Context retrieval and result cache
        self.context_cache_ttl = float(os.getenv("CONTEXT_CACHE_TTL", "300"))
        self.context_cache_check_period = float(os.getenv("CONTEXT_CACHE_CHECK_PERIOD", "60"))
        self.context_cache_max_entries = int(os.getenv("CONTEXT_CACHE_MAX_ENTRIES", "1000"))
        self.context_default_limit = int(os.getenv("CONTEXT_DEFAULT_LIMIT", "5"))
        self.search_default_max_results = int(os.getenv("SEARCH_DEFAULT_MAX_RESULTS", "10"))

        # MCP Server
        self.mcp_server_name = os.getenv("MCP_SERVER_NAME", "OpenAPI Context Server")

    def embedder_options(self) -> dict:
        """Keyword arguments for create_embedder()."""
        return {
            "model_name": self.embedding_model,
            "device": self.embedding_device,
            "max_tokens": self.max_tokens,
            "dimension": self.embedding_dimension,
            "cache_path": self.embedding_cache_path or None,
        }

"""Shared resources for the MCP server - owns the loaded index and provider."""

import logging
from typing import Optional

from ..cli.config import Config
from ..openapi_processor.validator import ValidatorConfig
from ..retriever.context_provider import ContextProvider
from ..retriever.data_classes import RetrieverConfig
from ..retriever.spec_index import SpecIndex
from ..vector_store.embedders import Embedder, create_embedder

logger = logging.getLogger(__name__)


class SharedResources:
    """Process-wide resources built once at startup and read by every tool call."""

    def __init__(self):
        self.index: Optional[SpecIndex] = None
        self.provider: Optional[ContextProvider] = None
        self.config: Optional[Config] = None

    def load_from_config(self, config: Config, embedder: Optional[Embedder] = None) -> None:
        """
        Load the API description and build all indices.

        Raises LoadError/ValidationError; nothing is marked ready on failure.
        """
        self.config = config
        logger.info(f"Initializing OpenAPI specification index from {config.openapi_spec_path}")
        embedder = embedder or create_embedder(config.embedding_backend, **config.embedder_options())

        index = SpecIndex.from_file(
            config.openapi_spec_path,
            embedder,
            validator_config=ValidatorConfig.from_config(config),
        )
        self.attach(index, RetrieverConfig.from_config(config))

    def attach(self, index: SpecIndex, retriever_config: Optional[RetrieverConfig] = None) -> None:
        """Install a fully built index; the provider is created only after the index exists."""
        provider = ContextProvider(index, config=retriever_config)
        self.index = index
        self.provider = provider

    def is_ready(self) -> bool:
        """Check if all resources are loaded and ready."""
        return self.index is not None and self.provider is not None

    def start_background_tasks(self) -> None:
        if self.provider is not None:
            self.provider.cache.start()

    def shutdown(self) -> None:
        if self.provider is not None:
            self.provider.cache.stop()

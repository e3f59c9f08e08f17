"""Main retrieval entry point: cache, classify, assemble."""

import logging
from typing import Optional

from .context_assembler import ContextAssembler
from .data_classes import RESULT_ERROR, ContextResult, RetrieverConfig
from .query_classifier import QueryClassifier
from .result_cache import ResultCache
from .spec_index import SpecIndex

logger = logging.getLogger(__name__)


class ContextProvider:
    """Answers get_context_for_query calls against one SpecIndex."""

    def __init__(
        self,
        index: Optional[SpecIndex],
        config: Optional[RetrieverConfig] = None,
        cache: Optional[ResultCache] = None,
        classifier: Optional[QueryClassifier] = None,
    ):
        """
        Initialize the provider.

        Args:
            index: Loaded SpecIndex, or None when loading has not finished
            config: Retrieval configuration, defaults to RetrieverConfig()
            cache: Result cache, created from config when omitted
            classifier: Query classifier, defaults to the standard rule table
        """
        self.index = index
        self.config = config if config is not None else RetrieverConfig()
        if cache is None:
            # An empty ResultCache is falsy (it defines __len__)
            cache = ResultCache(
                ttl=self.config.cache_ttl_seconds,
                check_period=self.config.cache_check_period_seconds,
                max_entries=self.config.cache_max_entries,
            )
        self.cache = cache
        self.classifier = classifier if classifier is not None else QueryClassifier()
        self.assembler = ContextAssembler(index)

    def get_context_for_query(
        self, query: str, include_schemas: bool = True, limit: Optional[int] = None
    ) -> ContextResult:
        """
        Return context for a natural-language query.

        Identical (query, include_schemas, limit) calls within the cache TTL
        return the cached result without re-classifying or searching.
        """
        if limit is None:
            limit = self.config.default_limit

        cache_key = (query, include_schemas, limit)

        try:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Retrieved context from cache for query: '{query}'")
                return cached

            if self.index is None:
                logger.warning("API specification not loaded, cannot provide context")
                return ContextResult(type=RESULT_ERROR, error="API specification not loaded")

            classification = self.classifier.classify(query, self.index.specification)
            context = self.assembler.assemble(classification, query, include_schemas=include_schemas, limit=limit)

            self.cache.set(cache_key, context)
            logger.info(
                f"Assembled '{context.type}' context for query '{query}' "
                f"({classification.kind}, confidence {classification.confidence})"
            )
            return context

        except Exception as e:
            logger.error(f"Error getting context for query '{query}': {e}")
            return ContextResult(type=RESULT_ERROR, error="Failed to retrieve context")

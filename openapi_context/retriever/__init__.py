"""Query classification and context retrieval over a loaded API description."""

from .context_assembler import ContextAssembler
from .context_provider import ContextProvider
from .data_classes import ContextResult, QueryClassification, QueryEntities, RetrieverConfig
from .lookup_index import LookupIndex
from .query_classifier import QueryClassifier
from .result_cache import ResultCache
from .spec_index import SpecIndex

__all__ = [
    "ContextAssembler",
    "ContextProvider",
    "ContextResult",
    "QueryClassification",
    "QueryEntities",
    "RetrieverConfig",
    "LookupIndex",
    "QueryClassifier",
    "ResultCache",
    "SpecIndex",
]

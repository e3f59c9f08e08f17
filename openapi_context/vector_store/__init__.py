"""Vectorization and similarity search over endpoints and schemas."""

from .embedders import Embedder, HashingEmbedder, SentenceTransformerEmbedder, create_embedder
from .embedding_store import ENDPOINTS, SCHEMAS, EmbeddingRecord, EmbeddingStore
from .embedding_utils import cosine_similarity

__all__ = [
    "Embedder",
    "HashingEmbedder",
    "SentenceTransformerEmbedder",
    "create_embedder",
    "ENDPOINTS",
    "SCHEMAS",
    "EmbeddingRecord",
    "EmbeddingStore",
    "cosine_similarity",
]

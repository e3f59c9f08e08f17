"""Pluggable text vectorization backends and factory."""

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from ..utils.text_utils import tokenize
from .embedding_cache import EmbeddingCache
from .embedding_utils import encode_documents, encode_query, load_embedding_model

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Deterministic text-to-vector function with a fixed output dimension."""

    name: str = "embedder"

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this embedder produces."""

    @abstractmethod
    def embed_documents(self, texts: List[str]) -> np.ndarray:
        """Vectorize documents; returns an array of shape (len(texts), dimension)."""

    def embed_query(self, text: str) -> np.ndarray:
        """Vectorize a search query."""
        return self.embed_documents([text])[0]


class HashingEmbedder(Embedder):
    """Feature-hashing bag-of-words embedder; needs no model download."""

    name = "hashing"

    def __init__(self, dimension: int = 256):
        if dimension <= 0:
            raise ValueError("Embedding dimension must be positive")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def _bucket(self, token: str) -> int:
        digest = hashlib.md5(token.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big") % self._dimension

    def _vectorize(self, text: str) -> np.ndarray:
        vector = np.zeros(self._dimension, dtype=np.float32)
        for token in tokenize(text):
            vector[self._bucket(token)] += 1.0
        return vector

    def embed_documents(self, texts: List[str]) -> np.ndarray:
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)
        return np.vstack([self._vectorize(text) for text in texts])


class SentenceTransformerEmbedder(Embedder):
    """Embedder backed by a sentence-transformers model."""

    name = "sentence-transformers"

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        device: str = "cpu",
        max_tokens: Optional[int] = 256,
        cache: Optional[EmbeddingCache] = None,
    ):
        self.model_name = model_name
        self.device = device
        self.max_tokens = max_tokens
        self.cache = cache
        self.model = load_embedding_model(model_name, device=device)
        self._dimension = self.model.get_sentence_embedding_dimension()

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_documents(self, texts: List[str]) -> np.ndarray:
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)
        return encode_documents(
            texts, self.model, max_tokens=self.max_tokens, cache=self.cache, model_name=self.model_name
        )

    def embed_query(self, text: str) -> np.ndarray:
        return encode_query(text, self.model, max_tokens=self.max_tokens)


def create_embedder(backend: str = "sentence-transformers", **config) -> Embedder:
    """Factory function to create an embedder for the configured backend."""
    logger.info(f"Creating {backend} embedder")

    if backend == "hashing":
        return HashingEmbedder(dimension=config.get("dimension", 256))

    elif backend == "sentence-transformers":
        cache_path = config.get("cache_path")
        return SentenceTransformerEmbedder(
            model_name=config.get("model_name", "sentence-transformers/all-MiniLM-L6-v2"),
            device=config.get("device", "cpu"),
            max_tokens=config.get("max_tokens", 256),
            cache=EmbeddingCache(cache_path) if cache_path else None,
        )

    else:
        raise ValueError(f"Unknown embedding backend: {backend}")

"""Persistent SQLite cache for document embeddings across restarts."""

import hashlib
import pickle
import sqlite3
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np


class EmbeddingCache:
    """SQLite-backed cache keyed by model name and document content hash."""

    def __init__(self, cache_path: Union[str, Path, None] = None):
        """Initialize cache with optional custom path."""
        if cache_path is None:
            cache_path = Path("data/embedding_cache.db")

        self.cache_path = Path(cache_path)
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.cache_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS embeddings (
                    cache_key TEXT PRIMARY KEY,
                    embedding BLOB NOT NULL
                )
            """
            )
            conn.commit()

    @staticmethod
    def content_hash(text: str) -> str:
        """Hash of the exact text that is embedded."""
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    def _compute_cache_key(self, model_name: str, content_hash: str) -> str:
        combined = f"{model_name}:{content_hash}"
        return hashlib.sha256(combined.encode()).hexdigest()

    def get_embedding(self, model_name: str, content_hash: str) -> Optional[np.ndarray]:
        """Get cached embedding if it exists."""
        cache_key = self._compute_cache_key(model_name, content_hash)

        with sqlite3.connect(self.cache_path) as conn:
            row = conn.execute("SELECT embedding FROM embeddings WHERE cache_key = ?", (cache_key,)).fetchone()

        if row:
            return pickle.loads(row[0])
        return None

    def set_embedding(self, model_name: str, content_hash: str, embedding: np.ndarray):
        """Store embedding in cache."""
        self.set_embeddings_batch(model_name, [content_hash], [embedding])

    def get_embeddings_batch(
        self, model_name: str, content_hashes: List[str]
    ) -> Tuple[List[Optional[np.ndarray]], List[int]]:
        """
        Get multiple embeddings from cache.

        Returns:
            - List of embeddings (None for cache misses)
            - List of indices where cache misses occurred
        """
        embeddings = []
        miss_indices = []

        for i, content_hash in enumerate(content_hashes):
            embedding = self.get_embedding(model_name, content_hash)
            embeddings.append(embedding)
            if embedding is None:
                miss_indices.append(i)

        return embeddings, miss_indices

    def set_embeddings_batch(self, model_name: str, content_hashes: List[str], embeddings: List[np.ndarray]):
        """Store multiple embeddings in one transaction."""
        rows = [
            (self._compute_cache_key(model_name, content_hash), pickle.dumps(np.asarray(embedding)))
            for content_hash, embedding in zip(content_hashes, embeddings)
        ]

        with sqlite3.connect(self.cache_path) as conn:
            conn.executemany("INSERT OR REPLACE INTO embeddings (cache_key, embedding) VALUES (?, ?)", rows)
            conn.commit()

    def count(self) -> int:
        """Number of cached embeddings."""
        with sqlite3.connect(self.cache_path) as conn:
            return conn.execute("SELECT COUNT(*) FROM embeddings").fetchone()[0]

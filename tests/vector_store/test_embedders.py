"""Tests for embedder backends and the embedder factory."""

import numpy as np
import pytest

from openapi_context.vector_store.embedders import HashingEmbedder, create_embedder


class TestHashingEmbedder:
    """Test cases for HashingEmbedder."""

    def test_shape(self):
        """Test output shape for documents and queries."""
        embedder = HashingEmbedder(dimension=64)

        documents = embedder.embed_documents(["create item", "list widgets", ""])
        query = embedder.embed_query("create item")

        assert documents.shape == (3, 64)
        assert query.shape == (64,)
        assert embedder.dimension == 64

    def test_deterministic(self):
        """Test that the same text always maps to the same vector."""
        first = HashingEmbedder().embed_query("Create an item in the catalog")
        second = HashingEmbedder().embed_query("Create an item in the catalog")

        assert np.array_equal(first, second)

    def test_camel_case_split(self):
        """Test that identifiers and their words produce the same vector."""
        embedder = HashingEmbedder()

        assert np.array_equal(embedder.embed_query("createItem"), embedder.embed_query("create item"))

    def test_case_and_punctuation_ignored(self):
        """Test normalization of case and punctuation."""
        embedder = HashingEmbedder()

        assert np.array_equal(embedder.embed_query("List, Widgets!"), embedder.embed_query("list widgets"))

    def test_token_counts(self):
        """Test that repeated tokens add up in one bucket."""
        vector = HashingEmbedder().embed_query("item item item")

        assert vector.sum() == 3.0
        assert vector.max() == 3.0

    def test_empty_text_is_zero_vector(self):
        """Test that text without tokens embeds to zeros."""
        assert not HashingEmbedder().embed_query("  ?!  ").any()

    def test_no_documents(self):
        """Test embedding an empty batch."""
        assert HashingEmbedder(dimension=8).embed_documents([]).shape == (0, 8)

    def test_invalid_dimension(self):
        """Test that the dimension must be positive."""
        with pytest.raises(ValueError):
            HashingEmbedder(dimension=0)


class TestCreateEmbedder:
    """Test cases for create_embedder."""

    def test_hashing_backend(self):
        """Test creating the hashing backend with a configured dimension."""
        embedder = create_embedder("hashing", dimension=32, model_name="ignored")

        assert isinstance(embedder, HashingEmbedder)
        assert embedder.dimension == 32

    def test_hashing_backend_default_dimension(self):
        """Test the default dimension."""
        assert create_embedder("hashing").dimension == 256

    def test_unknown_backend(self):
        """Test that unknown backends are rejected."""
        with pytest.raises(ValueError, match="Unknown embedding backend"):
            create_embedder("word2vec")

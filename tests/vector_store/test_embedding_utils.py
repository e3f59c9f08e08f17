"""Tests for embedding and similarity helpers in embedding_utils."""

import numpy as np
import pytest

from openapi_context.vector_store.embedding_cache import EmbeddingCache
from openapi_context.vector_store.embedding_utils import (
    cosine_similarities,
    cosine_similarity,
    encode_documents,
    encode_query,
    validate_embedding_dimensions,
)


class TestCosineSimilarity:
    """Test cases for cosine_similarity."""

    def test_identical_vectors(self):
        """Test that a vector is fully similar to itself."""
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_opposite_and_orthogonal_vectors(self):
        """Test the bounds of the similarity range."""
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_symmetric(self):
        """Test that similarity does not depend on argument order."""
        a = [0.3, -1.2, 4.0, 0.5]
        b = [2.0, 0.1, -0.7, 1.1]

        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_bounded(self):
        """Test that random vectors stay within [-1, 1]."""
        rng = np.random.default_rng(7)
        for _ in range(50):
            a = rng.normal(size=16)
            b = rng.normal(size=16)
            assert -1.0 <= cosine_similarity(a, b) <= 1.0

    def test_zero_norm_is_zero(self):
        """Test that a zero vector has similarity 0 with anything."""
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch(self):
        """Test that vectors of different lengths are rejected."""
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


class TestCosineSimilarities:
    """Test cases for the vectorized cosine_similarities."""

    def test_matches_pairwise(self):
        """Test that the vectorized form agrees with the pairwise one."""
        query = np.array([1.0, 2.0, 0.5])
        matrix = np.array([[1.0, 0.0, 0.0], [0.5, 1.0, 0.25], [-1.0, -2.0, -0.5]])

        result = cosine_similarities(query, matrix)

        expected = [cosine_similarity(query, row) for row in matrix]
        assert result == pytest.approx(expected)

    def test_zero_rows(self):
        """Test that zero rows and zero queries give 0."""
        matrix = np.array([[0.0, 0.0], [1.0, 1.0]])

        assert list(cosine_similarities([1.0, 0.0], matrix)) == pytest.approx([0.0, 0.7071067811865475])
        assert list(cosine_similarities([0.0, 0.0], matrix)) == [0.0, 0.0]

    def test_empty_matrix(self):
        """Test ranking against an empty corpus."""
        assert cosine_similarities([1.0], np.zeros((0, 1))).size == 0

    def test_dimension_mismatch(self):
        """Test that a query of the wrong dimension is rejected."""
        with pytest.raises(ValueError):
            cosine_similarities([1.0, 2.0, 3.0], np.ones((2, 2)))


class TestValidateEmbeddingDimensions:
    """Test cases for validate_embedding_dimensions."""

    def test_consistent(self):
        """Test a well-formed matrix."""
        assert validate_embedding_dimensions(np.ones((3, 4))) is True
        assert validate_embedding_dimensions(np.ones((3, 4)), expected_dim=4) is True

    def test_wrong_expected_dimension(self):
        """Test a matrix of an unexpected width."""
        assert validate_embedding_dimensions(np.ones((3, 4)), expected_dim=5) is False

    def test_empty(self):
        """Test that no embeddings are trivially valid."""
        assert validate_embedding_dimensions(np.zeros((0, 4))) is True


class FakeModel:
    """Stands in for a SentenceTransformer; records what it was asked to encode."""

    def __init__(self):
        self.encoded = []

    def encode(self, texts):
        self.encoded.append(list(texts))
        return np.array([[float(len(text)), 1.0] for text in texts])

    def __str__(self):
        return "fake-model"


class TestEncodeDocuments:
    """Test cases for encode_documents and encode_query."""

    def test_without_cache(self):
        """Test plain encoding."""
        model = FakeModel()

        result = encode_documents(["ab", "abcd"], model)

        assert result.shape == (2, 2)
        assert result[1][0] == 4.0

    def test_cache_reuses_embeddings(self, tmp_path):
        """Test that only cache misses are sent to the model."""
        cache = EmbeddingCache(tmp_path / "cache.db")
        model = FakeModel()

        first = encode_documents(["ab", "abcd"], model, cache=cache, model_name="fake")
        second = encode_documents(["abcd", "xyz", "ab"], model, cache=cache, model_name="fake")

        assert model.encoded == [["ab", "abcd"], ["xyz"]]
        assert np.array_equal(second[0], first[1])
        assert np.array_equal(second[2], first[0])
        assert second[1][0] == 3.0

    def test_encode_query(self):
        """Test encoding a single query."""
        assert encode_query("abc", FakeModel()).tolist() == [3.0, 1.0]

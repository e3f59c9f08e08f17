"""Stateless helpers for embedding generation and vector similarity."""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np
import tiktoken

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

    from .embedding_cache import EmbeddingCache

logger = logging.getLogger(__name__)


def load_embedding_model(model_name: str, device: str = "cpu") -> "SentenceTransformer":
    """
    Load embedding model with specified device.

    Args:
        model_name: Name of the embedding model (e.g., "sentence-transformers/all-MiniLM-L6-v2")
        device: Device to use ("mps", "cuda", or "cpu")

    Returns:
        Loaded SentenceTransformer model

    Raises:
        Exception: If model fails to load
    """
    from sentence_transformers import SentenceTransformer

    try:
        logger.info(f"Loading embedding model {model_name} on device {device}")
        # For Stella models, need trust_remote_code=True
        if "stella" in model_name.lower():
            model = SentenceTransformer(model_name, device=device, trust_remote_code=True)
        else:
            model = SentenceTransformer(model_name, device=device)
        logger.info(f"Successfully loaded model {model_name}")
        return model
    except Exception as e:
        logger.error(f"Failed to load embedding model {model_name}: {e}")
        raise


def trim_text_to_token_limit(text: str, max_tokens: int = 256, encoding_name: str = "cl100k_base") -> str:
    """
    Trim text to a token limit using tiktoken.

    Args:
        text: Text to trim
        max_tokens: Maximum number of tokens
        encoding_name: Tiktoken encoding to use (default: cl100k_base)

    Returns:
        Text that fits within the token limit
    """
    if max_tokens <= 0:
        return ""

    encoding = tiktoken.get_encoding(encoding_name)
    tokens = encoding.encode(text)

    if len(tokens) <= max_tokens:
        return text

    # Reserve 1 token for the ellipsis
    trimmed_text = encoding.decode(tokens[: max_tokens - 1]) + "..."
    logger.debug(f"Text trimmed from {len(tokens)} tokens (limit: {max_tokens})")
    return trimmed_text


def _model_name(model: "SentenceTransformer") -> str:
    """Best-effort model identifier used as the cache namespace."""
    model_name = str(model)
    if hasattr(model, "model_card_data") and isinstance(model.model_card_data, dict):
        model_name = model.model_card_data.get("model_name", model_name)
    elif hasattr(model, "model_name"):
        model_name = model.model_name
    return model_name


def encode_documents(
    texts: List[str],
    model: "SentenceTransformer",
    max_tokens: Optional[int] = None,
    encoding_name: str = "cl100k_base",
    cache: Optional["EmbeddingCache"] = None,
    model_name: Optional[str] = None,
) -> np.ndarray:
    """
    Encode documents, reusing cached embeddings where available.

    Args:
        texts: Document texts to encode
        model: Loaded SentenceTransformer model
        max_tokens: Optional token limit per document (will trim if specified)
        encoding_name: Tiktoken encoding to use for token counting
        cache: Optional persistent embedding cache
        model_name: Cache namespace; derived from the model when omitted

    Returns:
        2-D array with one row per document
    """
    if not texts:
        return np.zeros((0, 0), dtype=np.float32)

    processed_texts = texts
    if max_tokens:
        processed_texts = [trim_text_to_token_limit(text, max_tokens, encoding_name) for text in texts]

    if cache is None:
        try:
            return np.asarray(model.encode(processed_texts), dtype=np.float32)
        except Exception as e:
            logger.error(f"Failed to encode {len(texts)} documents: {e}")
            raise

    namespace = model_name or _model_name(model)
    content_hashes = [cache.content_hash(text) for text in processed_texts]
    cached_embeddings, miss_indices = cache.get_embeddings_batch(namespace, content_hashes)

    if not miss_indices:
        logger.info(f"Cache hit for all {len(texts)} embeddings")
        return np.vstack(cached_embeddings).astype(np.float32)

    logger.info(f"Cache hit for {len(texts) - len(miss_indices)}/{len(texts)} embeddings")
    texts_to_encode = [processed_texts[i] for i in miss_indices]

    try:
        new_embeddings = np.asarray(model.encode(texts_to_encode), dtype=np.float32)
    except Exception as e:
        logger.error(f"Failed to encode {len(texts_to_encode)} documents: {e}")
        raise

    cache.set_embeddings_batch(namespace, [content_hashes[i] for i in miss_indices], list(new_embeddings))

    for position, index in enumerate(miss_indices):
        cached_embeddings[index] = new_embeddings[position]

    return np.vstack(cached_embeddings).astype(np.float32)


def encode_query(
    query: str,
    model: "SentenceTransformer",
    max_tokens: Optional[int] = None,
    encoding_name: str = "cl100k_base",
) -> np.ndarray:
    """
    Encode a query for semantic search.

    For Arctic-Embed models a retrieval prefix is prepended; Stella and Qwen3
    models use their query prompts.
    """
    processed_query = query
    if max_tokens:
        processed_query = trim_text_to_token_limit(query, max_tokens, encoding_name)

    model_name = str(model).lower()

    if "arctic-embed" in model_name:
        processed_query = "Represent this sentence for searching relevant passages: " + processed_query
    elif "stella" in model_name:
        try:
            return np.asarray(model.encode([processed_query], prompt_name="s2p_query")[0], dtype=np.float32)
        except (TypeError, AttributeError, KeyError) as e:
            logger.warning(f"Failed to use s2p_query prompt for Stella model: {e}. Using default encoding.")
    elif "qwen" in model_name:
        try:
            return np.asarray(model.encode([processed_query], prompt_name="query")[0], dtype=np.float32)
        except (TypeError, AttributeError, KeyError) as e:
            logger.warning(f"Failed to use query prompt for Qwen model: {e}. Using default encoding.")

    return np.asarray(model.encode([processed_query])[0], dtype=np.float32)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors.

    Defined as 0.0 when either vector has zero norm.
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimensions differ: {a.shape} vs {b.shape}")

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = float(np.dot(a, b) / (norm_a * norm_b))
    # Guard against floating point drift outside [-1, 1]
    return max(-1.0, min(1.0, similarity))


def cosine_similarities(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of one query vector against every row of a matrix."""
    q = np.asarray(query, dtype=np.float64)
    m = np.asarray(matrix, dtype=np.float64)
    if m.size == 0:
        return np.zeros(0, dtype=np.float64)
    if m.shape[1] != q.shape[0]:
        raise ValueError(f"Query dimension {q.shape[0]} does not match store dimension {m.shape[1]}")

    row_norms = np.linalg.norm(m, axis=1)
    query_norm = np.linalg.norm(q)
    denominators = row_norms * query_norm

    similarities = np.zeros(m.shape[0], dtype=np.float64)
    nonzero = denominators > 0
    similarities[nonzero] = (m[nonzero] @ q) / denominators[nonzero]
    return np.clip(similarities, -1.0, 1.0)


def validate_embedding_dimensions(embeddings: np.ndarray, expected_dim: Optional[int] = None) -> bool:
    """Check that all embeddings share one dimension."""
    if len(embeddings) == 0:
        return True

    if expected_dim is None:
        expected_dim = len(embeddings[0])

    for i, embedding in enumerate(embeddings):
        if len(embedding) != expected_dim:
            logger.error(f"Embedding {i} has dimension {len(embedding)}, expected {expected_dim}")
            return False

    return True

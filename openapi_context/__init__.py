"""Indexing and retrieval of OpenAPI description fragments for natural-language questions."""

__version__ = "1.0.0"

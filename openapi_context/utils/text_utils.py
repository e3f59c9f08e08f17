"""Text normalization shared by the classifier and the hashing embedder."""

import re
from typing import List

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])|([A-Z]+)([A-Z][a-z])")
_TOKEN = re.compile(r"[a-z0-9]+")


def split_camel_case(text: str) -> str:
    """Insert spaces at casing boundaries ("createItem" -> "create Item", "getHTTPStatus" -> "get HTTP Status")."""
    return _CAMEL_BOUNDARY.sub(lambda m: f"{m.group(1) or m.group(3)} {m.group(2) or m.group(4)}", text)


def identifier_words(identifier: str) -> str:
    """Lowercase space-separated words of an identifier."""
    return split_camel_case(identifier).lower()


def tokenize(text: str) -> List[str]:
    """Lowercase alphanumeric tokens with camelCase identifiers split into words."""
    return _TOKEN.findall(split_camel_case(text).lower())

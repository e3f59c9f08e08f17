"""Reference Resolver for converting $ref strings to schema names."""

from typing import Any, Iterable, List, Optional

SCHEMA_REF_PREFIX = "#/components/schemas/"


def ref_to_name(ref: Any) -> Optional[str]:
    """
    Extract the schema name from a components/schemas reference.

    Args:
        ref: Reference string (e.g., "#/components/schemas/Pet")

    Returns:
        Schema name, or None if ref is not an internal schema reference
    """
    if not ref or not isinstance(ref, str):
        return None

    if not ref.startswith(SCHEMA_REF_PREFIX):
        return None

    name = ref[len(SCHEMA_REF_PREFIX):]
    # JSON pointer escapes
    name = name.replace("~1", "/").replace("~0", "~")

    return name or None


class ReferenceResolver:
    """Resolves $ref strings against the set of declared schema names."""

    def __init__(self, schema_names: Iterable[str]):
        self.schema_names = set(schema_names)

    def resolve(self, ref: str) -> Optional[str]:
        """Return the declared schema name a reference points at, or None."""
        name = ref_to_name(ref)
        if name is None or name not in self.schema_names:
            return None
        return name

    def is_resolvable(self, ref: str) -> bool:
        """Check whether a reference can be satisfied by this document."""
        if not isinstance(ref, str) or not ref.startswith("#/"):
            # External references are outside the single loaded document
            return False
        if ref.startswith(SCHEMA_REF_PREFIX):
            return self.resolve(ref) is not None
        # Other internal pointers (parameters, responses, ...) are kept opaque
        return True

    def find_unresolved(self, refs: Iterable[str]) -> List[str]:
        """Return the references that cannot be resolved, in input order."""
        return [ref for ref in refs if not self.is_resolvable(ref)]

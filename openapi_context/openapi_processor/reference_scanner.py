"""Reference Scanner for finding $ref dependencies in OpenAPI content."""

from typing import Any, Dict, List, Union


class ReferenceScanner:
    """Scans OpenAPI content for $ref references."""

    def find_references(self, content: Union[Dict, List, Any]) -> List[str]:
        """
        Find all $ref strings in content.

        Args:
            content: OpenAPI content to scan (dict, list, or other)

        Returns:
            Unique $ref strings in the order they are first encountered
        """
        refs: Dict[str, None] = {}
        self._scan_recursive(content, refs)
        return list(refs)

    def find_references_in(self, *contents: Any) -> List[str]:
        """Find unique references across several pieces of content, in order."""
        refs: Dict[str, None] = {}
        for content in contents:
            self._scan_recursive(content, refs)
        return list(refs)

    def _scan_recursive(self, obj: Any, refs: Dict[str, None]) -> None:
        """Recursively scan object for $ref occurrences."""
        if isinstance(obj, dict):
            for key, value in obj.items():
                if key == "$ref" and isinstance(value, str):
                    refs.setdefault(value, None)
                else:
                    self._scan_recursive(value, refs)
        elif isinstance(obj, list):
            for item in obj:
                self._scan_recursive(item, refs)

"""Fatal errors raised while loading an API description."""

from typing import List, Optional


class SpecError(Exception):
    """Base class for specification loading failures."""


class LoadError(SpecError):
    """The description file is missing, unreadable or cannot be parsed."""


class ValidationError(SpecError):
    """The description was parsed but is not a structurally valid OpenAPI document."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return f"{super().__str__()}: " + "; ".join(self.errors)

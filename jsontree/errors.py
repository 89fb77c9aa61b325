"""Exceptions raised by jsontree."""

from typing import Optional


class JsonTreeError(Exception):
    """Base class for everything jsontree raises."""


class JsonPointerFormatError(JsonTreeError, ValueError):
    """Pointer text does not follow the JSON Pointer grammar."""

    def __init__(self, text: str, position: int, message: str):
        super().__init__(f"{message} at position {position}: {text!r}")
        self.text = text
        self.position = position


class JsonPointerResolutionError(JsonTreeError, LookupError):
    """A pointer did not resolve and no default was given."""

    def __init__(self, pointer, resolution):
        super().__init__(
            f"{str(pointer)!r} did not resolve: {resolution.status.value} "
            f"after {resolution.depth} token(s) ({resolution.reason})"
        )
        self.pointer = pointer
        self.resolution = resolution


class UnsupportedValueError(JsonTreeError, TypeError):
    """A Python object that is not part of the JSON value model."""

    def __init__(self, value, detail: Optional[str] = None):
        message = detail or f"not a JSON value: {type(value).__name__}"
        super().__init__(message)
        self.value = value


class NestingDepthError(JsonTreeError):
    """A document is nested deeper than the configured limit."""

    def __init__(self, limit: int):
        super().__init__(f"document nesting exceeds max_depth={limit}")
        self.limit = limit

"""
JSON Pointer (RFC 6901): parsing, composition and resolution.

A pointer is an immutable sequence of reference tokens. Its text form
prefixes every token with ``/`` and escapes ``~`` as ``~0`` and ``/`` as
``~1``; the empty string is the root pointer.

Resolution never raises for a missing path. `JsonPointer.resolve` returns a
`Resolution` saying whether the node was found, and if not, how far the walk
got and why. Callers that treat a missing path as exceptional use
`JsonPointer.evaluate` instead.
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from jsontree.core.values import JsonKind, kind_of
from jsontree.errors import JsonPointerFormatError, JsonPointerResolutionError

logger = logging.getLogger(__name__)

_ARRAY_INDEX = re.compile(r"(?:0|[1-9][0-9]*)\Z")
_END_OF_ARRAY = "-"

_MISSING = object()


class ResolutionStatus(enum.Enum):
    """Outcome of resolving a pointer against a value tree."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"


@dataclass(frozen=True)
class Resolution:
    """Result of `JsonPointer.resolve`."""

    status: ResolutionStatus
    value: Any = None  # node reached; only meaningful when found
    depth: int = 0  # tokens consumed before the walk stopped
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND


def _unescape(segment: str, text: str, offset: int) -> str:
    if "~" not in segment:
        return segment
    chars = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch != "~":
            chars.append(ch)
            i += 1
            continue
        escape = segment[i + 1 : i + 2]
        if escape == "0":
            chars.append("~")
        elif escape == "1":
            chars.append("/")
        else:
            raise JsonPointerFormatError(text, offset + i, "'~' must be followed by '0' or '1'")
        i += 2
    return "".join(chars)


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _coerce_token(token: Union[str, int]) -> str:
    if isinstance(token, bool):
        raise TypeError("pointer tokens must be str or int, got bool")
    if isinstance(token, int):
        if token < 0:
            raise ValueError(f"array index tokens must be non-negative, got {token}")
        return str(token)
    if not isinstance(token, str):
        raise TypeError(f"pointer tokens must be str or int, got {type(token).__name__}")
    return token


@dataclass(frozen=True, order=True)
class JsonPointer:
    """
    An immutable JSON Pointer.

    Construct one with `JsonPointer.parse`, `JsonPointer.try_parse`,
    `JsonPointer.from_tokens`, or by extending `ROOT`::

        ptr = ROOT / "items" / 0 / "name"
        str(ptr)  # '/items/0/name'
    """

    tokens: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "JsonPointer":
        """
        Parse pointer text.

        Raises
        ------
        JsonPointerFormatError
            If non-empty text does not start with '/', or a '~' is not
            followed by '0' or '1'.
        """
        if not isinstance(text, str):
            raise TypeError(f"pointer text must be str, got {type(text).__name__}")
        if text == "":
            return ROOT
        if not text.startswith("/"):
            raise JsonPointerFormatError(text, 0, "pointer must be empty or start with '/'")

        tokens = []
        offset = 1
        for segment in text[1:].split("/"):
            tokens.append(_unescape(segment, text, offset))
            offset += len(segment) + 1
        return cls(tuple(tokens))

    @classmethod
    def try_parse(cls, text: str) -> Optional["JsonPointer"]:
        """Parse pointer text, returning None instead of raising."""
        if not isinstance(text, str):
            return None
        try:
            return cls.parse(text)
        except JsonPointerFormatError as exc:
            logger.debug("Rejected pointer: %s", exc)
            return None

    @classmethod
    def from_tokens(cls, tokens: Iterable[Union[str, int]]) -> "JsonPointer":
        """Build a pointer from unescaped tokens; ints become array indices."""
        return cls(tuple(_coerce_token(t) for t in tokens))

    @property
    def is_root(self) -> bool:
        return not self.tokens

    @property
    def parent(self) -> Optional["JsonPointer"]:
        """The pointer without its last token, or None for the root."""
        if not self.tokens:
            return None
        return JsonPointer(self.tokens[:-1])

    @property
    def last_token(self) -> Optional[str]:
        return self.tokens[-1] if self.tokens else None

    def append(self, token: Union[str, int]) -> "JsonPointer":
        return JsonPointer(self.tokens + (_coerce_token(token),))

    def concat(self, other: "JsonPointer") -> "JsonPointer":
        """Tokens of this pointer followed by the tokens of `other`."""
        return JsonPointer(self.tokens + other.tokens)

    def __truediv__(self, token: Union[str, int]) -> "JsonPointer":
        return self.append(token)

    def __add__(self, other: "JsonPointer") -> "JsonPointer":
        if not isinstance(other, JsonPointer):
            return NotImplemented
        return self.concat(other)

    def __str__(self) -> str:
        return "".join("/" + _escape(token) for token in self.tokens)

    def __repr__(self) -> str:
        return f"JsonPointer({str(self)!r})"

    def resolve(self, root: Any) -> Resolution:
        """
        Walk `root` along this pointer.

        Objects are indexed by property name. Arrays are indexed by a
        decimal index without leading zeros; the '-' token (one past the
        end) never names an existing element. Scalars and null cannot be
        indexed at all.
        """
        node = root
        for depth, token in enumerate(self.tokens):
            kind = kind_of(node)

            if kind is JsonKind.OBJECT:
                child = node.get(token, _MISSING)
                if child is _MISSING:
                    return self._failed(ResolutionStatus.NOT_FOUND, depth, "missing property")
                node = child

            elif kind is JsonKind.ARRAY:
                if token == _END_OF_ARRAY:
                    return self._failed(ResolutionStatus.NOT_FOUND, depth, "end of array")
                if not _ARRAY_INDEX.match(token):
                    return self._failed(ResolutionStatus.NOT_FOUND, depth, "malformed index")
                index = int(token)
                if index >= len(node):
                    return self._failed(ResolutionStatus.NOT_FOUND, depth, "index out of range")
                node = node[index]

            else:
                return self._failed(
                    ResolutionStatus.TYPE_MISMATCH, depth, f"cannot index into {kind.value}"
                )

        return Resolution(ResolutionStatus.FOUND, node, len(self.tokens))

    def _failed(self, status: ResolutionStatus, depth: int, reason: str) -> Resolution:
        logger.debug("%r stopped at token %d: %s (%s)", self, depth, status.value, reason)
        return Resolution(status, None, depth, reason)

    def evaluate(self, root: Any, default: Any = _MISSING) -> Any:
        """
        Value at this pointer in `root`.

        Returns `default` when the pointer does not resolve; without a
        default, raises JsonPointerResolutionError.
        """
        resolution = self.resolve(root)
        if resolution.found:
            return resolution.value
        if default is not _MISSING:
            return default
        raise JsonPointerResolutionError(self, resolution)

    def exists(self, root: Any) -> bool:
        return self.resolve(root).found


ROOT = JsonPointer()


def concat(left: JsonPointer, right: JsonPointer) -> JsonPointer:
    return left.concat(right)

"""
Command-line Overrides

Classifies ``key=value`` tokens into query, header and body overrides:

- ``key=value``  -> query parameter
- ``%key=value`` -> header
- ``@key=value`` -> body field
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Tuple

from ..core.exceptions import InvalidOverride


class OverrideKind(str, Enum):
    """Target of an override."""

    QUERY = "query"
    HEADER = "header"
    BODY = "body"


SIGILS = {
    "%": OverrideKind.HEADER,
    "@": OverrideKind.BODY,
}

_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _check_header(token: str, name: str, value: str) -> None:
    if not _HEADER_NAME_RE.match(name):
        raise InvalidOverride(
            f"Invalid key value pair: {token!r} (invalid header name {name!r})",
            {"token": token},
        )
    if "\r" in value or "\n" in value or "\x00" in value:
        raise InvalidOverride(
            f"Invalid key value pair: {token!r} (header value contains a control character)",
            {"token": token},
        )


@dataclass(frozen=True)
class Override:
    """A single classified override."""

    kind: OverrideKind
    key: str
    value: str


def parse_override(token: str) -> Override:
    """
    Classify a ``key=value`` token.

    Args:
        token: Raw token as given on the command line

    Returns:
        Override with the sigil stripped from its key

    Raises:
        InvalidOverride: If the token has no ``=``, an empty key or an
            unrecognized leading character, or a header override whose
            name is not a valid token or whose value holds CR/LF
    """
    if "=" not in token:
        raise InvalidOverride(
            f"Invalid key value pair: {token!r} (expected key=value)",
            {"token": token},
        )

    key, value = token.split("=", 1)
    key = key.strip()
    value = value.strip()

    if not key:
        raise InvalidOverride(
            f"Invalid key value pair: {token!r} (empty key)", {"token": token}
        )

    first = key[0]
    if first in SIGILS:
        kind = SIGILS[first]
        key = key[1:].strip()
        if not key:
            raise InvalidOverride(
                f"Invalid key value pair: {token!r} (empty key after {first!r})",
                {"token": token},
            )
        if kind is OverrideKind.HEADER:
            _check_header(token, key, value)
    elif first.isalpha():
        kind = OverrideKind.QUERY
    else:
        raise InvalidOverride(
            f"Invalid key value pair: {token!r} (key must start with %, @ or a letter)",
            {"token": token},
        )

    return Override(kind=kind, key=key, value=value)


@dataclass
class OverrideSet:
    """Overrides grouped by kind, each group in input order."""

    headers: List[Tuple[str, str]] = field(default_factory=list)
    query: List[Tuple[str, str]] = field(default_factory=list)
    body: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_overrides(cls, overrides: Iterable[Override]) -> "OverrideSet":
        """Group already classified overrides."""
        result = cls()
        for override in overrides:
            result.add(override)
        return result

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "OverrideSet":
        """Classify and group raw ``key=value`` tokens."""
        return cls.from_overrides(parse_override(token) for token in tokens)

    def add(self, override: Override) -> None:
        pair = (override.key, override.value)
        if override.kind is OverrideKind.HEADER:
            self.headers.append(pair)
        elif override.kind is OverrideKind.QUERY:
            self.query.append(pair)
        else:
            self.body.append(pair)

    def is_empty(self) -> bool:
        return not (self.headers or self.query or self.body)

    def __iter__(self) -> Iterator[Tuple[OverrideKind, List[Tuple[str, str]]]]:
        yield OverrideKind.HEADER, list(self.headers)
        yield OverrideKind.QUERY, list(self.query)
        yield OverrideKind.BODY, list(self.body)

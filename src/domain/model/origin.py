# domain/model/origin.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from domain.model.errors import NormalizationError

WILDCARD = "*"

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

_SEPARATORS = re.compile(r"[,;\n\r\t]+")
_WHITESPACE = re.compile(r"\s")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_INVALID_HOST_CHARS = re.compile(r"[<>\"{}|\\^`%]")


# ── Normalization ────────────────────────────────────────


def normalize_origin(value: str) -> str:
    """Reduce an origin string to ``scheme://host[:port]``.

    Scheme and host are lower-cased and the scheme's default port is
    dropped. Any scheme is accepted as long as a host is present.

    Raises:
        NormalizationError: if the value has no scheme, no host, an
            invalid port, embedded whitespace or control characters, or
            characters a host name cannot contain.
    """
    candidate = value.strip()
    if _WHITESPACE.search(candidate):
        raise NormalizationError(value, "contains whitespace")
    if _CONTROL_CHARS.search(candidate):
        raise NormalizationError(value, "invalid control character")

    try:
        parsed = urlsplit(candidate)
        port = parsed.port
    except ValueError as e:
        raise NormalizationError(value, str(e)) from e

    scheme = parsed.scheme.lower()
    host = (parsed.hostname or "").lower()
    if not scheme:
        raise NormalizationError(value, "missing scheme")
    if not host:
        raise NormalizationError(value, "missing host")

    # urlsplit strips the brackets from IPv6 literals
    if ":" in host:
        host = f"[{host}]"
    elif _INVALID_HOST_CHARS.search(host):
        raise NormalizationError(value, "invalid host")

    if port is None:
        return f"{scheme}://{host}"

    # Only the exact default spelling is dropped; "0443" stays as written
    port_text = parsed.netloc.rpartition(":")[2]
    if str(DEFAULT_PORTS.get(scheme)) == port_text:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port_text}"


def split_origin_candidates(raw: str) -> list[str]:
    """Split an operator-supplied origin list on , ; newline, CR and tab."""
    if not raw or not raw.strip():
        return []
    tokens = (token.strip() for token in _SEPARATORS.split(raw))
    return [token for token in tokens if token]


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class OriginEntry:
    """An accepted origin: the configured text and its canonical form."""
    raw: str
    normalized: str


@dataclass(frozen=True)
class RejectedOrigin:
    """A configured origin that failed normalization and was skipped."""
    raw: str
    source: str
    reason: str


# ── Allow-list ───────────────────────────────────────────


@dataclass(frozen=True)
class AllowList:
    """Origins trusted for cross-origin requests.

    Built once at startup and never mutated. In wildcard mode ``entries``
    is empty and every origin is accepted; with no entries and no
    wildcard every origin is rejected.
    """
    entries: tuple[OriginEntry, ...] = ()
    wildcard: bool = False
    rejected: tuple[RejectedOrigin, ...] = ()
    _normalized: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_normalized", frozenset(entry.normalized for entry in self.entries)
        )

    @property
    def is_empty(self) -> bool:
        return not self.wildcard and not self.entries

    @property
    def normalized_origins(self) -> frozenset[str]:
        return self._normalized

    @property
    def display(self) -> str:
        """Comma-joined configured origins for operator-facing logs."""
        if self.wildcard:
            return WILDCARD
        return ",".join(entry.raw for entry in self.entries)

    def is_allowed(self, origin: str) -> bool:
        """Return True if a request carrying this Origin header may proceed."""
        if self.wildcard:
            return True
        if not self._normalized or not origin:
            return False
        try:
            normalized = normalize_origin(origin)
        except NormalizationError:
            return False
        return normalized in self._normalized

"""Origin guard service — builds the CORS allow-list from configuration.

Startup flow: configured origins → fallback origin → AllowList
"""

import logging

from domain.model.errors import NormalizationError
from domain.model.origin import (
    WILDCARD,
    AllowList,
    OriginEntry,
    RejectedOrigin,
    normalize_origin,
    split_origin_candidates,
)

logger = logging.getLogger(__name__)

CONFIGURED_SOURCE = "ALLOWED_ORIGIN"
FALLBACK_SOURCE = "default"


def build_allow_list(
    configured_raw: str,
    fallback_raw: str,
    diagnostics: logging.Logger | None = None,
) -> AllowList:
    """Build the allow-list from the operator list and the fallback origin.

    The fallback is always appended after the configured origins unless a
    ``*`` switched on wildcard mode first. Malformed candidates are skipped,
    recorded on the result and reported through ``diagnostics``.
    """
    log = diagnostics or logger
    entries: list[OriginEntry] = []
    rejected: list[RejectedOrigin] = []
    seen: set[str] = set()

    for source, raw in ((CONFIGURED_SOURCE, configured_raw), (FALLBACK_SOURCE, fallback_raw)):
        for candidate in split_origin_candidates(raw):
            if candidate == WILDCARD:
                log.info("Wildcard origin configured", extra={"source": source})
                return AllowList(wildcard=True, rejected=tuple(rejected))

            try:
                normalized = normalize_origin(candidate)
            except NormalizationError as e:
                log.warning("Ignoring invalid allowed origin", extra={
                    "source": source,
                    "origin": candidate,
                    "reason": e.reason,
                })
                rejected.append(RejectedOrigin(raw=candidate, source=source, reason=e.reason))
                continue

            if normalized in seen:
                continue
            seen.add(normalized)
            entries.append(OriginEntry(raw=candidate, normalized=normalized))

    return AllowList(entries=tuple(entries), rejected=tuple(rejected))


def log_allow_list_summary(allow_list: AllowList, diagnostics: logging.Logger | None = None) -> None:
    """Report the effective CORS policy once at startup."""
    log = diagnostics or logger
    if allow_list.wildcard:
        log.warning("CORS open: all origins are allowed")
    elif allow_list.is_empty:
        log.warning(
            "ALLOWED_ORIGIN empty or without valid values; "
            "requests carrying an Origin header will be rejected"
        )
    else:
        log.info("Allowed origins configured", extra={
            "allowedOrigins": allow_list.display,
            "originCount": len(allow_list.entries),
        })

from __future__ import annotations

from collections.abc import Iterable

from .config import (
    DEEP_LINK_DOWNLOAD_PREFIX,
    DEEP_LINK_PAYLOAD_MARKER,
    DEEP_LINK_SCHEME_PREFIX,
    DEEP_LINK_VERSION_MARKER,
    MAX_EXTERNAL_LINK_LENGTH,
)


def is_valid_link(value: object) -> bool:
    # Prefix, markers and length only; the query string is parsed downstream.
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    if not trimmed or len(trimmed) > MAX_EXTERNAL_LINK_LENGTH:
        return False
    if not trimmed.startswith(DEEP_LINK_DOWNLOAD_PREFIX):
        return False
    return DEEP_LINK_VERSION_MARKER in trimmed and DEEP_LINK_PAYLOAD_MARKER in trimmed


def extract_link_from_argument(arg: object) -> str | None:
    if not isinstance(arg, str):
        return None
    trimmed = arg.strip().strip('"').strip("'")
    if trimmed.startswith(DEEP_LINK_SCHEME_PREFIX):
        return trimmed if is_valid_link(trimmed) else None

    start = trimmed.find(DEEP_LINK_SCHEME_PREFIX)
    if start < 0:
        return None
    # Launchers may glue the link onto another token; only double quotes are
    # stripped from the embedded candidate.
    candidate = trimmed[start:].strip('"')
    return candidate if is_valid_link(candidate) else None


def extract_links_from_arguments(args: Iterable[object] | None) -> list[str]:
    links: list[str] = []
    for arg in args or ():
        link = extract_link_from_argument(arg)
        if link is None:
            continue
        if link not in links:
            links.append(link)
    return links

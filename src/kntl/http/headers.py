# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110), so merges and lookups here
compare lowercased names while keeping the caller's original spelling on the wire.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    if not headers:
        return {}
    out: dict[str, str] = {}
    for key, value in headers.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    return normalize_headers(headers).get(name.lower(), default).strip() or default


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header mappings left to right; later layers win case-insensitively.

    The surviving entry keeps the spelling of the layer that supplied it.
    """
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            name = str(key).strip()
            if not name:
                continue
            merged[name.lower()] = (name, "" if value is None else str(value))
    return dict(merged.values())


def parse_headers(entries: Iterable[str] | None) -> dict[str, str]:
    """
    Parse ``"Name: value"`` strings into a header dict.

    Values may themselves contain colons; entries without a name or a colon are skipped.
    """
    result: dict[str, str] = {}
    for entry in entries or ():
        name, sep, value = str(entry).partition(":")
        if not sep or not name.strip():
            continue
        result[name.strip()] = value.strip()
    return result


__all__ = ["header_value", "merge_headers", "normalize_headers", "parse_headers"]

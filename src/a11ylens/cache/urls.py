# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""URL canonicalization used for every cache key."""

from __future__ import annotations

import hashlib
import re

from a11ylens.core.constants import SNAPSHOT_KEY_PREFIX

_SCHEME_RE = re.compile(r"^https?://")


def normalize_url(url: str) -> str:
    """Canonicalize *url* so one logical page maps to one cache key.

    Trailing slashes are stripped and a missing ``http(s)://`` scheme is
    replaced by ``https://`` (after dropping any leading slashes).
    ``normalize_url(normalize_url(u)) == normalize_url(u)`` for every ``u``.
    """
    match = _SCHEME_RE.match(url)
    if match:
        scheme, rest = match.group(0), url[match.end() :]
    else:
        scheme, rest = "https://", url.lstrip("/")
    return scheme + rest.rstrip("/")


def snapshot_key(normalized_url: str) -> str:
    """Cache key holding the snapshot of an already-normalized URL."""
    digest = hashlib.md5(normalized_url.encode(), usedforsecurity=False).hexdigest()
    return f"{SNAPSHOT_KEY_PREFIX}{digest}"

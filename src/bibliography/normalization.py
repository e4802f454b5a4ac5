"""Normalization helpers for identity keys and anchor identifiers."""
from __future__ import annotations

import hashlib
import re
import unicodedata
from typing import List, Optional, Tuple

_SAFE_ANCHOR = re.compile(r"^[A-Za-z0-9_-]+$")
_KEY_YEAR = re.compile(r"^(?:(?P<author>.*?\D)[\s_:,\-]*)?(?P<year>\d{4}[a-z]?)$")
_AUTHOR_SPLIT = re.compile(r"\s*;\s*|\s+and\s+|\s*&\s*")


def anchor_slug(key: str) -> str:
    """Return an HTML id fragment for an identity key.

    Keys made only of letters, digits, ``_`` and ``-`` are used as-is. Anything
    else is folded to ASCII and suffixed with a short digest so that distinct
    keys never share an anchor.
    """
    if _SAFE_ANCHOR.match(key):
        return key
    text = unicodedata.normalize("NFKD", key)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^A-Za-z0-9_-]+", "-", text).strip("-")
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
    return f"{text}-{digest}" if text else digest


def split_key(key: str) -> Tuple[Optional[str], Optional[str]]:
    """Split an author/year key such as ``Smith2020`` into its parts."""
    match = _KEY_YEAR.match(key.strip())
    if not match:
        return None, None
    author = (match.group("author") or "").strip(" _:,-") or None
    return author, match.group("year")


def split_authors(value: str | None) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in _AUTHOR_SPLIT.split(value) if part.strip()]


def surname(author: str) -> str:
    """Return the family name from ``Surname, Initials`` style author text."""
    return author.split(",")[0].strip()

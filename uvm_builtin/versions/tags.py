"""Version tag parsing, normalization and ordering."""

from __future__ import annotations

from typing import Any, Iterable, List, Tuple

__all__ = [
    "MARKER",
    "PREFIX",
    "TAG_PREFIX",
    "normalize_tag",
    "numeric_parts",
    "sort_tags",
    "tag_key",
    "version_part",
]

PREFIX = "vere-"
MARKER = "v"
TAG_PREFIX = PREFIX + MARKER
_SEPARATORS = frozenset({".", "-", "_", "+"})


def normalize_tag(raw: str) -> str:
    """Return the canonical ``vere-v...`` form of ``raw``.

    Purely syntactic: ``3.4`` -> ``vere-v3.4``, ``v3.4`` -> ``vere-v3.4``,
    ``vere-v3.4`` is returned untouched. No existence check happens here.
    """

    value = (raw or "").strip()
    if value.startswith(TAG_PREFIX):
        return value
    if value.startswith(MARKER):
        return PREFIX + value
    return TAG_PREFIX + value


def version_part(tag: str) -> str:
    """Strip the canonical prefix, leaving e.g. ``3.10``."""

    if tag.startswith(TAG_PREFIX):
        return tag[len(TAG_PREFIX):]
    return tag


def numeric_parts(tag: str) -> Tuple[int, ...]:
    """Every integer run in the version portion, e.g. ``(3, 10)``."""

    return tuple(value for kind, value in _tokenize_text_and_int(version_part(tag)) if kind == 0)


def _tokenize_text_and_int(s: str) -> List[Tuple[int, Any]]:
    s = (s or "").strip()
    if not s:
        return []
    out: List[Tuple[int, Any]] = []
    i = 0
    while i < len(s):
        if s[i].isdigit():
            j = i
            while j < len(s) and s[j].isdigit():
                j += 1
            out.append((0, int(s[i:j])))
            i = j
        else:
            j = i
            while j < len(s) and not s[j].isdigit():
                j += 1
            out.append((1, s[i:j].lower()))
            i = j
    return out


def tag_key(tag: str) -> Tuple[Tuple[int, ...], Tuple[str, ...]]:
    """Sort key: the numeric parts, then any text runs lexicographically.

    ``3.10`` gives ``((3, 10), ())`` and sorts after ``((3, 9), ())``.
    """

    text = tuple(
        value
        for kind, value in _tokenize_text_and_int(version_part(tag))
        if kind == 1 and value not in _SEPARATORS
    )
    return numeric_parts(tag), text


def sort_tags(tags: Iterable[str], *, descending: bool = False) -> list[str]:
    return sorted(tags, key=lambda tag: (tag_key(tag), tag), reverse=descending)

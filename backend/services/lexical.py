"""Tokenization and list helpers shared by the analyzer, scorer and search."""

import re
from collections.abc import Iterable

# Articles, pronouns and generic job-posting filler
STOP_WORDS: frozenset[str] = frozenset({
    "and", "or", "with", "for", "to", "of", "in", "on", "at", "by", "from",
    "the", "a", "an", "we", "our", "you", "your",
    "role", "job", "work", "team", "experience",
})

# Keep "+", "#", "." and "-" so c++, c#, node.js and front-end survive
_NON_TOKEN_RE = re.compile(r"[^a-z0-9\s+#.-]")


def tokenize(text: str | None) -> list[str]:
    """Lower-case and split text into tokens, dropping stop words and 1-char tokens.

    Order-preserving; duplicates are kept.
    """
    if not text:
        return []
    cleaned = _NON_TOKEN_RE.sub(" ", text.lower())
    return [
        token for token in cleaned.split()
        if len(token) > 1 and token not in STOP_WORDS
    ]


def unique_list(values: Iterable[object] | None) -> list[str]:
    """Trim, drop empties and non-strings, dedupe keeping first-seen order."""
    if not values:
        return []
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        trimmed = value.strip()
        if trimmed and trimmed not in seen:
            seen.add(trimmed)
            result.append(trimmed)
    return result


def _title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.lower().split())


def build_case_variants(values: Iterable[str]) -> set[str]:
    """Expand each value to {original, lower, UPPER, Title Case}.

    Used for exact-match filters against stores that cannot do
    case-insensitive set membership.
    """
    variants: set[str] = set()
    for value in values:
        trimmed = value.strip()
        if not trimmed:
            continue
        variants.add(trimmed)
        variants.add(trimmed.lower())
        variants.add(trimmed.upper())
        variants.add(_title_case(trimmed))
    return variants

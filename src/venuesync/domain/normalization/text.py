"""Name, tag and comparison-key helpers."""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# A bare "dba" only counts after a legal-entity suffix or a comma, so
# "The DBA Lounge" keeps its name.
_TRADING_NAME = re.compile(
    r"^.*?(?:\s(?:d/b/a|d\.b\.a\.?|doing business as)"
    r"|\b(?:llc|inc|corp|co|ltd)\.?,?\s+dba"
    r"|,\s*dba)\s+(.+)$",
    re.IGNORECASE,
)
_STORE_NUMBER = re.compile(r"#\s*\d+")
_NAME_KEY_SUFFIXES = frozenset(
    {
        "restaurant",
        "restaurants",
        "inc",
        "incorporated",
        "llc",
        "corp",
        "corporation",
        "co",
        "company",
        "ltd",
    }
)


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def normalize_name(value: str | None) -> str | None:
    """Return the customer-facing display name.

    A legal name carrying a ``d/b/a`` clause is reduced to the trading name.
    Every word gets an upper-case first letter unless the word is already
    entirely upper-case, which keeps acronyms such as ``BBQ`` intact.
    """

    if value is None:
        return None
    text = collapse_whitespace(value)
    match = _TRADING_NAME.match(text)
    if match:
        text = match.group(1).strip()
    words = [_capitalize(word) for word in text.split(" ") if word]
    return " ".join(words) or None


def _capitalize(word: str) -> str:
    if word.isupper():
        return word
    return word[0].upper() + word[1:]


def normalize_tags(values: Iterable[str]) -> frozenset[str]:
    tags: set[str] = set()
    for value in values:
        if not isinstance(value, str):
            continue
        tag = collapse_whitespace(value)
        if tag:
            tags.add(tag)
    return frozenset(tags)


def fold_text(value: str | None) -> str | None:
    """Casefold, drop punctuation and collapse whitespace."""

    if value is None:
        return None
    text = unicodedata.normalize("NFKC", value).casefold()
    text = "".join(
        " " if unicodedata.category(ch).startswith(("P", "S")) else ch for ch in text
    )
    text = collapse_whitespace(text)
    return text or None


def name_key(value: str | None) -> str | None:
    """Comparison key for venue names.

    Store numbers (``#123``) and legal or generic suffixes are removed so that
    ``"Joe's Pizza Restaurant #12"`` and ``"JOE'S PIZZA"`` share a key.
    """

    if value is None:
        return None
    text = _STORE_NUMBER.sub(" ", value.replace("'", "").replace("’", ""))
    folded = fold_text(text)
    if folded is None:
        return None
    words = folded.split(" ")
    while len(words) > 1 and words[-1] in _NAME_KEY_SUFFIXES:
        words.pop()
    return " ".join(words) or None


def contains_words(haystack: str, needle: str) -> bool:
    """True when ``needle`` occurs in ``haystack`` on word boundaries."""

    return f" {needle} " in f" {haystack} "

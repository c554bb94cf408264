"""Provider vocabulary to ``Category`` mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from venuesync.domain.model import Category

from .text import collapse_whitespace, normalize_tags

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(slots=True, frozen=True)
class CategoryResult:
    category: Category
    tags: frozenset[str]
    mapped: bool


def map_category(terms: Iterable[str], table: Mapping[str, Category]) -> CategoryResult:
    """Map provider terms through ``table``; the first mapped term wins.

    When no term maps, the raw terms survive as tags so nothing the provider
    said is lost.
    """

    raw_terms = [term for term in terms if isinstance(term, str)]
    for term in raw_terms:
        category = table.get(collapse_whitespace(term).casefold())
        if category is not None:
            return CategoryResult(category, frozenset(), mapped=True)
    return CategoryResult(Category.UNCATEGORIZED, normalize_tags(raw_terms), mapped=False)

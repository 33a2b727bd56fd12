"""Relevance-ranked product search over a :class:`CatalogIndex`.

Two kinds of tags are combined:

1. Type tags select whole type buckets. Products found this way start with
   zero hits.
2. Description tags are matched against name/type tokens. Each matching tag
   adds one hit to a product. While type tags matched something, description
   matches only score products that passed the type filter.

When at least one non-empty description tag was given, products with zero
hits are dropped. Results are ordered by descending hit count; equal counts
are ordered by case-folded model so repeated searches return the same list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .errors import InvalidArgument
from .indexing import CatalogIndex
from .product import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredProduct:
    product: Product
    hits: int


def _check_tags(name: str, tags: Sequence[str] | None) -> None:
    if tags is None:
        raise InvalidArgument(f"{name} must not be None")
    if isinstance(tags, (str, bytes)):
        raise InvalidArgument(f"{name} must be a sequence of tags, not a single string")


def _sort_key(scored: ScoredProduct) -> tuple:
    model = scored.product.model
    return (-scored.hits, model.casefold(), model)


def rank_products(
    index: CatalogIndex,
    description_tags: Sequence[str] | None,
    type_tags: Sequence[str] | None,
) -> List[ScoredProduct]:
    """Score and order products for the given tags."""
    _check_tags("description_tags", description_tags)
    _check_tags("type_tags", type_tags)

    scores: Dict[Product, int] = {}
    for type_tag in type_tags:
        if not type_tag:
            continue
        for product in index.products_of_type(type_tag):
            scores.setdefault(product, 0)

    # Empty tags and tags that match no bucket leave the map empty, which
    # counts as "not filtered" even though type tags were passed. A product
    # with an empty type is only reachable through description tags.
    filtered_by_type = bool(scores)

    filtered_by_description = False
    for description_tag in description_tags:
        if not description_tag:
            continue
        filtered_by_description = True
        for product in index.products_with_token(description_tag):
            hits = scores.get(product)
            if hits is not None:
                scores[product] = hits + 1
            elif not filtered_by_type:
                scores[product] = 1

    ranked = [
        ScoredProduct(product, hits)
        for product, hits in scores.items()
        if not (filtered_by_description and hits < 1)
    ]
    ranked.sort(key=_sort_key)

    logger.debug(
        "rank description_tags=%r type_tags=%r by_type=%s by_description=%s results=%s",
        list(description_tags),
        list(type_tags),
        filtered_by_type,
        filtered_by_description,
        len(ranked),
    )
    return ranked


def find_products(
    index: CatalogIndex,
    description_tags: Sequence[str] | None,
    type_tags: Sequence[str] | None,
) -> List[Product]:
    """Products for the given tags, most relevant first."""
    return [scored.product for scored in rank_products(index, description_tags, type_tags)]

"""Index construction for the product assortment.

A :class:`CatalogIndex` keeps three case-insensitive mappings built together
from one pass over the product source:

* ``products``: model -> :class:`Product`
* ``type_map``: type -> bucket of products of that type
* ``description_map``: token -> bucket of products whose ``name type`` text
  contains the token as a whitespace-delimited word

Buckets are frozensets and the index has no mutating methods. Refreshing the
catalog means building a new index.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Mapping, MutableMapping, Optional, Set

from .errors import InvalidArgument
from .keymap import CaseInsensitiveDict
from .product import Product

logger = logging.getLogger(__name__)

EMPTY_BUCKET: "frozenset[Product]" = frozenset()


def _freeze_buckets(buckets: Mapping[str, AbstractSet[Product]]) -> "CaseInsensitiveDict[frozenset[Product]]":
    frozen: CaseInsensitiveDict[frozenset[Product]] = CaseInsensitiveDict()
    for key, bucket in buckets.items():
        if key in frozen:
            # Keys that only differ by case share one bucket.
            frozen[key] = frozen[key] | frozenset(bucket)
        else:
            frozen[key] = frozenset(bucket)
    return frozen


def _collect(buckets: MutableMapping[str, Set[Product]], key: str, product: Product) -> None:
    bucket = buckets.get(key)
    if bucket is None:
        bucket = set()
        buckets[key] = bucket
    bucket.add(product)


class CatalogIndex:
    """Read-only lookup structure over one snapshot of the catalog."""

    __slots__ = ("_products", "_type_map", "_description_map")

    def __init__(
        self,
        products: "CaseInsensitiveDict[Product]",
        type_map: "CaseInsensitiveDict[frozenset[Product]]",
        description_map: "CaseInsensitiveDict[frozenset[Product]]",
    ) -> None:
        self._products = products
        self._type_map = type_map
        self._description_map = description_map

    @classmethod
    def from_maps(
        cls,
        products: Optional[Mapping[str, Product]],
        type_map: Optional[Mapping[str, AbstractSet[Product]]],
        description_map: Optional[Mapping[str, AbstractSet[Product]]],
    ) -> "CatalogIndex":
        """Wrap pre-built maps, e.g. hand-written test fixtures.

        The maps are copied, so later changes to the arguments do not reach
        the index.
        """
        if products is None or type_map is None or description_map is None:
            raise InvalidArgument("products, type_map and description_map are all required")
        return cls(
            CaseInsensitiveDict(products),
            _freeze_buckets(type_map),
            _freeze_buckets(description_map),
        )

    def get_product(self, model: str) -> Optional[Product]:
        """Return the product with ``model`` or ``None`` when it is unknown."""
        if not isinstance(model, str):
            return None
        return self._products.get(model)

    def products_of_type(self, tag: str) -> "frozenset[Product]":
        return self._type_map.get(tag, EMPTY_BUCKET)

    def products_with_token(self, tag: str) -> "frozenset[Product]":
        return self._description_map.get(tag, EMPTY_BUCKET)

    def has_type(self, tag: str) -> bool:
        return tag in self._type_map

    def has_token(self, tag: str) -> bool:
        return tag in self._description_map

    def types(self) -> List[str]:
        return sorted(self._type_map, key=str.casefold)

    def products(self) -> List[Product]:
        return list(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, model: object) -> bool:
        return model in self._products

    def __repr__(self) -> str:
        return (
            f"CatalogIndex(products={len(self._products)}, types={len(self._type_map)}, "
            f"tokens={len(self._description_map)})"
        )


def build_index(products: Iterable[Product]) -> CatalogIndex:
    """Build a :class:`CatalogIndex` from a flat collection of products.

    The iterable is consumed once. When two products share a model
    (case-insensitively) the later one replaces the earlier one before the
    type and description buckets are filled.
    """
    if products is None:
        raise InvalidArgument("products must not be None")

    by_model: CaseInsensitiveDict[Product] = CaseInsensitiveDict()
    duplicates = 0
    for product in products:
        if product.model in by_model:
            duplicates += 1
        by_model[product.model] = product
    if duplicates:
        logger.warning("Catalog contained %s duplicate models; last record wins", duplicates)

    type_buckets: CaseInsensitiveDict[Set[Product]] = CaseInsensitiveDict()
    description_buckets: CaseInsensitiveDict[Set[Product]] = CaseInsensitiveDict()
    for product in by_model.values():
        _collect(type_buckets, product.type, product)
        for token in product.description.split():
            _collect(description_buckets, token, product)

    index = CatalogIndex(
        by_model,
        _freeze_buckets(type_buckets),
        _freeze_buckets(description_buckets),
    )
    logger.info("Built %r", index)
    return index

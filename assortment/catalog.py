"""Process-level holder for the live catalog index.

The live index and its generation number are published together as one
:class:`CatalogSnapshot`. Queries read :meth:`Catalog.snapshot` once,
without locking. :meth:`Catalog.reload` builds a complete replacement first
and then swaps the snapshot in a single assignment, so readers see either the
old pair or the new one, never a half-built index or a mismatched generation.
"""
from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import List, NamedTuple, Optional, Sequence

from .errors import CatalogUnavailable
from .importer import ProductSource, load_index
from .indexing import CatalogIndex
from .product import Product
from .search import ScoredProduct, find_products, rank_products

logger = logging.getLogger(__name__)


class CatalogSnapshot(NamedTuple):
    generation: int
    index: CatalogIndex


class Catalog:
    def __init__(self, index: Optional[CatalogIndex] = None) -> None:
        self._snapshot: Optional[CatalogSnapshot] = None if index is None else CatalogSnapshot(1, index)
        self._reload_lock = threading.Lock()

    @property
    def generation(self) -> int:
        snapshot = self._snapshot
        return 0 if snapshot is None else snapshot.generation

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def snapshot(self) -> CatalogSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise CatalogUnavailable("Catalog has not been loaded")
        return snapshot

    @property
    def current(self) -> CatalogIndex:
        return self.snapshot().index

    def reload(self, source: ProductSource) -> CatalogIndex:
        with self._reload_lock:
            index = load_index(source)
            snapshot = CatalogSnapshot(self.generation + 1, index)
            self._snapshot = snapshot
        logger.info("Catalog generation %s live with %s products", snapshot.generation, len(index))
        return index

    def rank(self, description_tags: Sequence[str], type_tags: Sequence[str]) -> List[ScoredProduct]:
        return rank_products(self.current, description_tags, type_tags)

    def search(self, description_tags: Sequence[str], type_tags: Sequence[str]) -> List[Product]:
        return find_products(self.current, description_tags, type_tags)

    def get_product(self, model: str) -> Optional[Product]:
        return self.current.get_product(model)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return Catalog()

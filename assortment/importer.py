"""Product sources feeding the index builder."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Protocol

from .config import settings
from .data_files import ensure_data_file, is_lfs_pointer
from .errors import CatalogUnavailable, InvalidArgument
from .indexing import CatalogIndex, build_index
from .product import Product

logger = logging.getLogger(__name__)


class ProductSource(Protocol):
    def all_products(self) -> Iterable[Product]: ...


class StaticProductSource:
    """Products held in memory."""

    def __init__(self, products: Iterable[Product]) -> None:
        self._products: List[Product] = list(products)

    def all_products(self) -> Iterable[Product]:
        return iter(self._products)


class JsonProductSource:
    """Products read from a JSON array of records.

    Records may use ``model``/``type``/``name`` or the aliases accepted by
    :meth:`Product.from_record`. Records without a model are skipped.
    """

    def __init__(self, path: str | Path, source_url: str | None = None) -> None:
        self.path = Path(path)
        self.source_url = source_url or None

    def _load_records(self) -> list[Any]:
        data_file = ensure_data_file(self.path, self.source_url)
        if is_lfs_pointer(data_file):
            raise CatalogUnavailable(f"Catalog file {data_file} is a Git LFS pointer; real data not downloaded")
        with data_file.open("r", encoding="utf-8") as fh:
            try:
                records = json.load(fh)
            except json.JSONDecodeError as exc:
                raise CatalogUnavailable(f"Catalog file {data_file} is not valid JSON: {exc}") from exc
        if not isinstance(records, list):
            raise CatalogUnavailable(f"Catalog file {data_file} must contain a JSON array")
        return records

    def all_products(self) -> Iterator[Product]:
        records = self._load_records()
        skipped = 0
        for raw in records:
            if not isinstance(raw, dict):
                skipped += 1
                continue
            try:
                yield Product.from_record(raw)
            except InvalidArgument as exc:
                skipped += 1
                logger.warning("Skipping catalog record: %s", exc)
        logger.info("Read %s catalog records from %s (skipped %s)", len(records), self.path, skipped)


def default_source() -> JsonProductSource:
    return JsonProductSource(settings.catalog_path, settings.catalog_source_url)


def load_index(source: ProductSource) -> CatalogIndex:
    return build_index(source.all_products())

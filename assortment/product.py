"""Catalog product record."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .errors import InvalidArgument

MODEL_KEYS = ("model", "productCode", "product_code", "id")
TYPE_KEYS = ("type", "category")
NAME_KEYS = ("name", "title")


def _first(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return str(value)
    return ""


@dataclass(frozen=True)
class Product:
    """One catalog item. ``model`` is the case-insensitive identity."""

    model: str
    type: str
    name: str

    @property
    def description(self) -> str:
        """Text that description tokens are cut from."""
        return f"{self.name} {self.type}"

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> "Product":
        model = _first(raw, MODEL_KEYS)
        if not model:
            raise InvalidArgument(f"Product record has no model: {raw!r}")
        return cls(model=model, type=_first(raw, TYPE_KEYS), name=_first(raw, NAME_KEYS))

"""Pydantic models for request/response payloads."""
from __future__ import annotations

from pydantic import BaseModel, Field

from .product import Product
from .search import ScoredProduct


class ProductResult(BaseModel):
    model: str
    type: str
    name: str
    hits: int | None = None

    @classmethod
    def from_product(cls, product: Product, hits: int | None = None) -> "ProductResult":
        return cls(model=product.model, type=product.type, name=product.name, hits=hits)

    @classmethod
    def from_scored(cls, scored: ScoredProduct) -> "ProductResult":
        return cls.from_product(scored.product, scored.hits)


class SearchResponse(BaseModel):
    query: str
    description_tags: list[str]
    type_tags: list[str]
    results: list[ProductResult]
    took_ms: float
    cached: bool = False


class HealthResponse(BaseModel):
    loaded: bool
    generation: int
    products: int
    types: list[str] = Field(default_factory=list)


class ReindexResponse(BaseModel):
    indexed: int
    generation: int

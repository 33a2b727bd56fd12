"""FastAPI application exposing the assortment search."""
from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .cache import CacheBackend, cache_key, get_cache
from .catalog import Catalog, get_catalog
from .config import settings
from .errors import CatalogUnavailable, InvalidArgument
from .importer import default_source
from .models import HealthResponse, ProductResult, ReindexResponse, SearchResponse
from .search import rank_products

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# Replace uvicorn's default handlers so every module logs in one format.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

app = FastAPI(title="Assortment Search Service")


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(CatalogUnavailable)
async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailable) -> JSONResponse:
    logger.warning("Catalog unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event() -> None:
    if not settings.load_on_startup:
        return
    catalog = get_catalog()
    try:
        index = await asyncio.to_thread(catalog.reload, default_source())
    except CatalogUnavailable as exc:
        logger.error("Catalog not loaded on startup: %s", exc)
        return
    logger.info("Loaded %s products on startup", len(index))


@app.get("/health", response_model=HealthResponse)
async def health(catalog: Catalog = Depends(get_catalog)) -> HealthResponse:
    if not catalog.loaded:
        return HealthResponse(loaded=False, generation=catalog.generation, products=0)
    generation, index = catalog.snapshot()
    return HealthResponse(loaded=True, generation=generation, products=len(index), types=index.types())


@app.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query("", description="Description words, split on whitespace"),
    type_tags: List[str] = Query([], alias="type", description="Product type filter, repeatable"),
    limit: int = Query(settings.search_result_size, ge=1, le=1000),
    catalog: Catalog = Depends(get_catalog),
    cache: CacheBackend = Depends(get_cache),
) -> SearchResponse:
    description_tags = q.split()
    t0 = perf_counter()
    generation, index = catalog.snapshot()
    key = cache_key(generation, description_tags, type_tags)
    cached = await asyncio.to_thread(cache.get, key)
    if cached is not None:
        results = [ProductResult(**item) for item in cached["results"]]
        from_cache = True
    else:
        results = [ProductResult.from_scored(s) for s in rank_products(index, description_tags, type_tags)]
        payload = {"results": [r.model_dump() for r in results]}
        await asyncio.to_thread(cache.set, key, payload, settings.cache_ttl_seconds)
        from_cache = False
    took_ms = (perf_counter() - t0) * 1000
    logger.info(
        "search q=%r types=%r hits=%s cached=%s took=%.2fms products=%s",
        q,
        type_tags,
        len(results),
        from_cache,
        took_ms,
        len(index),
    )
    return SearchResponse(
        query=q,
        description_tags=description_tags,
        type_tags=type_tags,
        results=results[:limit],
        took_ms=took_ms,
        cached=from_cache,
    )


@app.get("/products/{model}", response_model=ProductResult)
async def get_product(model: str, catalog: Catalog = Depends(get_catalog)) -> ProductResult:
    product = catalog.get_product(model)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Unknown product model {model!r}")
    return ProductResult.from_product(product)


@app.post("/reindex", response_model=ReindexResponse)
async def reindex(
    catalog: Catalog = Depends(get_catalog),
    cache: CacheBackend = Depends(get_cache),
) -> ReindexResponse:
    index = await asyncio.to_thread(catalog.reload, default_source())
    # Entries of earlier generations can never be hit again.
    await asyncio.to_thread(cache.clear)
    return ReindexResponse(indexed=len(index), generation=catalog.generation)

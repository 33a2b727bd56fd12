"""Terminal client that reuses the in-process assortment search."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from time import perf_counter
from typing import Iterable, List, Sequence, Tuple

from assortment.config import settings
from assortment.importer import JsonProductSource, load_index
from assortment.indexing import CatalogIndex
from assortment.search import ScoredProduct, rank_products

MAX_RESULTS = 100
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def parse_line(line: str) -> Tuple[List[str], List[str]]:
    """Split ``"gpu,cpu | nvidia 980"`` into description and type tags.

    Without a ``|`` the whole line is description words.
    """
    if "|" in line:
        types_part, _, words = line.partition("|")
        type_tags = [t.strip() for t in types_part.split(",") if t.strip()]
    else:
        type_tags, words = [], line
    return words.split(), type_tags


def perform_query(index: CatalogIndex, description_tags: Sequence[str], type_tags: Sequence[str]) -> dict:
    t0 = perf_counter()
    ranked = rank_products(index, description_tags, type_tags)
    return {"results": ranked, "eta_ms": (perf_counter() - t0) * 1000}


def pretty_print_response(label: str, payload: dict) -> None:
    results: List[ScoredProduct] = payload.get("results", [])
    eta = float(payload.get("eta_ms", 0))
    color = GREEN if eta < 5 else RED
    eta_label = f"{color}{eta:.2f} ms{RESET}"
    print(f"Query: {label} | results: {len(results)} | ETA: {eta_label}")
    for idx, item in enumerate(results[:MAX_RESULTS], start=1):
        product = item.product
        print(f"  {idx:02d}. hits={item.hits} | {product.model} | {product.type} | {product.name}")


def interactive_shell(index: CatalogIndex) -> None:
    print("Interactive product search. Prefix with 'type1,type2 |' to filter by type. Type 'exit' to quit.")
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        if line.lower() in {"exit", "quit"}:
            return
        words, line_types = parse_line(line)
        response = perform_query(index, words, line_types)
        pretty_print_response(line, response)


def batch_mode(index: CatalogIndex, file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            words, type_tags = parse_line(query)
            pretty_print_response(query, perform_query(index, words, type_tags))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the assortment search")
    parser.add_argument("words", nargs="*", help="Description words. If omitted, starts REPL mode.")
    parser.add_argument("--type", dest="types", action="append", default=[], help="Type filter, repeatable")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    parser.add_argument("--catalog", type=Path, default=Path(settings.catalog_path), help="Catalog JSON file")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    index = load_index(JsonProductSource(args.catalog, settings.catalog_source_url))

    if args.batch:
        batch_mode(index, args.batch)
        return 0
    if args.words or args.types:
        label = " ".join(args.words) or "<all of type>"
        pretty_print_response(label, perform_query(index, args.words, args.types))
        return 0
    interactive_shell(index)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

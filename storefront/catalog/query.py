from __future__ import annotations
import logging
logger = logging.getLogger("storefront.catalog.query")

from typing import List, Optional, Sequence

from .models import CatalogEntry, CatalogStats
from .timestamps import EPOCH, parse_timestamp

DEFAULT_SORT = "newest"


def _matches(entry: CatalogEntry, query: str) -> bool:
    return (
        query in entry.model.lower()
        or query in entry.color.lower()
        or query in entry.storage.lower()
        or query in entry.description.lower()
    )


def _created_key(entry: CatalogEntry):
    return parse_timestamp(entry.createdAt) or EPOCH


def run_query(
    entries: Sequence[CatalogEntry],
    search: str = "",
    condition: Optional[str] = None,
    sort_by: str = DEFAULT_SORT,
) -> List[CatalogEntry]:
    """
    Filter and order the catalog for display.

    Steps, always in this order:
      1) search: case-insensitive substring over model/color/storage/description
      2) condition: exact match, skipped when None
      3) sort: "newest" | "price-asc" | "price-desc" (stable)

    Returns a new list; `entries` is never modified. An empty result means
    either an empty catalog or no match; compare with len(entries) to tell.
    """
    result = list(entries)

    if search:
        q = search.lower()
        result = [e for e in result if _matches(e, q)]

    if condition:
        result = [e for e in result if e.condition == condition]

    # list.sort is stable, including with reverse=True
    if sort_by == "newest":
        result.sort(key=_created_key, reverse=True)
    elif sort_by == "price-asc":
        result.sort(key=lambda e: e.price)
    elif sort_by == "price-desc":
        result.sort(key=lambda e: e.price, reverse=True)
    else:
        logger.warning(f"Unknown sort key {sort_by!r}; keeping catalog order")

    logger.debug(
        "Query search=%r condition=%r sort=%s -> %d of %d",
        search, condition, sort_by, len(result), len(entries),
    )
    return result


def select_featured(entries: Sequence[CatalogEntry]) -> List[CatalogEntry]:
    return [e for e in entries if e.featured and e.inStock]


def summarize(entries: Sequence[CatalogEntry]) -> CatalogStats:
    return CatalogStats(
        total=len(entries),
        featured=sum(1 for e in entries if e.featured),
        outOfStock=sum(1 for e in entries if not e.inStock),
    )

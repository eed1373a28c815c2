from __future__ import annotations
import logging
logger = logging.getLogger("storefront.catalog.normalize")

from typing import Iterable, List


def dedupe_images(images: Iterable[str]) -> List[str]:
    """
    Drop repeated image references, keeping the first occurrence so display
    order is unchanged.
    """
    seen = set()
    result: List[str] = []
    for ref in images:
        if ref in seen:
            logger.info(f"Dropping duplicate image reference: {ref}")
            continue
        seen.add(ref)
        result.append(ref)
    return result


def strip_identity_fields(fields: dict) -> dict:
    # id and createdAt are owned by the store
    cleaned = dict(fields)
    for key in ("id", "createdAt"):
        if key in cleaned:
            logger.warning(f"Ignoring attempt to change immutable field '{key}'")
            cleaned.pop(key)
    return cleaned

from __future__ import annotations
import logging
logger = logging.getLogger("storefront.catalog.router")

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse

from ..admin.session import require_admin
from .models import (
    AttachImageRequest,
    CatalogEntry,
    CatalogEntryCreate,
    CatalogEntryUpdate,
    CONDITIONS,
    CatalogStatus,
    ProductListResponse,
    ProductView,
    SortKey,
)
from .placeholder import ensure_placeholder
from .query import run_query, select_featured
from .service import CatalogStore

router = APIRouter()


def get_catalog_store(request: Request) -> CatalogStore:
    return request.app.state.catalog_store


# ----------------------------
# Shop (public)
# ----------------------------

@router.get("/products", response_model=ProductListResponse)
def list_products(
    q: str = Query(default="", description="Search text (model/color/storage/description)"),
    condition: Optional[str] = Query(default=None, description="New | Excellent | Good | Fair | all"),
    sort: SortKey = Query(default="newest"),
    store: CatalogStore = Depends(get_catalog_store),
) -> ProductListResponse:
    logger.info(f"GET /products called with q={q!r} condition={condition} sort={sort}")

    # "all" is what the shop's condition dropdown sends for no filter
    if condition == "all" or condition == "":
        condition = None
    if condition is not None and condition not in CONDITIONS:
        raise HTTPException(status_code=422, detail=f"Unknown condition: {condition}")

    entries = store.load()
    matched = run_query(entries, search=q, condition=condition, sort_by=sort)
    return ProductListResponse(
        products=[ProductView.from_entry(e) for e in matched],
        total=len(entries),
        matched=len(matched),
    )


@router.get("/products/featured", response_model=List[ProductView])
def list_featured(store: CatalogStore = Depends(get_catalog_store)) -> List[ProductView]:
    return [ProductView.from_entry(e) for e in select_featured(store.load())]


@router.get("/products/{entry_id}", response_model=ProductView)
def get_product(entry_id: str, store: CatalogStore = Depends(get_catalog_store)) -> ProductView:
    entry = store.get(entry_id)
    if entry is None:
        logger.error(f"Product not found: {entry_id}")
        raise HTTPException(status_code=404, detail=f"Product not found: {entry_id}")
    return ProductView.from_entry(entry)


@router.get("/placeholder.jpg")
def placeholder_image(request: Request) -> FileResponse:
    path = ensure_placeholder(request.app.state.settings.DATA_DIR)
    return FileResponse(str(path), media_type="image/jpeg")


@router.get("/catalog/status", response_model=CatalogStatus)
def get_catalog_status(store: CatalogStore = Depends(get_catalog_store)) -> CatalogStatus:
    return store.status()


# ----------------------------
# Admin (session flag required)
# ----------------------------

@router.post(
    "/products",
    response_model=CatalogEntry,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_product(req: CatalogEntryCreate, store: CatalogStore = Depends(get_catalog_store)) -> CatalogEntry:
    logger.info(f"POST /products called for model: {req.model}")
    return store.add(req)


@router.patch("/products/{entry_id}", response_model=CatalogEntry, dependencies=[Depends(require_admin)])
def update_product(
    entry_id: str,
    req: CatalogEntryUpdate,
    store: CatalogStore = Depends(get_catalog_store),
) -> CatalogEntry:
    logger.info(f"PATCH /products/{entry_id} called")
    updated = store.update(entry_id, req.model_dump(exclude_unset=True, exclude_none=True))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {entry_id}")
    return updated


@router.delete("/products/{entry_id}", dependencies=[Depends(require_admin)])
def delete_product(entry_id: str, store: CatalogStore = Depends(get_catalog_store)) -> dict:
    logger.info(f"DELETE /products/{entry_id} called")
    if not store.delete(entry_id):
        raise HTTPException(status_code=404, detail=f"Product not found: {entry_id}")
    return {"deleted": True}


@router.post("/products/{entry_id}/images", response_model=CatalogEntry, dependencies=[Depends(require_admin)])
def attach_image(
    entry_id: str,
    req: AttachImageRequest,
    store: CatalogStore = Depends(get_catalog_store),
) -> CatalogEntry:
    logger.info(f"POST /products/{entry_id}/images called with url: {req.url}")
    updated = store.attach_image(entry_id, req.url)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {entry_id}")
    return updated

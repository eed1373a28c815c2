from __future__ import annotations
import logging
logger = logging.getLogger("storefront.admin.router")

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict

from ..catalog.models import CatalogStats
from ..catalog.query import summarize
from ..catalog.router import get_catalog_store
from ..catalog.service import CatalogStore
from ..config import Settings
from .session import check_credentials, get_app_settings, require_admin

router = APIRouter()


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    password: str


@router.post("/admin/login")
def login(
    req: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> dict:
    logger.info(f"POST /admin/login called for user: {req.username}")
    if not check_credentials(settings, req.username, req.password):
        logger.warning(f"Login failed for user: {req.username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    response.set_cookie(settings.ADMIN_COOKIE, "true", httponly=True, samesite="lax")
    return {"isAdmin": True}


@router.post("/admin/logout")
def logout(response: Response, settings: Settings = Depends(get_app_settings)) -> dict:
    logger.info("POST /admin/logout called")
    response.delete_cookie(settings.ADMIN_COOKIE)
    return {"isAdmin": False}


@router.get("/admin/stats", response_model=CatalogStats, dependencies=[Depends(require_admin)])
def get_stats(store: CatalogStore = Depends(get_catalog_store)) -> CatalogStats:
    return summarize(store.load())

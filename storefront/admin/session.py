from __future__ import annotations
import logging
logger = logging.getLogger("storefront.admin.session")

import secrets

from fastapi import HTTPException, Request

from ..config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def check_credentials(settings: Settings, username: str, password: str) -> bool:
    """
    Demo login against the configured constants; not a real auth system.
    """
    user_ok = secrets.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
    pass_ok = secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
    return user_ok and pass_ok


def is_admin(request: Request) -> bool:
    settings = get_app_settings(request)
    return request.cookies.get(settings.ADMIN_COOKIE) == "true"


def require_admin(request: Request) -> None:
    if not is_admin(request):
        logger.warning(f"Rejected admin request without session flag: {request.method} {request.url.path}")
        raise HTTPException(status_code=401, detail="Admin login required")

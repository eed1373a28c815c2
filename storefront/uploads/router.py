from __future__ import annotations
import logging
logger = logging.getLogger("storefront.uploads.router")

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from ..admin.session import get_app_settings
from ..config import Settings
from .service import UploadError, save_upload

router = APIRouter()


@router.post("/upload-image")
async def upload_image(
    image: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_app_settings),
):
    """
    Store an image for a catalog entry.

    Example:
      curl -X POST http://localhost:8000/api/upload-image \
        -F "image=@/path/to/phone.jpg"
    """
    if image is None:
        return JSONResponse({"message": "No image provided"}, status_code=400)

    try:
        url = await save_upload(
            image,
            settings.UPLOAD_DIR,
            max_bytes=settings.MAX_UPLOAD_BYTES,
            url_prefix=settings.UPLOAD_URL_PREFIX,
        )
    except UploadError as e:
        return JSONResponse({"message": e.message}, status_code=e.status_code)
    except Exception:
        logger.exception("Unexpected upload failure")
        return JSONResponse({"message": "Upload failed"}, status_code=500)
    finally:
        await image.close()

    return {"url": url}


@router.api_route("/upload-image", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def upload_image_wrong_method():
    return JSONResponse({"message": "Method not allowed"}, status_code=405)

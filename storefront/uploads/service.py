from __future__ import annotations
import logging
logger = logging.getLogger("storefront.uploads.service")

import io
import re
import time
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

CHUNK_SIZE = 1024 * 1024


class UploadError(Exception):
    """Upload failure carrying the HTTP status and the message shown to the admin."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _safe_stem(name: str) -> str:
    s = re.sub(r"[^A-Za-z0-9_-]+", "-", name).strip("-")
    return s or "image"


def _format_limit(max_bytes: int) -> str:
    mb = 1024 * 1024
    if max_bytes >= mb and max_bytes % mb == 0:
        return f"{max_bytes // mb}MB"
    return f"{max_bytes} bytes"


def _target_name(original: str | None) -> str:
    p = Path(original or "image")
    ext = p.suffix.lower() if re.fullmatch(r"\.[A-Za-z0-9]{1,5}", p.suffix or "") else ""
    return f"{int(time.time() * 1000)}-{_safe_stem(p.stem)}{ext}"


def _verify_image(data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected upload that is not an image: {e}")
        raise UploadError(400, "Uploaded file is not a valid image")


async def save_upload(
    file: UploadFile,
    upload_dir: Path,
    *,
    max_bytes: int,
    url_prefix: str = "/uploads",
) -> str:
    """
    Store one uploaded image and return its public URL.

    - Reads in 1 MB chunks and aborts once `max_bytes` is exceeded
    - Checks the payload with Pillow before anything touches disk
    - Names the file `<ms-timestamp>-<stem><ext>` inside `upload_dir`
    """
    buf = bytearray()
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            logger.warning(f"Upload {file.filename} exceeds {max_bytes} bytes")
            raise UploadError(413, f"File too large (max {_format_limit(max_bytes)})")

    if not buf:
        raise UploadError(400, "No image provided")

    data = bytes(buf)
    _verify_image(data)

    upload_dir.mkdir(parents=True, exist_ok=True)
    target = upload_dir / _target_name(file.filename)
    try:
        target.write_bytes(data)
    except OSError as e:
        logger.error(f"Failed to write upload to {target}: {e}")
        raise UploadError(500, "Upload failed")

    logger.info(f"Stored upload {file.filename} as {target} ({len(data)} bytes)")
    return f"{url_prefix.rstrip('/')}/{target.name}"

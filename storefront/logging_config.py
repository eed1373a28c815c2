import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(name)s | "
    "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
)
formatter = logging.Formatter(FORMAT)


def _file_handler(path: Path, level=logging.INFO) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    for h in logger.handlers:
        if getattr(h, "baseFilename", None) == getattr(handler, "baseFilename", None):
            handler.close()
            return
    logger.addHandler(handler)


def setup_logging(log_dir: Path = Path("logs")) -> None:
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # --- Core ---
    core_handler = _file_handler(log_dir / "core.log")

    core_parent = logging.getLogger("storefront")
    _attach(core_parent, core_handler)
    core_parent.propagate = False

    # --- Catalog (store + query pipeline) ---
    catalog_handler = _file_handler(log_dir / "catalog.log", level=logging.DEBUG)

    catalog_parent = logging.getLogger("storefront.catalog")
    _attach(catalog_parent, catalog_handler)
    catalog_parent.propagate = False

    # --- Uploads ---
    uploads_handler = _file_handler(log_dir / "uploads.log")

    uploads_parent = logging.getLogger("storefront.uploads")
    _attach(uploads_parent, uploads_handler)
    uploads_parent.propagate = False

    # --- Uvicorn ---
    uvicorn_handler = _file_handler(log_dir / "uvicorn.log")
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        ul = logging.getLogger(name)
        _attach(ul, uvicorn_handler)
        ul.propagate = False

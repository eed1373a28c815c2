from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from pydantic import ValidationError

from .models import CatalogEntries, CatalogEntry

logger = logging.getLogger("storefront.catalog.persistence")


class CatalogDecodeError(RuntimeError):
    pass


class PersistencePort(Protocol):
    """
    A durable key-value slot holding the serialized catalog.

    read() returns None when nothing has been stored yet.
    write() returns False when the bytes could not be stored.
    """

    key: str

    def read(self) -> Optional[bytes]:
        ...

    def write(self, data: bytes) -> bool:
        ...


class FileSlot:
    """
    Slot backed by `<data_dir>/<key>.json`, written atomically. Each write
    goes through its own temp file in the same directory, then a rename.
    """

    def __init__(self, data_dir: Path, key: str):
        self.key = key
        self.path = Path(data_dir) / f"{key}.json"
        logger.info(f"FileSlot initialized, path={self.path}")

    def read(self) -> Optional[bytes]:
        if not self.path.exists():
            logger.debug(f"Slot file does not exist yet: {self.path}")
            return None
        return self.path.read_bytes()

    def write(self, data: bytes) -> bool:
        tmp: Optional[Path] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.path.parent, prefix=f".{self.key}-", suffix=".tmp", delete=False
            ) as f:
                tmp = Path(f.name)
                f.write(data)
            tmp.replace(self.path)
        except OSError as e:
            logger.error(f"Failed to write slot {self.key} at {self.path}: {e}")
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            return False
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")
        return True


class MemorySlot:
    """
    In-process slot. Several slots may share one `storage` dict, the way tabs
    share one browser profile.
    """

    def __init__(self, key: str = "iphone-store-products", storage: Optional[Dict[str, bytes]] = None):
        self.key = key
        self.storage: Dict[str, bytes] = storage if storage is not None else {}

    def read(self) -> Optional[bytes]:
        return self.storage.get(self.key)

    def write(self, data: bytes) -> bool:
        self.storage[self.key] = bytes(data)
        return True


# ------------------------------------------------------------------------------
# Serialization boundary
# ------------------------------------------------------------------------------

def encode_entries(entries: List[CatalogEntry]) -> bytes:
    return CatalogEntries.dump_json(list(entries))


def decode_entries(raw: bytes) -> List[CatalogEntry]:
    """
    Parse the slot contents. Missing optional fields (`featured`,
    `description`, `images`) take their defaults here and nowhere else.
    """
    try:
        return CatalogEntries.validate_json(raw)
    except ValidationError as e:
        raise CatalogDecodeError(f"Stored catalog is malformed: {e}") from e

from __future__ import annotations
import logging
logger = logging.getLogger("storefront.catalog.service")

import threading
import uuid
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from .models import CatalogEntry, CatalogEntryCreate, CatalogStatus
from .normalize import dedupe_images, strip_identity_fields
from .persistence import PersistencePort, decode_entries, encode_entries
from .samples import sample_entries
from .timestamps import ONE_MS, format_timestamp, parse_timestamp, utcnow, utcnow_iso


class CatalogStore:
    """
    Single authoritative holder of the catalog.

    Every read goes through the durable slot first and falls back to the
    in-memory copy when the slot cannot be read. Persistence failures are
    logged and swallowed: the store never raises to its callers, it simply
    keeps serving whatever it last held.
    """

    def __init__(self, slot: PersistencePort, seed: Optional[List[CatalogEntry]] = None):
        self.slot = slot
        self._entries: List[CatalogEntry] = list(seed) if seed is not None else sample_entries()
        self._loaded: bool = False
        self._last_loaded_at: Optional[str] = None
        self._last_saved_at: Optional[str] = None
        self._error: Optional[str] = None
        self._last_created = None
        # load() re-enters through save(), attach_image() through get()/update()
        self._lock = threading.RLock()

    # ----------------------------
    # Load / save
    # ----------------------------

    def load(self) -> List[CatalogEntry]:
        with self._lock:
            try:
                raw = self.slot.read()
                if raw:
                    self._entries = decode_entries(raw)
                    self._last_loaded_at = utcnow_iso()
                    self._error = None
                    logger.debug(f"Loaded {len(self._entries)} entries from slot {self.slot.key}")
                else:
                    # Nothing stored yet: persist what we hold (the seed on first run)
                    logger.info(f"Slot {self.slot.key} is empty; seeding with {len(self._entries)} entries")
                    self.save(self._entries)
                self._loaded = True
            except Exception as e:
                logger.exception(f"Failed to load catalog from slot {self.slot.key}")
                self._error = f"load failed: {e}"
            return list(self._entries)

    def save(self, entries: List[CatalogEntry]) -> None:
        entries = list(entries)
        with self._lock:
            try:
                data = encode_entries(entries)
                if not self.slot.write(data):
                    self._error = "save failed: slot rejected the write"
                    logger.error(f"Slot {self.slot.key} rejected write; keeping previous in-memory catalog")
                    return
            except Exception as e:
                logger.exception(f"Failed to save catalog to slot {self.slot.key}")
                self._error = f"save failed: {e}"
                return

            self._entries = entries
            self._last_saved_at = utcnow_iso()
            self._error = None
            logger.debug(f"Saved {len(entries)} entries to slot {self.slot.key}")

    # ----------------------------
    # Lookups
    # ----------------------------

    def get(self, entry_id: str) -> Optional[CatalogEntry]:
        for entry in self.load():
            if entry.id == entry_id:
                return entry
        return None

    def status(self) -> CatalogStatus:
        with self._lock:
            return CatalogStatus(
                key=self.slot.key,
                loaded=self._loaded,
                entries_count=len(self._entries),
                last_loaded_at=self._last_loaded_at,
                last_saved_at=self._last_saved_at,
                error=self._error,
            )

    # ----------------------------
    # Mutations
    # ----------------------------

    def _new_id(self, taken: set[str]) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in taken:
                return candidate

    def _next_created_at(self, current: List[CatalogEntry]) -> str:
        """
        Creation stamps strictly increase within a store, even when two adds
        land in the same millisecond. Stamps ahead of the clock are ignored,
        so a future-dated record never drags new ones forward.
        """
        now = utcnow()
        stamps = [parse_timestamp(e.createdAt) for e in current]
        stamps = [s for s in stamps if s is not None and s <= now] + [self._last_created]
        latest = max((s for s in stamps if s is not None), default=None)
        if latest is not None and now <= latest:
            now = latest + ONE_MS
        self._last_created = now
        return format_timestamp(now)

    def add(self, data: CatalogEntryCreate) -> CatalogEntry:
        with self._lock:
            current = self.load()
            fields = data.model_dump()
            fields["images"] = dedupe_images(fields.get("images") or [])

            entry = CatalogEntry(
                **fields,
                id=self._new_id({e.id for e in current}),
                createdAt=self._next_created_at(current),
            )
            self.save(current + [entry])
            logger.info(f"Added entry id={entry.id} model={entry.model}")
            return entry

    def update(self, entry_id: str, fields: Mapping[str, Any]) -> Optional[CatalogEntry]:
        """
        Merge `fields` into the entry. Returns None without writing when the
        entry is unknown or the merged record does not validate.
        """
        with self._lock:
            current = self.load()
            index = next((i for i, e in enumerate(current) if e.id == entry_id), None)
            if index is None:
                logger.warning(f"Update requested for unknown entry id={entry_id}")
                return None

            changes = strip_identity_fields(dict(fields))
            try:
                merged = CatalogEntry.model_validate({**current[index].model_dump(), **changes})
            except ValidationError as e:
                logger.error(f"Rejected update for entry id={entry_id}: {e}")
                return None
            current[index] = merged

            self.save(current)
            logger.info(f"Updated entry id={entry_id} fields={sorted(changes)}")
            return merged

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            current = self.load()
            remaining = [e for e in current if e.id != entry_id]
            if len(remaining) == len(current):
                logger.warning(f"Delete requested for unknown entry id={entry_id}")
                return False

            self.save(remaining)
            logger.info(f"Deleted entry id={entry_id}")
            return True

    def attach_image(self, entry_id: str, url: str) -> Optional[CatalogEntry]:
        """
        Append an uploaded image reference to an entry. A reference already
        on the entry is left where it is.
        """
        with self._lock:
            entry = self.get(entry_id)
            if entry is None:
                return None
            if url in entry.images:
                logger.info(f"Image already attached to entry id={entry_id}: {url}")
                return entry
            return self.update(entry_id, {"images": [*entry.images, url]})

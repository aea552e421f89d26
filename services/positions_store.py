from __future__ import annotations
import logging
import threading
import time
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models.transform import DesignTransform
from services.zones_store import load_json_object, save_json_object

logger = logging.getLogger(__name__)

CACHE_PREFIX = "design_position_"


def position_key(design_id: int, product_id: int, user_id: int) -> str:
    return f"{CACHE_PREFIX}{user_id}_{product_id}_{design_id}"


class CachedPosition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    design_id: int = Field(alias="designId")
    base_product_id: int = Field(alias="baseProductId")
    vendor_id: int = Field(alias="vendorId")
    position: DesignTransform
    # epoch milliseconds
    timestamp: int


class _JsonPositions:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _dump(self, record: BaseModel) -> dict:
        return record.model_dump(by_alias=True, exclude_none=True, mode="json")


class DesignPositionsStore(_JsonPositions):
    """Authoritative design transforms, one record per (design, product, user)."""

    def read(self, design_id: int, product_id: int, user_id: int) -> Optional[DesignTransform]:
        with self._lock:
            raw = load_json_object(self.path).get(position_key(design_id, product_id, user_id))
        if raw is None:
            return None
        return DesignTransform.model_validate(raw)

    def write(
        self, design_id: int, product_id: int, user_id: int, transform: DesignTransform
    ) -> DesignTransform:
        with self._lock:
            raw = load_json_object(self.path)
            raw[position_key(design_id, product_id, user_id)] = self._dump(transform)
            save_json_object(self.path, raw)
        return transform


class LocalPositionCache(_JsonPositions):
    """Process-local draft positions. Never authoritative."""

    def read(self, design_id: int, product_id: int, user_id: int) -> Optional[CachedPosition]:
        key = position_key(design_id, product_id, user_id)
        with self._lock:
            raw = load_json_object(self.path)
            if key not in raw:
                return None
            try:
                return CachedPosition.model_validate(raw[key])
            except ValidationError:
                # drop corrupt entries
                logger.warning("dropping corrupt cache entry %s", key)
                del raw[key]
                save_json_object(self.path, raw)
                return None

    def write(
        self, design_id: int, product_id: int, user_id: int, transform: DesignTransform
    ) -> CachedPosition:
        entry = CachedPosition(
            design_id=design_id,
            base_product_id=product_id,
            vendor_id=user_id,
            position=transform,
            timestamp=int(time.time() * 1000),
        )
        with self._lock:
            raw = load_json_object(self.path)
            raw[position_key(design_id, product_id, user_id)] = self._dump(entry)
            save_json_object(self.path, raw)
        return entry

    def delete(self, design_id: int, product_id: int, user_id: int) -> bool:
        key = position_key(design_id, product_id, user_id)
        with self._lock:
            raw = load_json_object(self.path)
            if raw.pop(key, None) is None:
                return False
            save_json_object(self.path, raw)
            return True

    def drafts(self) -> List[CachedPosition]:
        """All valid entries, newest first."""
        with self._lock:
            raw = load_json_object(self.path)
        entries = []
        for key, value in raw.items():
            if not key.startswith(CACHE_PREFIX):
                continue
            try:
                entries.append(CachedPosition.model_validate(value))
            except ValidationError:
                continue
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    def cleanup_expired(self, max_age_hours: float = 24.0, now_ms: Optional[int] = None) -> int:
        now_ms = int(time.time() * 1000) if now_ms is None else now_ms
        max_age_ms = max_age_hours * 60 * 60 * 1000
        removed = 0
        with self._lock:
            raw = load_json_object(self.path)
            for key in list(raw):
                if not key.startswith(CACHE_PREFIX):
                    continue
                try:
                    entry = CachedPosition.model_validate(raw[key])
                except ValidationError:
                    entry = None
                if entry is None or now_ms - entry.timestamp > max_age_ms:
                    del raw[key]
                    removed += 1
            if removed:
                save_json_object(self.path, raw)
        if removed:
            logger.info("removed %d expired cached position(s)", removed)
        return removed

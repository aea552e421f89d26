from __future__ import annotations
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from models.geometry import ZERO_MAPPING, ViewportMapping
from services.geometry import fit_contain

logger = logging.getLogger(__name__)


@dataclass
class ImageEntry:
    container_id: str
    url: str
    seq: int
    natural_width: float = 0.0
    natural_height: float = 0.0
    box_width: float = 0.0
    box_height: float = 0.0

    @property
    def loaded(self) -> bool:
        return self.natural_width > 0 and self.natural_height > 0

    @property
    def visible(self) -> bool:
        return self.box_width > 0 and self.box_height > 0


class ImageSizeRegistry:
    """Natural image sizes and display-box sizes, keyed by the container ids
    the rendering layer assigns.

    Fed by two notifications: an image finished loading (once per
    successful load) and a container box was resized. Failed loads are never
    reported, so lookups for them fall through to the next resolution step.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._entries: Dict[str, ImageEntry] = {}
        self._counter = itertools.count()

    def _entry(self, container_id: str, url: str = "") -> ImageEntry:
        entry = self._entries.get(container_id)
        if entry is None:
            entry = ImageEntry(container_id=container_id, url=url, seq=next(self._counter))
            self._entries[container_id] = entry
        return entry

    def image_loaded(
        self, container_id: str, url: str, natural_width: float, natural_height: float
    ) -> ImageEntry:
        with self._lock:
            entry = self._entry(container_id, url)
            if url and entry.url != url:
                # container now shows another image; box size is still valid
                entry.url = url
            entry.natural_width = float(natural_width)
            entry.natural_height = float(natural_height)
            logger.debug(
                "image loaded container=%s url=%s size=%sx%s",
                container_id, url, natural_width, natural_height,
            )
            return entry

    def box_resized(self, container_id: str, width: float, height: float) -> ImageEntry:
        with self._lock:
            entry = self._entry(container_id)
            entry.box_width = float(width)
            entry.box_height = float(height)
            return entry

    def forget(self, container_id: str) -> None:
        with self._lock:
            self._entries.pop(container_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get(self, container_id: str) -> Optional[ImageEntry]:
        with self._lock:
            return self._entries.get(container_id)

    def natural_size(self, container_id: str) -> Optional[Tuple[float, float]]:
        with self._lock:
            entry = self._entries.get(container_id)
            if entry is None or not entry.loaded:
                return None
            return entry.natural_width, entry.natural_height

    def first_visible_size(self, url: str) -> Optional[Tuple[float, float]]:
        """Natural size of the earliest-registered visible image showing `url`."""
        with self._lock:
            candidates = sorted(
                (e for e in self._entries.values() if e.url == url and e.loaded and e.visible),
                key=lambda e: e.seq,
            )
            if not candidates:
                return None
            return candidates[0].natural_width, candidates[0].natural_height

    def mapping(self, container_id: str) -> ViewportMapping:
        # recomputed on every call; never cached across resizes
        with self._lock:
            entry = self._entries.get(container_id)
            if entry is None or not entry.loaded:
                return ZERO_MAPPING
            return fit_contain(
                (entry.natural_width, entry.natural_height),
                (entry.box_width, entry.box_height),
            )

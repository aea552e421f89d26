from __future__ import annotations
import queue
from typing import Any, Optional

from services.image_registry import ImageSizeRegistry
from services.positions_store import DesignPositionsStore, LocalPositionCache
from services.zones_store import ZonesStore

# Natural/box sizes reported by the rendering layer
registry = ImageSizeRegistry()

# Stores are bound to configured paths at startup
zones_store: Optional[ZonesStore] = None
positions_store: Optional[DesignPositionsStore] = None
position_cache: Optional[LocalPositionCache] = None

# Fire-and-forget reconciliation write-backs (drained by worker)
writeback_queue: "queue.Queue[Any]" = queue.Queue(maxsize=256)

# Worker control
stop_flag = False

from pathlib import Path
from typing import Dict, List, Union
import json
import logging
import threading
from models.zone import Delimitation

logger = logging.getLogger(__name__)


def load_json_object(path: Path) -> dict:
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("%s is not valid JSON, treating as empty", path)
        return {}
    if not isinstance(raw, dict):
        return {}
    return raw


def save_json_object(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class ZonesStore:
    """Zone lists per product image; writes replace the whole list."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, List[Delimitation]]:
        raw = load_json_object(self.path)
        zones: Dict[str, List[Delimitation]] = {}
        for image_id, items in raw.items():
            if isinstance(items, list):
                zones[image_id] = [Delimitation.model_validate(z) for z in items]
        return zones

    def read(self, image_id: str) -> List[Delimitation]:
        with self._lock:
            return self._load().get(str(image_id), [])

    def write(self, image_id: str, zones: List[Delimitation]) -> List[Delimitation]:
        with self._lock:
            raw = load_json_object(self.path)
            raw[str(image_id)] = [z.model_dump(by_alias=True, exclude_none=True, mode="json") for z in zones]
            save_json_object(self.path, raw)
            return list(zones)

import json

from models.transform import DesignTransform
from models.zone import Delimitation
from services.positions_store import DesignPositionsStore, LocalPositionCache, position_key
from services.zones_store import ZonesStore


def test_zones_store_replaces_whole_list(tmp_path):
    store = ZonesStore(tmp_path / "zones.json")
    assert store.read("img1") == []
    store.write("img1", [Delimitation(id="1", x=1, y=2, width=3, height=4, name="A")])
    store.write("img1", [Delimitation(id="2", x=5, y=6, width=7, height=8)])
    zones = store.read("img1")
    assert [z.id for z in zones] == ["2"]
    raw = json.loads((tmp_path / "zones.json").read_text(encoding="utf-8"))
    assert raw["img1"][0]["coordinateType"] == "PERCENTAGE"


def test_zones_store_keeps_debug_payload(tmp_path):
    store = ZonesStore(tmp_path / "zones.json")
    zone = Delimitation.model_validate(
        {"id": "1", "x": 100, "y": 50, "width": 200, "height": 100,
         "coordinateType": "PIXEL", "_debug": {"realImageSize": {"width": 1000, "height": 800}}}
    )
    store.write("img", [zone])
    assert store.read("img")[0].recorded_size == (1000, 800)


def test_corrupt_zones_file_reads_empty(tmp_path):
    path = tmp_path / "zones.json"
    path.write_text("{not json", encoding="utf-8")
    assert ZonesStore(path).read("img1") == []


def test_positions_store_roundtrip(tmp_path):
    store = DesignPositionsStore(tmp_path / "positions.json")
    assert store.read(1, 2, 3) is None
    store.write(1, 2, 3, DesignTransform(x=4, y=5, scale=0.5, rotation=90, designWidth=200))
    t = store.read(1, 2, 3)
    assert (t.x, t.y, t.scale, t.rotation, t.design_width) == (4, 5, 0.5, 90, 200)


def test_cache_delete_and_drafts_order(tmp_path):
    cache = LocalPositionCache(tmp_path / "cache.json")
    cache.write(1, 10, 100, DesignTransform(x=1))
    cache.write(2, 10, 100, DesignTransform(x=2))
    raw = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
    raw[position_key(1, 10, 100)]["timestamp"] = 1
    (tmp_path / "cache.json").write_text(json.dumps(raw), encoding="utf-8")

    assert [d.design_id for d in cache.drafts()] == [2, 1]
    assert cache.delete(2, 10, 100)
    assert not cache.delete(2, 10, 100)
    assert cache.read(2, 10, 100) is None


def test_cache_cleanup_removes_expired_and_corrupt(tmp_path):
    cache = LocalPositionCache(tmp_path / "cache.json")
    fresh = cache.write(1, 10, 100, DesignTransform(x=1))
    cache.write(2, 10, 100, DesignTransform(x=2))
    raw = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
    raw[position_key(2, 10, 100)]["timestamp"] = fresh.timestamp - 48 * 3600 * 1000
    raw[position_key(3, 10, 100)] = {"garbage": True}
    (tmp_path / "cache.json").write_text(json.dumps(raw), encoding="utf-8")

    assert cache.cleanup_expired(24, now_ms=fresh.timestamp) == 2
    assert cache.read(1, 10, 100) is not None
    assert cache.read(2, 10, 100) is None


def test_corrupt_cache_entry_is_dropped_on_read(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text(json.dumps({position_key(1, 2, 3): {"position": "nope"}}), encoding="utf-8")
    cache = LocalPositionCache(path)
    assert cache.read(1, 2, 3) is None
    assert json.loads(path.read_text(encoding="utf-8")) == {}

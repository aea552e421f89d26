import pytest

from models.transform import DesignTransform, PositionRequest, TransformSource
from services.positions import resolve_position
from services.positions_store import DesignPositionsStore, LocalPositionCache


@pytest.fixture
def cache(tmp_path):
    return LocalPositionCache(tmp_path / "cache.json")


def _request(**kw):
    data = {"vendorProductId": 1, "adminProductId": 4, "designId": 9, "userId": 2}
    data.update(kw)
    return PositionRequest(**data)


AUTHORITATIVE = [{"designId": 9, "position": {"x": 5, "y": -3, "scale": 0.6, "rotation": 10}}]
LEGACY = [{"id": 1, "transforms": {"0": {"x": 1, "y": 1, "scale": 0.4}, "1": {"x": 2, "y": 2, "scale": 0.3}}}]


def test_authoritative_record_wins_and_is_enriched_from_cache(cache):
    cache.write(9, 4, 2, DesignTransform(x=50, y=50, scale=0.9, rotation=0, designWidth=320, designHeight=240))
    calls = []
    resolved = resolve_position(
        _request(designPositions=AUTHORITATIVE, designTransforms=LEGACY),
        cache=cache,
        write_back=lambda req, t: calls.append((req.design_id, t)),
    )
    t = resolved.transform
    assert resolved.source == TransformSource.DESIGN_POSITIONS
    assert (t.x, t.y, t.scale, t.rotation) == (5, -3, 0.6, 10)
    assert (t.design_width, t.design_height) == (320, 240)
    assert resolved.enriched
    assert calls == [(9, t)]


def test_complete_record_is_not_written_back(cache):
    cache.write(9, 4, 2, DesignTransform(designWidth=1, designHeight=1))
    record = [{"designId": 9, "position": {"x": 0, "y": 0, "scale": 0.5, "designWidth": 10, "designHeight": 20}}]
    calls = []
    resolved = resolve_position(_request(designPositions=record), cache=cache, write_back=lambda *a: calls.append(a))
    assert resolved.transform.design_width == 10
    assert not resolved.enriched
    assert calls == []


def test_write_back_failure_does_not_break_resolution(cache):
    cache.write(9, 4, 2, DesignTransform(designWidth=100, designHeight=80))

    def boom(request, transform):
        raise RuntimeError("store down")

    resolved = resolve_position(_request(designPositions=AUTHORITATIVE), cache=cache, write_back=boom)
    assert resolved.transform.design_width == 100
    assert resolved.source == TransformSource.DESIGN_POSITIONS


def test_legacy_record_for_zone_index(cache):
    resolved = resolve_position(_request(designTransforms=LEGACY, zoneIndex=1), cache=cache)
    assert resolved.source == TransformSource.DESIGN_TRANSFORMS
    assert resolved.transform.scale == 0.3


def test_legacy_record_missing_zone_falls_through_to_cache(cache):
    cache.write(9, 4, 2, DesignTransform(x=7, y=8, scale=0.5, rotation=0))
    resolved = resolve_position(_request(designTransforms=LEGACY, zoneIndex=3), cache=cache)
    assert resolved.source == TransformSource.LOCAL_CACHE
    assert resolved.transform.x == 7


def test_cache_needs_user(cache):
    cache.write(9, 4, 2, DesignTransform(x=7))
    resolved = resolve_position(_request(userId=None), cache=cache)
    assert resolved.source == TransformSource.DEFAULT


def test_default_uses_design_application_scale():
    resolved = resolve_position(_request(designApplication={"hasDesign": True, "scale": 0.7}))
    assert resolved.source == TransformSource.DEFAULT
    assert resolved.transform.scale == 0.7
    assert (resolved.transform.x, resolved.transform.y, resolved.transform.rotation) == (0, 0, 0)


def test_default_scale_without_design_application():
    assert resolve_position(_request()).transform.scale == 1.0


def test_stored_position_is_authoritative_when_request_has_none(tmp_path, cache):
    store = DesignPositionsStore(tmp_path / "positions.json")
    store.write(9, 4, 2, DesignTransform(x=3, y=4, scale=0.6, rotation=0, designWidth=300, designHeight=150))
    cache.write(9, 4, 2, DesignTransform(x=50, scale=0.9))
    resolved = resolve_position(_request(designTransforms=LEGACY), cache=cache, store=store)
    assert resolved.source == TransformSource.DESIGN_POSITIONS
    assert (resolved.transform.x, resolved.transform.design_width) == (3, 300)
    assert not resolved.enriched


def test_written_back_position_feeds_next_resolution(tmp_path, cache):
    store = DesignPositionsStore(tmp_path / "positions.json")
    cache.write(9, 4, 2, DesignTransform(designWidth=320, designHeight=240))

    def persist(request, transform):
        store.write(request.design_id, request.admin_product_id, request.user_id, transform)

    first = resolve_position(_request(designPositions=AUTHORITATIVE), cache=cache, write_back=persist, store=store)
    assert first.enriched
    cache.delete(9, 4, 2)

    second = resolve_position(_request(), cache=cache, write_back=persist, store=store)
    assert second.source == TransformSource.DESIGN_POSITIONS
    assert not second.enriched
    assert (second.transform.x, second.transform.design_width, second.transform.design_height) == (5, 320, 240)

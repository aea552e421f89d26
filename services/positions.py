from __future__ import annotations
import logging
from typing import Any, Callable, Optional, Tuple

from models.transform import (
    DesignTransform,
    PositionRequest,
    ResolvedTransform,
    TransformSource,
)

logger = logging.getLogger(__name__)

WriteBack = Callable[[PositionRequest, DesignTransform], Any]


def _authoritative(request: PositionRequest, store=None) -> Optional[DesignTransform]:
    if request.design_id is not None:
        for record in request.design_positions:
            if record.design_id == request.design_id:
                return record.position
        if store is not None and request.user_id is not None:
            # repaired records written back on an earlier load
            stored = store.read(request.design_id, request.admin_product_id, request.user_id)
            if stored is not None:
                return stored
    if request.design_positions:
        return request.design_positions[0].position
    return None


def _legacy(request: PositionRequest) -> Optional[DesignTransform]:
    key = str(request.zone_index)
    for record in request.design_transforms:
        transform = record.transforms.get(key)
        if transform is not None:
            return transform
    return None


def _cached(request: PositionRequest, cache) -> Optional[DesignTransform]:
    if cache is None or request.design_id is None or request.user_id is None:
        return None
    entry = cache.read(request.design_id, request.admin_product_id, request.user_id)
    if entry is None:
        return None
    return entry.position


def _default(request: PositionRequest) -> DesignTransform:
    return DesignTransform(
        x=0.0,
        y=0.0,
        scale=request.design_application.scale or 1.0,
        rotation=0.0,
    )


def _merge_intrinsic_size(
    transform: DesignTransform, cached: Optional[DesignTransform]
) -> Tuple[DesignTransform, bool]:
    if transform.has_intrinsic_size or cached is None:
        return transform, False
    if not (cached.design_width or cached.design_height):
        return transform, False
    merged = transform.model_copy(
        update={
            "design_width": cached.design_width or transform.design_width,
            "design_height": cached.design_height or transform.design_height,
        }
    )
    return merged, True


def resolve_position(
    request: PositionRequest,
    cache=None,
    write_back: Optional[WriteBack] = None,
    store=None,
) -> ResolvedTransform:
    """Pick the one transform to render with, tagged with where it came from.

    Priority: designPositions (the request record for this design, then
    `store`, then the first request record), the first designTransforms
    record holding zone_index, local cache, then a default built from
    designApplication.scale. A winning server record that lacks
    designWidth/designHeight is completed from the cache,
    and the completed record is handed to `write_back` so the gap does not
    come back on the next load. `write_back` must not block; its failures
    are logged and ignored.
    """
    for source, pick in (
        (TransformSource.DESIGN_POSITIONS, lambda r: _authoritative(r, store)),
        (TransformSource.DESIGN_TRANSFORMS, _legacy),
    ):
        transform = pick(request)
        if transform is None:
            continue
        merged, enriched = transform, False
        if not transform.has_intrinsic_size:
            merged, enriched = _merge_intrinsic_size(transform, _cached(request, cache))
        if enriched:
            logger.debug(
                "design %s: %s record completed from local cache", request.design_id, source.value
            )
            _schedule_write_back(write_back, request, merged)
        return ResolvedTransform(transform=merged, source=source, enriched=enriched)

    cached = _cached(request, cache)
    if cached is not None:
        return ResolvedTransform(transform=cached, source=TransformSource.LOCAL_CACHE)

    return ResolvedTransform(transform=_default(request), source=TransformSource.DEFAULT)


def _schedule_write_back(
    write_back: Optional[WriteBack], request: PositionRequest, transform: DesignTransform
) -> None:
    if write_back is None:
        return
    try:
        write_back(request, transform)
    except Exception:
        logger.warning(
            "write-back for design %s failed; keeping in-memory position",
            request.design_id,
            exc_info=True,
        )

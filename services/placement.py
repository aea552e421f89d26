from __future__ import annotations
import math
from typing import Any, Mapping, Optional, Union

from models.geometry import PixelRect, RenderDescriptor
from models.transform import DesignTransform

DEFAULT_SCALE = 0.8


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def place_design(
    zone_rect: PixelRect,
    transform: Optional[Union[DesignTransform, Mapping[str, Any]]],
    zone_rotation: Optional[float] = None,
    default_scale: float = DEFAULT_SCALE,
) -> RenderDescriptor:
    """Size and offset a design inside a projected zone.

    The design is always sized as a fraction of the zone (`scale`, 0.8 by
    default); intrinsic design sizes on the transform are not used. The
    offset is clamped so the design box never leaves the zone, which pins
    designs at scale >= 1 to the zone center. All values are relative to the
    zone center; apply translate before rotate.
    """
    if isinstance(transform, DesignTransform):
        raw = transform.model_dump()
    else:
        raw = dict(transform or {})

    x = _number(raw.get("x"), 0.0)
    y = _number(raw.get("y"), 0.0)
    rotation = _number(raw.get("rotation"), 0.0)
    design_scale = _number(raw.get("scale"), default_scale)
    if design_scale <= 0:
        design_scale = default_scale

    width = zone_rect.width * design_scale
    height = zone_rect.height * design_scale

    # center-anchored, so the allowed range is symmetric
    max_x = max(0.0, (zone_rect.width - width) / 2)
    max_y = max(0.0, (zone_rect.height - height) / 2)

    return RenderDescriptor(
        width=width,
        height=height,
        translate_x=_clamp(x, -max_x, max_x),
        translate_y=_clamp(y, -max_y, max_y),
        rotation=rotation,
        zone_rotation=_number(zone_rotation, 0.0),
        min_x=-max_x,
        max_x=max_x,
        min_y=-max_y,
        max_y=max_y,
    )


def transform_css(descriptor: RenderDescriptor) -> str:
    return (
        "translate(-50%, -50%) "
        f"translate({descriptor.translate_x:g}px, {descriptor.translate_y:g}px) "
        f"rotate({descriptor.rotation:g}deg)"
    )

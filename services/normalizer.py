from __future__ import annotations
import logging
from typing import Optional, Tuple

from models.geometry import PercentRect, PixelRect
from models.zone import CoordinateType, Delimitation
from services.geometry import fit_contain, project_zone
from services.image_registry import ImageSizeRegistry

logger = logging.getLogger(__name__)

# Values above this are read as pixels even when tagged PERCENTAGE
PERCENT_MAX = 100.0


def is_pixel_coordinates(zone: Delimitation) -> bool:
    if zone.coordinate_type == CoordinateType.PIXEL:
        return True
    return any(v > PERCENT_MAX for v in (zone.x, zone.y, zone.width, zone.height))


def resolve_reference_size(
    zone: Delimitation,
    registry: Optional[ImageSizeRegistry],
    fallback: Tuple[float, float],
    container_id: Optional[str] = None,
    url: Optional[str] = None,
) -> Tuple[float, float]:
    """Size the zone's raw numbers are expressed against.

    Order: size recorded on the zone at authoring time, the image loaded in
    `container_id`, the first visible image showing `url`, then `fallback`.
    """
    recorded = zone.recorded_size
    if recorded is not None:
        return recorded

    if registry is not None:
        if container_id:
            size = registry.natural_size(container_id)
            if size is not None:
                return size
        if url:
            size = registry.first_visible_size(url)
            if size is not None:
                return size

    logger.debug("zone %s: no loaded image, using fallback size %s", zone.id, fallback)
    return fallback


def normalize(zone: Delimitation, ref_size: Tuple[float, float]) -> PercentRect:
    if not is_pixel_coordinates(zone):
        return PercentRect(left=zone.x, top=zone.y, width=zone.width, height=zone.height)
    ref_w, ref_h = ref_size
    return PercentRect(
        left=zone.x / ref_w * 100,
        top=zone.y / ref_h * 100,
        width=zone.width / ref_w * 100,
        height=zone.height / ref_h * 100,
    )


def project_delimitation(
    zone: Delimitation,
    image_size: Tuple[float, float],
    box_size: Tuple[float, float],
    ref_size: Optional[Tuple[float, float]] = None,
) -> PixelRect:
    mapping = fit_contain(image_size, box_size)
    if not mapping.is_renderable:
        return PixelRect(0.0, 0.0, 0.0, 0.0)
    # pixel zones without an explicit reference are read against the displayed image
    pct = normalize(zone, ref_size or zone.recorded_size or image_size)
    return project_zone(pct, mapping)

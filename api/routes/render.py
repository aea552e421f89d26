from dataclasses import asdict
from fastapi import APIRouter
from core import state
from core.config import Settings
from models.geometry import PixelRect
from models.requests import DesignRender, ZoneRender
from services.geometry import fit_contain, project_zone
from services.normalizer import normalize, resolve_reference_size
from services.placement import place_design, transform_css

router = APIRouter(prefix="/render", tags=["render"])


@router.post("/zone")
def render_zone(body: ZoneRender):
    settings = Settings()
    fallback = settings.preview_fallback_size if body.preview else settings.fallback_size
    zone = body.zone

    image_size = None
    box_size = None
    if body.container_id:
        entry = state.registry.get(body.container_id)
        if entry is not None:
            if entry.loaded:
                image_size = (entry.natural_width, entry.natural_height)
            box_size = (entry.box_width, entry.box_height)
    if body.image_size is not None:
        image_size = (body.image_size.width, body.image_size.height)
    if body.box_size is not None:
        box_size = (body.box_size.width, body.box_size.height)

    if body.image_size is not None:
        ref_size = zone.recorded_size or image_size
    else:
        ref_size = resolve_reference_size(
            zone, state.registry, fallback, container_id=body.container_id, url=body.url
        )
    percent = normalize(zone, ref_size)

    result = {
        "zoneId": zone.id,
        "referenceSize": list(ref_size),
        "percent": asdict(percent),
        "renderable": False,
        "rect": None,
        "rotation": zone.rotation or 0.0,
    }
    if image_size is None or box_size is None:
        # image not loaded or box not measured yet
        return result

    mapping = fit_contain(image_size, box_size)
    if not mapping.is_renderable:
        return result
    rect = project_zone(percent, mapping)
    result["mapping"] = asdict(mapping)
    if rect.is_renderable:
        result["renderable"] = True
        result["rect"] = asdict(rect)
    return result


@router.post("/design")
def render_design(body: DesignRender):
    settings = Settings()
    zone_rect = PixelRect(
        left=body.zone_rect.left,
        top=body.zone_rect.top,
        width=body.zone_rect.width,
        height=body.zone_rect.height,
    )
    descriptor = place_design(
        zone_rect,
        body.transform,
        zone_rotation=body.zone_rotation,
        default_scale=settings.DEFAULT_DESIGN_SCALE,
    )
    return {**asdict(descriptor), "css": transform_css(descriptor), "renderable": zone_rect.is_renderable}

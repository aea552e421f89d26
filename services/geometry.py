from typing import Tuple

from models.geometry import ZERO_MAPPING, PercentRect, PixelRect, ViewportMapping


def fit_contain(
    image_size: Tuple[float, float], box_size: Tuple[float, float]
) -> ViewportMapping:
    # object-fit: contain; whole image visible, letterboxed on one axis
    img_w, img_h = image_size
    box_w, box_h = box_size
    if box_w <= 0 or box_h <= 0 or img_w <= 0 or img_h <= 0:
        # box not laid out yet (or no image): not renderable
        return ZERO_MAPPING

    image_ratio = img_w / img_h
    box_ratio = box_w / box_h

    if image_ratio > box_ratio:
        display_w = box_w
        display_h = box_w / image_ratio
        offset_x = 0.0
        offset_y = (box_h - display_h) / 2
    else:
        display_h = box_h
        display_w = box_h * image_ratio
        offset_x = (box_w - display_w) / 2
        offset_y = 0.0

    return ViewportMapping(
        scale=display_w / img_w,
        offset_x=offset_x,
        offset_y=offset_y,
        display_width=display_w,
        display_height=display_h,
    )


def project_zone(pct: PercentRect, mapping: ViewportMapping) -> PixelRect:
    """Percentage rectangle -> display-box pixels. Check `is_renderable` before drawing."""
    return PixelRect(
        left=mapping.offset_x + (pct.left / 100) * mapping.display_width,
        top=mapping.offset_y + (pct.top / 100) * mapping.display_height,
        width=(pct.width / 100) * mapping.display_width,
        height=(pct.height / 100) * mapping.display_height,
    )

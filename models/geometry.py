from dataclasses import dataclass


@dataclass(frozen=True)
class PercentRect:
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PixelRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def is_renderable(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class ViewportMapping:
    scale: float
    offset_x: float
    offset_y: float
    display_width: float
    display_height: float

    @property
    def is_renderable(self) -> bool:
        return self.display_width > 0 and self.display_height > 0


ZERO_MAPPING = ViewportMapping(0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class RenderDescriptor:
    """Design box relative to the zone center: translate first, then rotate."""

    width: float
    height: float
    translate_x: float
    translate_y: float
    rotation: float
    zone_rotation: float = 0.0
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.product import Product
from models.transform import DesignTransform
from models.zone import Delimitation, ImageSize


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ImageLoaded(_Body):
    container_id: str = Field(alias="containerId")
    url: str = ""
    natural_width: float = Field(alias="naturalWidth", gt=0)
    natural_height: float = Field(alias="naturalHeight", gt=0)


class BoxResized(_Body):
    container_id: str = Field(alias="containerId")
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class SyncZones(_Body):
    product: Product
    incoming: List[Delimitation] = Field(default_factory=list)
    regenerate_ids: bool = Field(default=False, alias="regenerateIds")


class DuplicateZones(_Body):
    product: Product
    source_image_id: str = Field(alias="sourceImageId")
    zone_ids: Optional[List[str]] = Field(default=None, alias="zoneIds")
    regenerate_ids: bool = Field(default=True, alias="regenerateIds")


class ZoneRender(_Body):
    zone: Delimitation
    container_id: Optional[str] = Field(default=None, alias="containerId")
    url: Optional[str] = None
    # explicit sizes override whatever the registry knows
    image_size: Optional[ImageSize] = Field(default=None, alias="imageSize")
    box_size: Optional[ImageSize] = Field(default=None, alias="boxSize")
    preview: bool = False


class PixelRectBody(_Body):
    left: float = 0.0
    top: float = 0.0
    width: float
    height: float


class DesignRender(_Body):
    zone_rect: PixelRectBody = Field(alias="zoneRect")
    transform: Optional[DesignTransform] = None
    zone_rotation: Optional[float] = Field(default=None, alias="zoneRotation")

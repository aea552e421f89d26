from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoordinateType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    PIXEL = "PIXEL"


class ImageSize(BaseModel):
    width: float
    height: float


class ZoneDebug(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # natural size of the image the raw numbers were drawn against
    real_image_size: Optional[ImageSize] = Field(default=None, alias="realImageSize")


class Delimitation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    x: float
    y: float
    width: float
    height: float
    coordinate_type: CoordinateType = Field(default=CoordinateType.PERCENTAGE, alias="coordinateType")
    rotation: Optional[float] = None
    name: Optional[str] = None
    reference_width: Optional[float] = Field(default=None, alias="referenceWidth")
    reference_height: Optional[float] = Field(default=None, alias="referenceHeight")
    # explicit creation order; preferred over digits parsed out of `id`
    created_seq: Optional[int] = Field(default=None, alias="createdSeq")
    debug: Optional[ZoneDebug] = Field(default=None, alias="_debug")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        # persisted ids are sometimes numeric
        return str(v)

    @field_validator("width", "height")
    @classmethod
    def _non_negative(cls, v: float):
        if v < 0:
            raise ValueError("zone size must be >= 0")
        return v

    @property
    def recorded_size(self) -> Optional[tuple[float, float]]:
        """Reference size captured when the zone was authored, if any."""
        if self.debug is not None and self.debug.real_image_size is not None:
            size = self.debug.real_image_size
            if size.width > 0 and size.height > 0:
                return size.width, size.height
        if self.reference_width and self.reference_height:
            if self.reference_width > 0 and self.reference_height > 0:
                return self.reference_width, self.reference_height
        return None

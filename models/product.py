from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.zone import Delimitation


class ProductImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    view_type: Optional[str] = Field(default=None, alias="viewType")
    delimitations: List[Delimitation] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v)


class ColorVariation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str
    color_code: str = Field(default="", alias="colorCode")
    images: List[ProductImage] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return None if v is None else str(v)


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = ""
    color_variations: List[ColorVariation] = Field(default_factory=list, alias="colorVariations")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return None if v is None else str(v)

    def iter_images(self):
        for variation in self.color_variations:
            yield from variation.images

    def find_image(self, image_id: str) -> Optional[ProductImage]:
        for image in self.iter_images():
            if image.id == image_id:
                return image
        return None

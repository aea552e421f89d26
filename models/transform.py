from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TransformSource(str, Enum):
    DESIGN_POSITIONS = "designPositions"
    DESIGN_TRANSFORMS = "designTransforms"
    LOCAL_CACHE = "localCache"
    DEFAULT = "default"


class ScaleConstraints(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    min_scale: Optional[float] = Field(default=None, alias="minScale")
    max_scale: Optional[float] = Field(default=None, alias="maxScale")


class DesignTransform(BaseModel):
    # every field optional: records from older clients are often partial
    model_config = ConfigDict(populate_by_name=True)

    x: Optional[float] = None
    y: Optional[float] = None
    scale: Optional[float] = None
    rotation: Optional[float] = None
    design_width: Optional[float] = Field(default=None, alias="designWidth")
    design_height: Optional[float] = Field(default=None, alias="designHeight")
    design_scale: Optional[float] = Field(default=None, alias="designScale")
    constraints: Optional[ScaleConstraints] = None

    @property
    def has_intrinsic_size(self) -> bool:
        return bool(self.design_width) and bool(self.design_height)


class DesignPositionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    design_id: Optional[int] = Field(default=None, alias="designId")
    position: DesignTransform


class DesignTransformRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    design_url: Optional[str] = Field(default=None, alias="designUrl")
    # keyed by zone index as a string ("0", "1", ...)
    transforms: Dict[str, DesignTransform] = Field(default_factory=dict)


class DesignApplication(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_design: bool = Field(default=False, alias="hasDesign")
    design_url: Optional[str] = Field(default=None, alias="designUrl")
    positioning: Optional[str] = None
    scale: Optional[float] = None


class PositionRequest(BaseModel):
    """Every candidate source for one (product, zone, design) triple."""

    model_config = ConfigDict(populate_by_name=True)

    vendor_product_id: Optional[int] = Field(default=None, alias="vendorProductId")
    admin_product_id: Optional[int] = Field(default=None, alias="adminProductId")
    design_id: Optional[int] = Field(default=None, alias="designId")
    user_id: Optional[int] = Field(default=None, alias="userId")
    zone_index: int = Field(default=0, alias="zoneIndex")
    design_positions: List[DesignPositionRecord] = Field(default_factory=list, alias="designPositions")
    design_transforms: List[DesignTransformRecord] = Field(default_factory=list, alias="designTransforms")
    design_application: DesignApplication = Field(default_factory=DesignApplication, alias="designApplication")


class ResolvedTransform(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transform: DesignTransform
    source: TransformSource
    # cache-sourced designWidth/designHeight were merged in
    enriched: bool = False

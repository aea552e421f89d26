from fastapi import APIRouter, HTTPException
from core import state
from models.product import Product
from models.requests import DuplicateZones, SyncZones
from models.zone import Delimitation
from services.zone_sync import duplicate_zones, synchronize_product, timestamp_ids

router = APIRouter(prefix="/zones", tags=["zones"])


def _persist(product: Product) -> None:
    for image in product.iter_images():
        state.zones_store.write(image.id, image.delimitations)


@router.post("/sync", response_model=Product)
def sync_zones(body: SyncZones, persist: bool = False):
    id_factory = timestamp_ids() if body.regenerate_ids else None
    synced = synchronize_product(body.product, body.incoming, id_factory)
    if persist:
        _persist(synced)
    return synced


@router.post("/duplicate", response_model=Product)
def duplicate(body: DuplicateZones, persist: bool = False):
    id_factory = timestamp_ids() if body.regenerate_ids else None
    try:
        synced = duplicate_zones(body.product, body.source_image_id, body.zone_ids, id_factory)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    if persist:
        _persist(synced)
    return synced


@router.get("/{image_id}", response_model=list[Delimitation])
def get_zones(image_id: str):
    return state.zones_store.read(image_id)


@router.put("/{image_id}", response_model=list[Delimitation])
def put_zones(image_id: str, new_zones: list[Delimitation]):
    return state.zones_store.write(image_id, new_zones)

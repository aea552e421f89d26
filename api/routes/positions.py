from fastapi import APIRouter, HTTPException
from core import state
from core.config import Settings
from models.transform import DesignTransform, PositionRequest, ResolvedTransform
from services.positions import resolve_position
from services.positions_store import CachedPosition
from worker.writeback import enqueue_write_back

router = APIRouter(tags=["positions"])


@router.post("/positions/resolve", response_model=ResolvedTransform)
def resolve(body: PositionRequest):
    return resolve_position(
        body,
        cache=state.position_cache,
        write_back=enqueue_write_back,
        store=state.positions_store,
    )


@router.get("/positions/{user_id}/{product_id}/{design_id}", response_model=DesignTransform)
def get_position(user_id: int, product_id: int, design_id: int):
    transform = state.positions_store.read(design_id, product_id, user_id)
    if transform is None:
        raise HTTPException(status_code=404, detail="position not found")
    return transform


@router.put("/positions/{user_id}/{product_id}/{design_id}", response_model=DesignTransform)
def put_position(user_id: int, product_id: int, design_id: int, transform: DesignTransform):
    return state.positions_store.write(design_id, product_id, user_id, transform)


@router.get("/cache/positions", response_model=list[CachedPosition])
def list_cached():
    return state.position_cache.drafts()


@router.post("/cache/positions/cleanup")
def cleanup_cached(max_age_hours: float | None = None):
    settings = Settings()
    hours = settings.CACHE_MAX_AGE_HOURS if max_age_hours is None else max_age_hours
    return {"removed": state.position_cache.cleanup_expired(hours)}


@router.get("/cache/positions/{user_id}/{product_id}/{design_id}", response_model=CachedPosition)
def get_cached(user_id: int, product_id: int, design_id: int):
    entry = state.position_cache.read(design_id, product_id, user_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="no cached position")
    return entry


@router.put("/cache/positions/{user_id}/{product_id}/{design_id}", response_model=CachedPosition)
def put_cached(user_id: int, product_id: int, design_id: int, transform: DesignTransform):
    return state.position_cache.write(design_id, product_id, user_id, transform)


@router.delete("/cache/positions/{user_id}/{product_id}/{design_id}")
def delete_cached(user_id: int, product_id: int, design_id: int):
    return {"deleted": state.position_cache.delete(design_id, product_id, user_id)}

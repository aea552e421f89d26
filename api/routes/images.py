from dataclasses import asdict
from fastapi import APIRouter, HTTPException
from core import state
from models.requests import BoxResized, ImageLoaded

router = APIRouter(prefix="/images", tags=["images"])


def _describe(container_id: str):
    entry = state.registry.get(container_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"unknown container {container_id}")
    mapping = state.registry.mapping(container_id)
    return {
        "containerId": entry.container_id,
        "url": entry.url,
        "loaded": entry.loaded,
        "naturalSize": [entry.natural_width, entry.natural_height],
        "boxSize": [entry.box_width, entry.box_height],
        "renderable": mapping.is_renderable,
        "mapping": asdict(mapping),
    }


@router.post("/loaded")
def image_loaded(body: ImageLoaded):
    state.registry.image_loaded(body.container_id, body.url, body.natural_width, body.natural_height)
    return _describe(body.container_id)


@router.post("/resized")
def box_resized(body: BoxResized):
    state.registry.box_resized(body.container_id, body.width, body.height)
    return _describe(body.container_id)


@router.get("/{container_id}")
def get_image(container_id: str):
    return _describe(container_id)


@router.delete("/{container_id}", status_code=204)
def forget_image(container_id: str):
    state.registry.forget(container_id)

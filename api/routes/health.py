from fastapi import APIRouter
from core import state
from core.config import Settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    s = Settings()
    return {
        "ok": True,
        "fallback_size": list(s.fallback_size),
        "preview_fallback_size": list(s.preview_fallback_size),
        "default_design_scale": s.DEFAULT_DESIGN_SCALE,
        "pending_writebacks": state.writeback_queue.qsize(),
    }

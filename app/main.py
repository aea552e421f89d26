from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import queue
import threading

from core import state
from core.config import Settings
from core.logging import configure_logging
from services.positions_store import DesignPositionsStore, LocalPositionCache
from services.zones_store import ZonesStore
from worker.writeback import run_writeback
from api.routes import health, images, positions, render, zones

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- startup ---
        state.stop_flag = False
        state.writeback_queue = queue.Queue(maxsize=settings.WRITEBACK_QUEUE_SIZE)
        state.zones_store = ZonesStore(settings.ZONES_PATH)
        state.positions_store = DesignPositionsStore(settings.POSITIONS_PATH)
        state.position_cache = LocalPositionCache(settings.CACHE_PATH)
        state.position_cache.cleanup_expired(settings.CACHE_MAX_AGE_HOURS)
        worker = threading.Thread(target=run_writeback, daemon=True)
        worker.start()
        logger.info("zone compositor ready (zones=%s)", settings.ZONES_PATH)
        try:
            yield
        finally:
            # --- shutdown ---
            state.stop_flag = True
            worker.join(timeout=2)

    app = FastAPI(title="Zone Compositor API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(images.router)
    app.include_router(zones.router)
    app.include_router(render.router)
    app.include_router(positions.router)
    app.include_router(health.router)

    return app


app = create_app()

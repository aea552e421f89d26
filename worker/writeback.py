import logging
import queue
from typing import Optional

from core import state
from models.transform import DesignTransform, PositionRequest

logger = logging.getLogger(__name__)


def enqueue_write_back(request: PositionRequest, transform: DesignTransform) -> None:
    """Queue a reconciled position for persistence. Never blocks."""
    if request.design_id is None or request.user_id is None:
        return
    state.writeback_queue.put_nowait(
        (request.design_id, request.admin_product_id, request.user_id, transform)
    )


def drain_once(timeout: float = 0.5) -> Optional[bool]:
    """Persist one queued write-back. None when the queue stayed empty."""
    try:
        design_id, product_id, user_id, transform = state.writeback_queue.get(timeout=timeout)
    except queue.Empty:
        return None
    try:
        store = state.positions_store
        if store is None:
            logger.warning("no position store bound; dropping write-back for design %s", design_id)
            return False
        store.write(design_id, product_id, user_id, transform)
        logger.info("position for design %s written back", design_id)
        return True
    except Exception:
        # idempotent: the next load repeats the merge and retries
        logger.warning("write-back for design %s failed", design_id, exc_info=True)
        return False
    finally:
        state.writeback_queue.task_done()


def run_writeback() -> None:
    while not state.stop_flag:
        drain_once()

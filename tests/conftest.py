import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from core import state
from core.config import Settings


@pytest.fixture(autouse=True)
def clean_registry():
    state.registry.clear()
    yield
    state.registry.clear()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        ZONES_PATH=str(tmp_path / "zones.json"),
        POSITIONS_PATH=str(tmp_path / "positions.json"),
        CACHE_PATH=str(tmp_path / "cache.json"),
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c

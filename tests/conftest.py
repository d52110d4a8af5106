"""
Shared fixtures: settings/metrics reset, a seeded store and a wired FastAPI app.
"""
import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from sanitized.api.errors import register_exception_handlers
from sanitized.api.request import patch_model, patch_model_by_id, sanitized_body
from sanitized.core.config import get_settings
from sanitized.core.metrics import get_metrics_collector
from sanitized.services.store import InMemoryStore

from sample_records import User


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    """Fresh settings and metrics for every test."""
    for name in ("SANITIZED_PRE_VALIDATE_ON_PATCH", "SANITIZED_CONSTRUCTION_ERROR_MESSAGE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_metrics_collector().reset()
    yield
    get_settings.cache_clear()
    get_metrics_collector().reset()


@pytest.fixture
def store():
    store = InMemoryStore()
    store.add(User(id=1, name="Jimmy", email="jimmy_jim@tested.com"))
    return store


@pytest.fixture
def existing_user():
    return User(id=15, name="Rylo Ken", email="test@tested.com")


@pytest.fixture
def test_app(store):
    app = FastAPI()
    register_exception_handlers(app)

    def _render(user: User) -> dict:
        return {"user": user.model_dump(), "exists": user.exists}

    @app.post("/users")
    async def create_user(user: User = Depends(sanitized_body(User))):
        return _render(user)

    @app.post("/users/self")
    async def create_self(
        user: User = Depends(
            sanitized_body(User, injecting=lambda r: {"email": r.headers.get("X-User-Email")})
        ),
    ):
        return _render(user)

    @app.patch("/users/{user_id}")
    async def update_user(user_id: int, request: Request):
        user = await patch_model_by_id(request, User, user_id, store)
        store.save(user)
        return _render(user)

    @app.put("/users/draft")
    async def update_draft(request: Request):
        draft = User(id=15, name="Rylo Ken", email="test@tested.com")
        return _render(await patch_model(request, draft))

    return app


@pytest.fixture
def client(test_app):
    return TestClient(test_app)

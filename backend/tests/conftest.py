import os
import tempfile

# Settings are read once at import time; point them at throwaway locations first
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{tempfile.mkdtemp()}/app.db")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from linguatext.database import get_session
from linguatext.main import app
from linguatext.routers.telegram import get_telegram_bot
from linguatext.services.cooldown import KeyedCooldown


@pytest.fixture
def client(tmp_path):
    """Test client backed by a fresh SQLite database per test."""
    db_path = tmp_path / "test.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    SQLModel.metadata.create_all(sync_engine)
    sync_engine.dispose()

    # Each TestClient request runs in its own event loop, so no pooled connections
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_telegram_bot] = lambda: None
    app.state.greeting_cooldown = KeyedCooldown(5.0)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register a Telegram user and return the x-user-id headers for it."""
    def _make_user(telegram_id: int = 1001, first_name: str = "Aziz") -> dict:
        response = client.post(
            "/api/auth/telegram",
            json={"telegram_id": telegram_id, "first_name": first_name},
        )
        assert response.status_code == 200, response.text
        return {"x-user-id": str(response.json()["user"]["id"])}

    return _make_user

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import sessionmaker

from shortreel.config import get_settings
from shortreel.database import build_engine, get_db, init_db
from shortreel.main import app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Fresh settings per test, with uploads going to a temp dir."""
    monkeypatch.setenv("VIDEO_UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("GIFT_CREDITS_CREATOR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest_asyncio.fixture
async def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def register_user(client):
    """Register through the API; returns (auth headers, user json)."""

    async def _register(username: str, email: str | None = None, password: str = "secret123"):
        resp = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register

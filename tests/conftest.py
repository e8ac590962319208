from __future__ import annotations

import mongomock
import pytest
from fastapi.testclient import TestClient

from serene_stays.api.server import create_app
from serene_stays.config import Config
from serene_stays.db import Database


SECRET = "test-secret"


@pytest.fixture
def cfg() -> Config:
    return Config(
        MONGODB_URI="mongodb://localhost:27017",
        MONGODB_DB_NAME="sereneStaysTest",
        ACCESS_TOKEN_SECRET=SECRET,
        AUTH_TOKEN_EXPIRE_MINUTES=60,
        APP_ENV="development",
        MONGODB_PING_ON_STARTUP=False,
        CORS_ALLOW_ORIGINS="http://localhost:5173,https://serene-stays-001.netlify.app",
    )


@pytest.fixture
def database() -> Database:
    db = Database(mongomock.MongoClient(), "sereneStaysTest")
    yield db
    db.close()


@pytest.fixture
def client(cfg: Config, database: Database) -> TestClient:
    app = create_app(cfg, database)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client: TestClient):
    def _login(email: str) -> None:
        resp = client.post("/jwt", json={"email": email})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

    return _login

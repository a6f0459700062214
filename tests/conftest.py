import os
from collections.abc import Generator

# 应用模块在导入时创建数据库引擎，需在导入前切换到内存库。
os.environ["SD_DATABASE_URL"] = "sqlite+pysqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import souldiary_api.models  # noqa: F401,E402
from souldiary_api.core.config import get_settings  # noqa: E402
from souldiary_api.core.security import IdentityClaims, TokenService, get_token_service  # noqa: E402
from souldiary_api.db.session import get_db  # noqa: E402
from souldiary_api.main import app  # noqa: E402
from souldiary_api.models.base import Base  # noqa: E402
from souldiary_api.models.sticker import Sticker  # noqa: E402

TEST_SECRET = "unit-test-secret-key-at-least-32-bytes"
TEST_HASH_ITERATIONS = 1000


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    sqlite_engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=sqlite_engine)
    yield sqlite_engine
    Base.metadata.drop_all(bind=sqlite_engine)
    sqlite_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_SECRET, algorithm="HS256", ttl_seconds=3600)


@pytest.fixture
def api_client(
    monkeypatch: pytest.MonkeyPatch,
    session_factory: sessionmaker,
    token_service: TokenService,
) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("SD_AUTH_PASSWORD_HASH_ITERATIONS", str(TEST_HASH_ITERATIONS))
    get_settings.cache_clear()
    app.dependency_overrides.clear()

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture
def alice() -> IdentityClaims:
    return IdentityClaims(user_id="alice", name="Alice")


@pytest.fixture
def bob() -> IdentityClaims:
    return IdentityClaims(user_id="bob", name="Bob")


@pytest.fixture
def sticker_catalog(db_session: Session) -> list[Sticker]:
    stickers = [
        Sticker(sticker_id=7, name="Sunny", image_url="https://cdn.example.com/stickers/7.png", price=10),
        Sticker(sticker_id=8, name="Rainy", image_url="https://cdn.example.com/stickers/8.png", price=20),
    ]
    db_session.add_all(stickers)
    db_session.commit()
    return stickers

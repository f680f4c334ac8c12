"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

# Point settings at a scratch directory before the application is imported.
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="autolog-tests-"))
os.environ["AUTOLOG_DATA_DIR"] = str(_TEST_DATA_DIR)
os.environ["AUTOLOG_TEMP_DIR"] = str(_TEST_DATA_DIR / "temp")
os.environ["AUTOLOG_LOCAL_STORAGE_DIR"] = str(_TEST_DATA_DIR / "uploads")
os.environ["AUTOLOG_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DATA_DIR}/autolog.db"
os.environ["AUTOLOG_RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTOLOG_S3_BUCKET"] = ""

import pytest  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession  # noqa: E402

from autolog.models import Base, Garage, MaintenanceLog, Vehicle  # noqa: E402
from autolog.main import create_app  # noqa: E402
from autolog.database import get_db, session_scope  # noqa: E402
from autolog.services.account_service import AccountService  # noqa: E402
from autolog.storage import get_object_storage  # noqa: E402


class FakeObjectStorage:
    """In-memory object store that records every call."""

    def __init__(self, base_url: str = "https://s3.test/bucket"):
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.uploads: list[dict] = []
        self.removals: list[str] = []

    async def upload(self, path, key, *, content_type=None):
        data = Path(path).read_bytes()
        self.objects[key] = data
        self.uploads.append({"key": key, "data": data, "content_type": content_type})
        return f"{self.base_url}/{key}"

    async def remove(self, key):
        self.removals.append(key)
        existed = self.objects.pop(key, None) is not None
        return {"DeleteMarker": False, "Key": key, "Existed": existed}


@pytest.fixture
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_session(session_maker):
    """Create a test database session."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def storage():
    """Fake object storage shared by the app and the test."""
    return FakeObjectStorage()


@pytest.fixture
def app(session_maker, storage):
    """Application with database and storage overridden."""

    async def override_get_db():
        async with session_scope(session_maker) as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_storage] = lambda: storage
    return app


@pytest.fixture
async def client(app):
    """Create a test client with overridden database and storage."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def account(session_maker):
    """An account with a profile, plus a valid bearer token for it."""
    async with session_maker() as session:
        service = AccountService(session)
        account = await service.create("driver", first_name="Pat", last_name="Lane")
        token = await service.issue_token(account)
        await session.commit()
    return {
        "account_id": account.id,
        "profile_id": account.profile.id,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def auth_headers(account):
    """Authorization headers for the default account."""
    return account["headers"]


@pytest.fixture
async def targets(session_maker, account):
    """One entity of each attachable kind, owned by the default account's profile."""
    profile_id = account["profile_id"]
    async with session_maker() as session:
        garage = Garage(name="Home", location="Portland", profile_id=profile_id)
        session.add(garage)
        await session.flush()

        vehicle = Vehicle(
            name="Daily",
            make="Subaru",
            model="Outback",
            year=2014,
            garage_id=garage.id,
            profile_id=profile_id,
        )
        session.add(vehicle)
        await session.flush()

        log = MaintenanceLog(
            description="Oil change",
            vehicle_id=vehicle.id,
            profile_id=profile_id,
        )
        session.add(log)
        await session.commit()

    return {
        "profile": profile_id,
        "garage": garage.id,
        "vehicle": vehicle.id,
        "maintenance-log": log.id,
    }

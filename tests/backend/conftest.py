import os
import tempfile
import uuid
from pathlib import Path

# Point configuration at throwaway resources before the app is imported
TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="contactbook-uploads-")
os.environ["JWT_SECRET"] = "test-secret"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from contactbook.config import settings
from contactbook.core import db as db_module
from contactbook.core.security import hash_password
from contactbook.main import app
from contactbook.models.user import User

db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    """
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


def _clear_uploads() -> None:
    for path in Path(settings.upload_dir).iterdir():
        if path.is_file():
            path.unlink()


@pytest.fixture
def upload_dir() -> Path:
    return Path(settings.upload_dir)


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB
    and an empty uploads directory.
    """
    await _init_test_db()
    _clear_uploads()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()
    _clear_uploads()


@pytest_asyncio.fixture
async def create_admin():
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        user = await User.create(
            username=f"admin_{uuid.uuid4().hex[:6]}",
            password_hash=hash_password(password),
            role="admin",
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = "UserPass!23") -> tuple[User, str]:
        user = await User.create(
            username=f"user_{uuid.uuid4().hex[:6]}",
            password_hash=hash_password(password),
            role="user",
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers

# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from careerhub.core.config import settings
from careerhub.db import mongo
from careerhub.db.documents import set_document
from careerhub.main import app
from careerhub.services import ai_flows, llm_adapter
from careerhub.services.auth import issue_token
from careerhub.services.jobs import create_brand, create_job
from careerhub.services.users import create_user


class FakeCache:
    """In-memory stand-in for the Redis flow cache."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ttl=None):
        self.store[key] = value

    async def delete(self, key):
        self.store.pop(key, None)

    async def close(self):
        pass


@pytest.fixture(autouse=True)
def db():
    client = AsyncMongoMockClient()
    database = client["careerhub_test"]
    mongo.use_database(database)
    yield database
    mongo.use_database(None)


@pytest.fixture(autouse=True)
def fake_cache(monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(ai_flows, "cache", cache)
    return cache


@pytest.fixture(autouse=True)
def mock_llm(monkeypatch):
    monkeypatch.setattr(settings, "LLM_ADAPTER", "mock")
    monkeypatch.setattr(settings, "LLM_ALLOW_FALLBACK", True)
    llm_adapter.reset_adapter()
    yield
    llm_adapter.reset_adapter()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


def auth_headers(uid: str) -> dict:
    return {"Authorization": f"Bearer {issue_token(uid)}"}


@pytest.fixture
def make_user():
    """Create an account + users document; returns (uid, headers)."""
    counter = {"n": 0}

    async def _make(role: str, email: str = None, full_name: str = None, **extra):
        counter["n"] += 1
        email = email or f"{role.replace('-', '_')}{counter['n']}@example.com"
        uid = await create_user(email, "password123", full_name or f"Test {role}", role, **extra)
        return uid, auth_headers(uid)

    return _make


COMPLETE_PROFILE = {
    "full_name": "Budi Santoso",
    "nickname": "Budi",
    "email": "budi@example.com",
    "phone": "081234567890",
    "e_ktp_number": "3171234567890001",
    "gender": "Laki-laki",
    "birth_place": "Jakarta",
    "birth_date": "1995-04-12",
    "address_ktp": {
        "street": "Jl. Merdeka 1",
        "city": "Jakarta",
        "province": "DKI Jakarta",
    },
    "education": [
        {"institution": "Universitas Indonesia", "level": "S1", "start_date": "2013-08", "end_date": "2017-07"}
    ],
    "declaration": True,
    "profile_status": "completed",
}


@pytest.fixture
def complete_profile():
    async def _make(uid: str, **overrides):
        await set_document("profiles", uid, {**COMPLETE_PROFILE, **overrides})
        await set_document("users", uid, {"is_profile_complete": True}, merge=True)
    return _make


@pytest.fixture
def make_job():
    """Create a brand + published job; returns the job document."""
    async def _make(position: str = "Staf Administrasi", **fields):
        brand_id = fields.pop("brand_id", None) or await create_brand({"name": "Kopi Nusantara"})
        data = {
            "position": position,
            "status_job": "fulltime",
            "division": "Operasional",
            "location": "Jakarta",
            "brand_id": brand_id,
            "general_requirements_html": "<p>Minimal S1</p>",
            "special_requirements_html": "<ul><li>Menguasai Excel</li></ul>",
            "publish_status": "published",
            "apply_deadline": None,
            **fields,
        }
        return await create_job(data, "system")
    return _make

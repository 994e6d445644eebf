import io
import itertools
import json
import os
from datetime import datetime, timedelta

os.environ["ENVIRONMENT"] = "development"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./socialhub-test.db"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["STORAGE_BACKEND"] = "supabase"

import httpx
import pytest
from PIL import Image
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from socialhub.core.security import create_access_token, get_password_hash
from socialhub.db.base import Base
from socialhub.db.session import build_engine, get_db, get_session_maker
from socialhub.main import app
from socialhub.models import Post, User, UserRelationship
from socialhub.services.storage_service import SupabaseStorage, get_storage

PROJECT_URL = "https://project.supabase.co"
BUCKET_URL = "https://project.supabase.co/storage/v1/object/public"
ADMIN_EMAIL = "admin@example.com"
PASSWORD = "password123"


class StorageRecorder:
    """Stands in for the Supabase Storage API and records every call."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.fail = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, json={"error": "internal"})
        return httpx.Response(200, json={"Key": request.url.path})

    @property
    def uploads(self) -> list[str]:
        """Upload request paths, ``/storage/v1/object/{bucket}/{name}``."""
        return [r.url.path for r in self.requests if r.method == "POST"]

    @property
    def removals(self) -> list[tuple[str, list[str]]]:
        """``(bucket, names)`` of every delete request."""
        return [
            (r.url.path.rsplit("/", 1)[-1], json.loads(r.content)["prefixes"])
            for r in self.requests
            if r.method == "DELETE"
        ]


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def recorder():
    return StorageRecorder()


@pytest.fixture
async def storage(recorder):
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder.handler))
    storage = SupabaseStorage(PROJECT_URL, "service-key", BUCKET_URL, client=client)
    yield storage
    await storage.aclose()


@pytest.fixture
async def client(session_maker, storage):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    app.dependency_overrides[get_storage] = lambda: storage
    app.state.admin_id = None
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.admin_id = None


@pytest.fixture
def make_user(session_maker):
    counter = itertools.count(1)

    async def _make(email=None, username=None, name=None, password=PASSWORD, **fields) -> User:
        n = next(counter)
        async with session_maker() as session:
            user = User(
                email=email or f"user{n}@example.com",
                username=username or f"user{n}",
                name=name or f"User {n}",
                password_hash=get_password_hash(password),
                **fields,
            )
            session.add(user)
            await session.commit()
            return user

    return _make


@pytest.fixture
async def admin(make_user):
    return await make_user(email=ADMIN_EMAIL, username="admin", name="Admin", role="admin")


@pytest.fixture
def make_post(session_maker):
    base_time = datetime(2024, 1, 1, 12, 0, 0)
    counter = itertools.count(1)

    async def _make(user: User, text_content: str = "hello", image: str | None = None, **fields) -> Post:
        n = next(counter)
        fields.setdefault("created_at", base_time + timedelta(minutes=n))
        async with session_maker() as session:
            post = Post(user_id=user.id, text_content=text_content, image=image, **fields)
            session.add(post)
            await session.commit()
            return post

    return _make


@pytest.fixture
def add_rows(session_maker):
    """Insert arbitrary rows (comments, likes, follows...) in one transaction."""

    async def _add(*rows):
        async with session_maker() as session:
            session.add_all(rows)
            await session.commit()
        return rows

    return _add


@pytest.fixture
def follow(add_rows):
    async def _follow(follower: User, followed: User):
        await add_rows(UserRelationship(is_following_id=follower.id, is_followed_id=followed.id))

    return _follow


@pytest.fixture
def count_rows(session_maker):
    async def _count(model, *criteria) -> int:
        async with session_maker() as session:
            result = await session.execute(select(func.count()).select_from(model).where(*criteria))
            return result.scalar_one()

    return _count


def auth(user: User) -> dict[str, str]:
    """Session cookie header for ``user``."""
    return {"Cookie": f"jwt={create_access_token(user.id)}"}


def png_bytes(color=(200, 40, 40), size=(32, 24)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, "PNG")
    return buf.getvalue()


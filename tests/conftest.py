"""Shared pytest fixtures for the catalog test suite.

Every test gets its own SQLite file through aiosqlite. Seeding goes through
the ``db`` session (factories commit), reads through ``read_db`` or the app,
so the code under test never sees objects from the seeding identity map.
"""

import itertools
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

# Point the module-level engine at SQLite before anything imports it.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from catalog.models.album import Album
from catalog.models.artist import Artist
from catalog.models.release import Release
from catalog.services.database import Base, get_db

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    """Session used to seed data."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def read_db(session_factory):
    """Fresh session for the code under test."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_artist(db):
    counter = itertools.count(1)

    async def _make(name: Optional[str] = None, **kwargs: Any) -> Artist:
        kwargs.setdefault("created_at", NOW)
        artist = Artist(name=name or f"Artist {next(counter)}", **kwargs)
        db.add(artist)
        await db.commit()
        return artist

    return _make


@pytest.fixture
def make_release(db):
    counter = itertools.count(1)

    async def _make(
        name: Optional[str] = None,
        released_at: Optional[datetime] = None,
        artists: Iterable[Artist] = (),
        **kwargs: Any,
    ) -> Release:
        index = next(counter)
        kwargs.setdefault("created_at", NOW)
        release = Release(
            name=name or f"Release {index}",
            released_at=released_at or NOW - timedelta(days=index),
            artists=list(artists),
            **kwargs,
        )
        db.add(release)
        await db.commit()
        return release

    return _make


@pytest.fixture
def make_album(db, make_artist, make_release):
    counter = itertools.count(1)

    async def _make(
        name: Optional[str] = None,
        release: Optional[Release] = None,
        artist: Optional[Artist] = None,
        duration_in_minutes: int = 42,
        **kwargs: Any,
    ) -> Album:
        index = next(counter)
        kwargs.setdefault("created_at", NOW + timedelta(minutes=index))
        album = Album(
            name=name or f"Album {index}",
            duration_in_minutes=duration_in_minutes,
            release=release or await make_release(),
            artist=artist or await make_artist(),
            **kwargs,
        )
        db.add(album)
        await db.commit()
        return album

    return _make


# ---------------------------------------------------------------------------
# App client
# ---------------------------------------------------------------------------


@pytest.fixture
def app(session_factory):
    from main import app

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

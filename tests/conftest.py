# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

import os
import re
from collections.abc import AsyncIterator
from itertools import count

import pytest
from sqlalchemy import event as sa_event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from harbour.config import get_settings
from harbour.models.base import Base


def _get_test_database_url() -> str:
    """Return the test database URL from env, falling back to in-memory SQLite."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine for the test database."""
    url = _get_test_database_url()
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=False, poolclass=StaticPool)

        @sa_event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record):  # type: ignore[no-untyped-def]
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a database session that rolls back after each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# Factory helpers for creating model instances in tests
# ---------------------------------------------------------------------------

_slug_counter = count(1)


def _slug(name: str) -> str:
    base = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return f"{base}-{next(_slug_counter)}"


def make_event(
    *,
    title: str = "Test Event",
    description: str = "",
    slug: str | None = None,
    organizer: str | None = None,
    location: str | None = "St. John's",
) -> dict[str, object]:
    """Return kwargs suitable for constructing an Event model instance."""
    return {
        "slug": slug or _slug(title),
        "title": title,
        "description": description,
        "location": location,
        "link": "https://example.com/event",
        "organizer": organizer,
    }


def make_company(
    *,
    name: str = "Test Company",
    description: str = "",
    slug: str | None = None,
    visible: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Company model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "description": description,
        "location": "St. John's, NL",
        "logo": None,
        "visible": visible,
    }


def make_person(
    *,
    name: str = "Test Person",
    bio: str = "",
    slug: str | None = None,
    visible: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Person model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "bio": bio,
        "avatar": None,
        "visible": visible,
    }


def make_group(
    *,
    name: str = "Test Group",
    description: str = "",
    slug: str | None = None,
    visible: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Group model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "description": description,
        "visible": visible,
    }


def make_news(
    *,
    title: str = "Test News",
    content: str = "",
    slug: str | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a News model instance."""
    return {
        "slug": slug or _slug(title),
        "title": title,
        "content": content,
        "excerpt": None,
    }


def make_job(
    *,
    title: str = "Test Job",
    description: str = "",
    slug: str | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Job model instance."""
    return {
        "slug": slug or _slug(title),
        "title": title,
        "description": description,
        "location": "Remote",
        "workplace_type": "remote",
        "apply_link": "https://example.com/apply",
    }


def make_project(
    *,
    name: str = "Test Project",
    description: str = "",
    slug: str | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Project model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "description": description,
        "type": "tool",
    }


def make_product(
    *,
    name: str = "Test Product",
    description: str = "",
    slug: str | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Product model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "description": description,
    }


def make_education(
    *,
    name: str = "Test College",
    description: str = "",
    slug: str | None = None,
    visible: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing an Education model instance."""
    return {
        "slug": slug or _slug(name),
        "name": name,
        "description": description,
        "type": "college",
        "visible": visible,
    }

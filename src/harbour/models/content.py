# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Content tables of the directory.

Rows are created, edited and deleted by the admin CRUD layer. The reference
graph only reads them: display names for resolution, slugs for URLs and a
handful of card fields for backlink display.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import event as sa_event
from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    String,
    Text,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from harbour.models.base import Base, IntegerIDMixin, TimestampMixin


class ContentType(str, enum.Enum):
    EVENT = "event"
    NEWS = "news"
    JOB = "job"
    COMPANY = "company"
    PROJECT = "project"
    GROUP = "group"
    PERSON = "person"
    EDUCATION = "education"
    PRODUCT = "product"


def normalize_name(name: str) -> str:
    return name.strip().lower()


class NameKeyMixin:
    """Stores the normalised display name in ``name_key``.

    Name resolution matches on this column, so the stored side and the query
    side are folded by the same ``normalize_name``. ``name_field`` names the
    display column; the key is rewritten on every ORM insert and update.
    Bulk ``UPDATE`` statements bypass it.
    """

    name_field = "name"

    name_key: Mapped[str] = mapped_column(
        String, nullable=False, default="", server_default="", index=True
    )


def _sync_name_key(mapper, connection, target) -> None:  # type: ignore[no-untyped-def]
    target.name_key = normalize_name(getattr(target, target.name_field) or "")


sa_event.listen(NameKeyMixin, "before_insert", _sync_name_key, propagate=True)
sa_event.listen(NameKeyMixin, "before_update", _sync_name_key, propagate=True)


class Event(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "events"
    name_field = "title"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str | None] = mapped_column(String, default=None)
    link: Mapped[str] = mapped_column(String, nullable=False, default="")
    # Comma-separated organizer names, resolved like [[references]]
    organizer: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)
    icon_image: Mapped[str | None] = mapped_column(String, default=None)
    requires_signup: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    recurrence_rule: Mapped[str | None] = mapped_column(String, default=None)
    recurrence_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )
    default_start_time: Mapped[str | None] = mapped_column(String, default=None)
    default_end_time: Mapped[str | None] = mapped_column(String, default=None)

    dates: Mapped[list[EventDate]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventDate.start_date",
    )


class EventDate(IntegerIDMixin, Base):
    __tablename__ = "event_dates"

    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    event: Mapped[Event] = relationship(back_populates="dates")


class News(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "news"
    name_field = "title"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, default="announcement")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    excerpt: Mapped[str | None] = mapped_column(Text, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )


class Job(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "jobs"
    name_field = "title"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    company_name: Mapped[str | None] = mapped_column(String, default=None)
    location: Mapped[str | None] = mapped_column(String, default=None)
    workplace_type: Mapped[str | None] = mapped_column(String, default=None)
    salary_range: Mapped[str | None] = mapped_column(String, default=None)
    apply_link: Mapped[str] = mapped_column(String, nullable=False, default="")
    posted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )


class Company(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "companies"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website: Mapped[str | None] = mapped_column(String, default=None)
    location: Mapped[str | None] = mapped_column(String, default=None)
    founded: Mapped[str | None] = mapped_column(String, default=None)
    logo: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)
    visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )


class Project(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "projects"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(String, nullable=False, default="other")
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    logo: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)


class Group(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "groups"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website: Mapped[str | None] = mapped_column(String, default=None)
    meeting_frequency: Mapped[str | None] = mapped_column(String, default=None)
    logo: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)
    visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )


class Person(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "people"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website: Mapped[str | None] = mapped_column(String, default=None)
    avatar: Mapped[str | None] = mapped_column(String, default=None)
    visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )


class Education(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "education"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website: Mapped[str | None] = mapped_column(String, default=None)
    type: Mapped[str] = mapped_column(String, nullable=False, default="other")
    logo: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)
    visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )


class Product(IntegerIDMixin, TimestampMixin, NameKeyMixin, Base):
    __tablename__ = "products"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website: Mapped[str | None] = mapped_column(String, default=None)
    logo: Mapped[str | None] = mapped_column(String, default=None)
    cover_image: Mapped[str | None] = mapped_column(String, default=None)

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Registry of the directory's content types.

Everything the reference graph needs to know about a content type lives in
one ``ContentTypeInfo`` row: which table holds it, which column is its display
name, which text fields can carry ``[[references]]``, where its pages live and
which columns its backlink card shows. Adding a content type means adding a
model and one entry to ``CONTENT_TYPES``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import InstrumentedAttribute

from harbour.models.base import Base
from harbour.models.content import (
    Company,
    ContentType,
    Education,
    Event,
    Group,
    Job,
    News,
    Person,
    Product,
    Project,
)


@dataclass(frozen=True, slots=True)
class ContentRef:
    """Identifies one entity of any content type."""

    type: ContentType
    id: int

    def __str__(self) -> str:
        return f"{self.type.value}#{self.id}"


@dataclass(frozen=True, slots=True)
class ContentTypeInfo:
    type: ContentType
    model: type[Base]
    name_field: str
    base_path: str
    body_fields: tuple[str, ...]
    card_fields: tuple[str, ...]
    has_visibility: bool = False

    def column(self, field: str) -> InstrumentedAttribute[Any]:
        return getattr(self.model, field)  # type: ignore[no-any-return]

    @property
    def name_column(self) -> InstrumentedAttribute[Any]:
        return self.column(self.name_field)


CONTENT_TYPES: dict[ContentType, ContentTypeInfo] = {
    ContentType.EVENT: ContentTypeInfo(
        type=ContentType.EVENT,
        model=Event,
        name_field="title",
        base_path="/events",
        body_fields=("description",),
        card_fields=(
            "id", "slug", "title", "description", "location", "link",
            "organizer", "cover_image", "icon_image", "requires_signup",
            "recurrence_rule", "recurrence_end", "default_start_time",
            "default_end_time", "created_at", "updated_at",
        ),
    ),
    ContentType.NEWS: ContentTypeInfo(
        type=ContentType.NEWS,
        model=News,
        name_field="title",
        base_path="/news",
        body_fields=("content",),
        card_fields=("id", "slug", "title", "cover_image", "excerpt", "published_at"),
    ),
    ContentType.JOB: ContentTypeInfo(
        type=ContentType.JOB,
        model=Job,
        name_field="title",
        base_path="/jobs",
        body_fields=("description",),
        card_fields=("id", "slug", "title", "location", "workplace_type"),
    ),
    ContentType.COMPANY: ContentTypeInfo(
        type=ContentType.COMPANY,
        model=Company,
        name_field="name",
        base_path="/directory/companies",
        body_fields=("description",),
        card_fields=("id", "slug", "name", "logo", "location"),
        has_visibility=True,
    ),
    ContentType.PROJECT: ContentTypeInfo(
        type=ContentType.PROJECT,
        model=Project,
        name_field="name",
        base_path="/directory/projects",
        body_fields=("description",),
        card_fields=("id", "slug", "name", "logo", "type"),
    ),
    ContentType.GROUP: ContentTypeInfo(
        type=ContentType.GROUP,
        model=Group,
        name_field="name",
        base_path="/directory/groups",
        body_fields=("description",),
        card_fields=("id", "slug", "name", "logo"),
        has_visibility=True,
    ),
    ContentType.PERSON: ContentTypeInfo(
        type=ContentType.PERSON,
        model=Person,
        name_field="name",
        base_path="/directory/people",
        body_fields=("bio",),
        card_fields=("id", "slug", "name", "avatar"),
        has_visibility=True,
    ),
    ContentType.EDUCATION: ContentTypeInfo(
        type=ContentType.EDUCATION,
        model=Education,
        name_field="name",
        base_path="/directory/education",
        body_fields=("description",),
        card_fields=("id", "slug", "name", "logo", "type"),
        has_visibility=True,
    ),
    ContentType.PRODUCT: ContentTypeInfo(
        type=ContentType.PRODUCT,
        model=Product,
        name_field="name",
        base_path="/directory/products",
        body_fields=("description",),
        card_fields=("id", "slug", "name", "logo", "website"),
    ),
}

# Presentation order of backlink groups on detail pages.
BACKLINK_GROUP_ORDER: tuple[ContentType, ...] = (
    ContentType.EVENT,
    ContentType.NEWS,
    ContentType.JOB,
    ContentType.COMPANY,
    ContentType.PROJECT,
    ContentType.GROUP,
    ContentType.PERSON,
    ContentType.EDUCATION,
    ContentType.PRODUCT,
)


def get_content_type(content_type: ContentType | str) -> ContentTypeInfo:
    return CONTENT_TYPES[ContentType(content_type)]


def content_url(content_type: ContentType | str, slug: str) -> str:
    """Return the site path of an entity's detail page."""
    return f"{get_content_type(content_type).base_path}/{slug}"

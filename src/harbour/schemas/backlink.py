# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Card payloads for the "Referenced by" section of detail pages.

Each source type contributes the fields its card component renders; the
``type`` literal discriminates the union.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from harbour.models.content import ContentType


class _Card(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str


class EventDateCard(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    start_date: datetime
    end_date: datetime | None = None


class EventCard(_Card):
    title: str
    description: str
    location: str | None = None
    link: str
    organizer: str | None = None
    cover_image: str | None = None
    icon_image: str | None = None
    requires_signup: bool = False
    recurrence_rule: str | None = None
    recurrence_end: datetime | None = None
    default_start_time: str | None = None
    default_end_time: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    dates: list[EventDateCard] = []


class NewsCard(_Card):
    title: str
    cover_image: str | None = None
    excerpt: str | None = None
    published_at: datetime | None = None


class JobCard(_Card):
    title: str
    location: str | None = None
    workplace_type: str | None = None


class CompanyCard(_Card):
    name: str
    logo: str | None = None
    location: str | None = None


class ProjectCard(_Card):
    name: str
    logo: str | None = None
    type: str


class GroupCard(_Card):
    name: str
    logo: str | None = None


class PersonCard(_Card):
    name: str
    avatar: str | None = None


class EducationCard(_Card):
    name: str
    logo: str | None = None
    type: str | None = None


class ProductCard(_Card):
    name: str
    logo: str | None = None
    website: str | None = None


class EventBacklink(BaseModel):
    type: Literal["event"] = "event"
    relation: str | None = None
    data: EventCard


class NewsBacklink(BaseModel):
    type: Literal["news"] = "news"
    relation: str | None = None
    data: NewsCard


class JobBacklink(BaseModel):
    type: Literal["job"] = "job"
    relation: str | None = None
    data: JobCard


class CompanyBacklink(BaseModel):
    type: Literal["company"] = "company"
    relation: str | None = None
    data: CompanyCard


class ProjectBacklink(BaseModel):
    type: Literal["project"] = "project"
    relation: str | None = None
    data: ProjectCard


class GroupBacklink(BaseModel):
    type: Literal["group"] = "group"
    relation: str | None = None
    data: GroupCard


class PersonBacklink(BaseModel):
    type: Literal["person"] = "person"
    relation: str | None = None
    data: PersonCard


class EducationBacklink(BaseModel):
    type: Literal["education"] = "education"
    relation: str | None = None
    data: EducationCard


class ProductBacklink(BaseModel):
    type: Literal["product"] = "product"
    relation: str | None = None
    data: ProductCard


DetailedBacklink = Annotated[
    EventBacklink
    | NewsBacklink
    | JobBacklink
    | CompanyBacklink
    | ProjectBacklink
    | GroupBacklink
    | PersonBacklink
    | EducationBacklink
    | ProductBacklink,
    Field(discriminator="type"),
]

BACKLINK_MODELS: dict[ContentType, type[BaseModel]] = {
    ContentType.EVENT: EventBacklink,
    ContentType.NEWS: NewsBacklink,
    ContentType.JOB: JobBacklink,
    ContentType.COMPANY: CompanyBacklink,
    ContentType.PROJECT: ProjectBacklink,
    ContentType.GROUP: GroupBacklink,
    ContentType.PERSON: PersonBacklink,
    ContentType.EDUCATION: EducationBacklink,
    ContentType.PRODUCT: ProductBacklink,
}


class BacklinkGroup(BaseModel):
    type: ContentType
    items: list[DetailedBacklink]

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from harbour.models.content import ContentType


class ResolvedRef(BaseModel):
    """A resolved [[reference]] handed to the markdown renderer."""

    text: str
    type: ContentType
    slug: str
    name: str
    relation: str | None = None


class OrganizerLink(BaseModel):
    text: str
    resolved: bool
    url: str | None = None
    name: str | None = None


class IncomingReference(BaseModel):
    """One entry of a plain "Referenced by" list."""

    type: ContentType
    id: int
    name: str
    slug: str
    url: str
    relation: str | None = None


class ReferenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    source_type: ContentType
    source_id: int
    target_type: ContentType
    target_id: int
    relation: str | None
    reference_text: str
    created_at: datetime | None = None


class BodyRequest(BaseModel):
    body: str = Field(default="", max_length=200_000)


class OrganizerRequest(BaseModel):
    organizer: str | None = None


class RenderResponse(BaseModel):
    markdown: str
    refs: dict[str, ResolvedRef]


class IndexReportResponse(BaseModel):
    source_type: ContentType
    source_id: int
    references: int
    unresolved: list[str]
    ambiguous: list[str]

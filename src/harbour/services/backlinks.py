# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Read path for "Referenced by" sections.

Two projections over the same incoming edges: ``detailed_backlinks`` returns
card data grouped by source type, ``incoming_references`` a flat list of
links. Edges whose source row no longer exists, or whose source is hidden,
are skipped. A source that references the target several times (with
different relations) appears once, with the relation of its oldest edge.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.config import get_settings
from harbour.content_types import (
    BACKLINK_GROUP_ORDER,
    CONTENT_TYPES,
    ContentRef,
    ContentTypeInfo,
    content_url,
)
from harbour.models.content import ContentType, EventDate
from harbour.models.reference import Reference
from harbour.repositories.reference_repository import ReferenceRepository
from harbour.schemas.backlink import BACKLINK_MODELS, BacklinkGroup
from harbour.schemas.reference import IncomingReference

logger = logging.getLogger(__name__)


def _distinct_sources(edges: list[Reference]) -> dict[ContentRef, str | None]:
    """Source of each edge in creation order, mapped to its first relation."""
    sources: dict[ContentRef, str | None] = {}
    for edge in edges:
        source = ContentRef(ContentType(edge.source_type), edge.source_id)
        if source not in sources:
            sources[source] = edge.relation
    return sources


def _visibility_filter(info: ContentTypeInfo, stmt: Any) -> Any:
    if info.has_visibility and get_settings().hide_invisible_references:
        return stmt.where(info.column("visible").is_(True))
    return stmt


async def _fetch_rows(
    session: AsyncSession,
    info: ContentTypeInfo,
    ids: list[int],
    fields: tuple[str, ...],
) -> dict[int, dict[str, Any]]:
    stmt = select(*(info.column(f) for f in fields)).where(info.column("id").in_(ids))
    result = await session.execute(_visibility_filter(info, stmt))
    return {row.id: dict(row._mapping) for row in result.all()}


async def _upcoming_dates(
    session: AsyncSession, event_ids: list[int]
) -> dict[int, list[dict[str, Any]]]:
    now = datetime.now(timezone.utc)
    result = await session.execute(
        select(EventDate)
        .where(EventDate.event_id.in_(event_ids), EventDate.start_date >= now)
        .order_by(EventDate.start_date)
    )
    limit = get_settings().upcoming_dates_limit
    dates: dict[int, list[dict[str, Any]]] = defaultdict(list)
    for date in result.scalars().all():
        if len(dates[date.event_id]) < limit:
            dates[date.event_id].append(
                {
                    "id": date.id,
                    "event_id": date.event_id,
                    "start_date": date.start_date,
                    "end_date": date.end_date,
                }
            )
    return dates


async def _load_sources(
    session: AsyncSession,
    sources: dict[ContentRef, str | None],
    *,
    detailed: bool,
) -> dict[ContentRef, dict[str, Any]]:
    ids_by_type: dict[ContentType, list[int]] = defaultdict(list)
    for source in sources:
        ids_by_type[source.type].append(source.id)

    rows: dict[ContentRef, dict[str, Any]] = {}
    for content_type, ids in ids_by_type.items():
        info = CONTENT_TYPES[content_type]
        if detailed:
            fields = info.card_fields
        else:
            fields = ("id", "slug", info.name_field)
        found = await _fetch_rows(session, info, ids, fields)
        if detailed and content_type is ContentType.EVENT and found:
            dates = await _upcoming_dates(session, list(found))
            for event_id, row in found.items():
                row["dates"] = dates.get(event_id, [])
        for entity_id, row in found.items():
            rows[ContentRef(content_type, entity_id)] = row
    return rows


async def detailed_backlinks(
    session: AsyncSession, target: ContentRef
) -> list[BacklinkGroup]:
    """Card data of every entity referencing ``target``, grouped by type."""
    try:
        edges = await ReferenceRepository(session).list_incoming(target)
        sources = _distinct_sources(edges)
        rows = await _load_sources(session, sources, detailed=True)
    except SQLAlchemyError:
        logger.warning("Could not load backlinks of %s", target, exc_info=True)
        return []

    grouped: dict[ContentType, list[BaseModel]] = defaultdict(list)
    for source, relation in sources.items():
        row = rows.get(source)
        if row is None:
            continue
        model = BACKLINK_MODELS[source.type]
        grouped[source.type].append(model.model_validate({"relation": relation, "data": row}))

    return [
        BacklinkGroup(type=content_type, items=grouped[content_type])  # type: ignore[arg-type]
        for content_type in BACKLINK_GROUP_ORDER
        if grouped.get(content_type)
    ]


async def incoming_references(
    session: AsyncSession, target: ContentRef
) -> list[IncomingReference]:
    """Flat link list of every entity referencing ``target``."""
    try:
        edges = await ReferenceRepository(session).list_incoming(target)
        sources = _distinct_sources(edges)
        rows = await _load_sources(session, sources, detailed=False)
    except SQLAlchemyError:
        logger.warning("Could not load incoming references of %s", target, exc_info=True)
        return []

    references = []
    for source, relation in sources.items():
        row = rows.get(source)
        if row is None:
            continue
        info = CONTENT_TYPES[source.type]
        references.append(
            IncomingReference(
                type=source.type,
                id=source.id,
                name=row[info.name_field],
                slug=row["slug"],
                url=content_url(source.type, row["slug"]),
                relation=relation,
            )
        )
    return references

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.config import get_settings
from harbour.content_types import ContentRef
from harbour.db.session import get_db
from harbour.models.content import ContentType
from harbour.repositories.reference_repository import ReferenceRepository
from harbour.schemas.backlink import BacklinkGroup
from harbour.schemas.reference import (
    BodyRequest,
    IncomingReference,
    IndexReportResponse,
    OrganizerLink,
    OrganizerRequest,
    ReferenceResponse,
    RenderResponse,
    ResolvedRef,
)
from harbour.services.backlinks import detailed_backlinks, incoming_references
from harbour.services.forward_resolver import (
    render_references,
    resolve_for_client,
    resolve_organizers,
)
from harbour.services.indexer import ReferenceIndexer, ReferenceStorageError

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/references", tags=["references"])


def _reindex_limit() -> str:
    return get_settings().reindex_rate_limit


@router.post("/resolve", response_model=dict[str, ResolvedRef])
async def resolve_references(
    body: BodyRequest,
    db: AsyncSession = Depends(get_db),
) -> dict[str, ResolvedRef]:
    return await resolve_for_client(db, body.body)


@router.post("/render", response_model=RenderResponse)
async def render(
    body: BodyRequest,
    db: AsyncSession = Depends(get_db),
) -> RenderResponse:
    """Resolve and rewrite a body's [[references]] into plain markdown."""
    refs = await resolve_for_client(db, body.body)
    return RenderResponse(markdown=render_references(body.body, refs), refs=refs)


@router.post("/organizers", response_model=list[OrganizerLink])
async def organizers(
    body: OrganizerRequest,
    db: AsyncSession = Depends(get_db),
) -> list[OrganizerLink]:
    return await resolve_organizers(db, body.organizer)


@router.get("/{content_type}/{entity_id}/backlinks", response_model=list[BacklinkGroup])
async def get_backlinks(
    content_type: ContentType,
    entity_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[BacklinkGroup]:
    return await detailed_backlinks(db, ContentRef(content_type, entity_id))


@router.get(
    "/{content_type}/{entity_id}/incoming", response_model=list[IncomingReference]
)
async def get_incoming(
    content_type: ContentType,
    entity_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[IncomingReference]:
    return await incoming_references(db, ContentRef(content_type, entity_id))


@router.get(
    "/{content_type}/{entity_id}/outgoing", response_model=list[ReferenceResponse]
)
async def get_outgoing(
    content_type: ContentType,
    entity_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ReferenceResponse]:
    repo = ReferenceRepository(db)
    edges = await repo.list_outgoing(ContentRef(content_type, entity_id))
    return [ReferenceResponse.model_validate(e) for e in edges]


@router.post("/{content_type}/{entity_id}/reindex", response_model=IndexReportResponse)
@limiter.limit(_reindex_limit)
async def reindex(
    request: Request,
    content_type: ContentType,
    entity_id: int,
    db: AsyncSession = Depends(get_db),
) -> IndexReportResponse:
    """Rebuild an entity's outgoing references from its stored text."""
    source = ContentRef(content_type, entity_id)
    try:
        report = await ReferenceIndexer(db).reindex_entity(source)
    except LookupError as exc:
        raise HTTPException(
            status_code=404, detail=f"{content_type.value} not found"
        ) from exc
    except ReferenceStorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return IndexReportResponse(
        source_type=content_type,
        source_id=entity_id,
        references=len(report.edges),
        unresolved=report.unresolved,
        ambiguous=report.ambiguous,
    )


@router.delete("/{content_type}/{entity_id}")
async def drop_references(
    content_type: ContentType,
    entity_id: int,
    db: AsyncSession = Depends(get_db),
) -> dict[str, int]:
    """Remove an entity's outgoing references; called when it is deleted."""
    try:
        removed = await ReferenceIndexer(db).drop_edges_for_source(
            ContentRef(content_type, entity_id)
        )
    except ReferenceStorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return {"deleted": removed}

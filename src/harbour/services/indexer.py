# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Write path of the reference graph.

The ``references`` table is derived state. Whenever the CRUD layer saves an
entity it calls ``reindex`` with the entity's text fields; the entity's
outgoing edges are then deleted and rebuilt from scratch inside a single
transaction. Deleting an entity calls ``drop_edges_for_source``.

Usage::

    indexer = ReferenceIndexer(session)
    await indexer.reindex(ContentRef(ContentType.EVENT, event.id), event.description,
                          organizer=event.organizer)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import CONTENT_TYPES, ContentRef
from harbour.models.content import Event
from harbour.references.parser import relation_by_name, scan_many, split_names
from harbour.references.resolver import (
    Ambiguous,
    Resolved,
    ResolutionResult,
    Resolver,
)
from harbour.repositories.base import BaseRepository
from harbour.repositories.reference_repository import Edge, ReferenceRepository

logger = logging.getLogger(__name__)

ORGANIZER_RELATION = "Organizer"


class ReferenceStorageError(Exception):
    """The edge set of a source could not be written; the prior set is intact."""

    def __init__(self, source: ContentRef, message: str) -> None:
        self.source = source
        super().__init__(f"Failed to update references of {source}: {message}")


@dataclass(slots=True)
class IndexReport:
    source: ContentRef
    edges: list[Edge] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    ambiguous: list[str] = field(default_factory=list)


class ReferenceIndexer:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.resolver = Resolver(session)
        self.references = ReferenceRepository(session)

    async def reindex(
        self,
        source: ContentRef,
        body: str | Sequence[str | None] | None,
        *,
        organizer: str | None = None,
    ) -> IndexReport:
        """Rebuild the outgoing edges of ``source`` from its current text.

        ``body`` may be a single text field or several; tokens of all fields
        are unioned. ``organizer`` is a comma-separated name list whose
        resolved names are indexed with the ``Organizer`` relation.

        Raises ReferenceStorageError if the edges cannot be stored.
        """
        bodies = [body] if body is None or isinstance(body, str) else list(body)
        tokens = scan_many(bodies)
        relations = relation_by_name(tokens)
        organizers = split_names(organizer)

        report = IndexReport(source)
        try:
            resolutions = await self.resolver.resolve_many([*relations, *organizers])

            # One body edge per target; spellings of the same entity collapse
            # and the first relation label seen fills in.
            by_target: dict[ContentRef, Edge] = {}
            for name, relation in relations.items():
                edge = self._edge_for(source, resolutions[name], relation, report)
                if edge is None:
                    continue
                kept = by_target.get(edge.target)
                if kept is None:
                    by_target[edge.target] = edge
                elif kept.relation is None and edge.relation is not None:
                    by_target[edge.target] = replace(kept, relation=edge.relation)

            edges = list(by_target.values())
            for name in dict.fromkeys(organizers):
                edge = self._edge_for(
                    source, resolutions[name], ORGANIZER_RELATION, report
                )
                if edge is not None:
                    edges.append(edge)

            await self.references.replace_for_source(source, edges)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Reindex of %s failed; previous references kept", source)
            raise ReferenceStorageError(source, str(exc)) from exc

        report.edges = edges
        logger.info(
            "Indexed %s: %d reference(s), %d unresolved, %d ambiguous",
            source,
            len(edges),
            len(report.unresolved),
            len(report.ambiguous),
        )
        return report

    async def reindex_entity(self, source: ContentRef) -> IndexReport:
        """Reindex an entity from the text fields stored on its row.

        Raises LookupError if the entity does not exist.
        """
        info = CONTENT_TYPES[source.type]
        entity = await BaseRepository(self.session, info.model).get_by_id(source.id)
        if entity is None:
            raise LookupError(f"{source} does not exist")

        bodies = [getattr(entity, f) for f in info.body_fields]
        organizer = entity.organizer if isinstance(entity, Event) else None
        return await self.reindex(source, bodies, organizer=organizer)

    async def drop_edges_for_source(self, source: ContentRef) -> int:
        """Remove every outgoing edge of a deleted (or deleting) entity."""
        try:
            removed = await self.references.delete_for_source(source)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Dropping references of %s failed", source)
            raise ReferenceStorageError(source, str(exc)) from exc
        logger.info("Dropped %d reference(s) from %s", removed, source)
        return removed

    async def rebuild_all(self) -> int:
        """Reindex every entity of every content type. Returns the edge count."""
        total = 0
        for info in CONTENT_TYPES.values():
            ids = (
                await self.session.execute(
                    select(info.column("id")).order_by(info.column("id"))
                )
            ).scalars().all()
            for entity_id in ids:
                report = await self.reindex_entity(ContentRef(info.type, entity_id))
                total += len(report.edges)
        logger.info("Rebuilt reference graph: %d reference(s)", total)
        return total

    @staticmethod
    def _edge_for(
        source: ContentRef,
        resolution: ResolutionResult,
        relation: str | None,
        report: IndexReport,
    ) -> Edge | None:
        if isinstance(resolution, Ambiguous):
            report.ambiguous.append(resolution.target_name)
            return None
        if not isinstance(resolution, Resolved):
            report.unresolved.append(resolution.target_name)
            return None
        if resolution.ref == source:
            return None
        return Edge(
            source=source,
            target=resolution.ref,
            relation=relation,
            reference_text=resolution.target_name,
        )

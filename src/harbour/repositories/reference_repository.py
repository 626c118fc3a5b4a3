# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import ContentRef
from harbour.models.reference import Reference
from harbour.repositories.base import BaseRepository


@dataclass(frozen=True, slots=True)
class Edge:
    """An edge to be written. Identity is (source, target, relation)."""

    source: ContentRef
    target: ContentRef
    relation: str | None
    reference_text: str

    @property
    def key(self) -> tuple[ContentRef, ContentRef, str | None]:
        return (self.source, self.target, self.relation)


class ReferenceRepository(BaseRepository[Reference]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Reference)

    async def list_outgoing(self, source: ContentRef) -> list[Reference]:
        result = await self.session.execute(
            select(Reference)
            .where(
                Reference.source_type == source.type.value,
                Reference.source_id == source.id,
            )
            .order_by(Reference.id)
        )
        return list(result.scalars().all())

    async def list_incoming(self, target: ContentRef) -> list[Reference]:
        result = await self.session.execute(
            select(Reference)
            .where(
                Reference.target_type == target.type.value,
                Reference.target_id == target.id,
            )
            .order_by(Reference.id)
        )
        return list(result.scalars().all())

    async def delete_for_source(self, source: ContentRef) -> int:
        result = await self.session.execute(
            delete(Reference).where(
                Reference.source_type == source.type.value,
                Reference.source_id == source.id,
            )
        )
        return result.rowcount or 0

    async def replace_for_source(
        self, source: ContentRef, edges: Iterable[Edge]
    ) -> list[Reference]:
        """Delete every edge of ``source`` and insert ``edges`` in its place.

        Self references and duplicate edges are dropped. Commit is left to
        the caller so the delete and insert land in one transaction.
        """
        await self.delete_for_source(source)

        rows: list[Reference] = []
        seen: set[tuple[ContentRef, ContentRef, str | None]] = set()
        for edge in edges:
            if edge.source != source:
                raise ValueError(f"Edge {edge.key} does not originate from {source}")
            if edge.target == source or edge.key in seen:
                continue
            seen.add(edge.key)
            rows.append(
                Reference(
                    source_type=source.type.value,
                    source_id=source.id,
                    target_type=edge.target.type.value,
                    target_id=edge.target.id,
                    relation=edge.relation,
                    reference_text=edge.reference_text,
                )
            )
        self.session.add_all(rows)
        await self.session.flush()
        return rows

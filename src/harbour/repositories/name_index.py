# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Display-name lookup across every content table.

Names match exactly after trimming surrounding whitespace and lower-casing.
The stored side is the ``name_key`` column written by ``NameKeyMixin``, so
both sides are folded by the same ``normalize_name``. There is no prefix,
fuzzy or partial matching. One indexed query is issued per content type and
the results are unioned.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import CONTENT_TYPES, ContentRef, ContentTypeInfo
from harbour.models.content import normalize_name


@dataclass(frozen=True, slots=True)
class NamedEntity:
    ref: ContentRef
    slug: str
    name: str
    visible: bool = True


class NameIndex:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def lookup(self, name: str) -> set[ContentRef]:
        matches = await self.lookup_many([name])
        return {entity.ref for entity in matches.get(normalize_name(name), [])}

    async def lookup_many(self, names: Iterable[str]) -> dict[str, list[NamedEntity]]:
        """Return matching entities keyed by normalised name.

        Names without a match are absent from the result. Entities within a
        key are ordered by content type registry order, then id.
        """
        wanted = {normalize_name(n) for n in names}
        wanted.discard("")
        if not wanted:
            return {}

        found: dict[str, list[NamedEntity]] = {}
        for info in CONTENT_TYPES.values():
            for key, entity in await self._lookup_type(info, wanted):
                found.setdefault(key, []).append(entity)
        return found

    async def get(self, ref: ContentRef) -> NamedEntity | None:
        """Fetch the display data of a single entity, or None if it is gone."""
        info = CONTENT_TYPES[ref.type]
        stmt = select(*self._columns(info)).where(info.column("id") == ref.id)
        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None
        return self._to_entity(info, row)

    async def _lookup_type(
        self, info: ContentTypeInfo, wanted: set[str]
    ) -> list[tuple[str, NamedEntity]]:
        stmt = (
            select(*self._columns(info))
            .where(info.column("name_key").in_(sorted(wanted)))
            .order_by(info.column("id"))
        )
        result = await self.session.execute(stmt)
        return [(row.name_key, self._to_entity(info, row)) for row in result.all()]

    @staticmethod
    def _columns(info: ContentTypeInfo) -> list[object]:
        columns: list[object] = [
            info.column("id"),
            info.column("slug"),
            info.name_column.label("name"),
            info.column("name_key"),
        ]
        if info.has_visibility:
            columns.append(info.column("visible"))
        return columns

    @staticmethod
    def _to_entity(info: ContentTypeInfo, row: object) -> NamedEntity:
        mapping = row._mapping  # type: ignore[attr-defined]
        return NamedEntity(
            ref=ContentRef(info.type, mapping["id"]),
            slug=mapping["slug"],
            name=mapping["name"],
            visible=bool(mapping["visible"]) if info.has_visibility else True,
        )

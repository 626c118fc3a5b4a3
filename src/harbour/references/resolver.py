# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Maps reference target names to entities.

A name that matches no entity is unresolved. A name shared by two or more
entities, of the same type or not, is ambiguous; callers never link or index
an ambiguous name, they treat it exactly like an unresolved one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import ContentRef
from harbour.models.content import normalize_name
from harbour.repositories.name_index import NamedEntity, NameIndex


@dataclass(frozen=True, slots=True)
class Unresolved:
    target_name: str


@dataclass(frozen=True, slots=True)
class Resolved:
    target_name: str
    entity: NamedEntity

    @property
    def ref(self) -> ContentRef:
        return self.entity.ref


@dataclass(frozen=True, slots=True)
class Ambiguous:
    target_name: str
    candidates: tuple[NamedEntity, ...]

    @property
    def refs(self) -> list[ContentRef]:
        return [c.ref for c in self.candidates]


ResolutionResult: TypeAlias = Unresolved | Resolved | Ambiguous


def classify(target_name: str, matches: list[NamedEntity]) -> ResolutionResult:
    if not matches:
        return Unresolved(target_name)
    if len(matches) == 1:
        return Resolved(target_name, matches[0])
    return Ambiguous(target_name, tuple(matches))


class Resolver:
    def __init__(self, session: AsyncSession) -> None:
        self.index = NameIndex(session)

    async def resolve(self, target_name: str) -> ResolutionResult:
        results = await self.resolve_many([target_name])
        return results[target_name]

    async def resolve_many(
        self, target_names: Iterable[str]
    ) -> dict[str, ResolutionResult]:
        """Resolve each distinct name, keyed by the name as written."""
        names = list(dict.fromkeys(target_names))
        matches = await self.index.lookup_many(names)
        return {
            name: classify(name, matches.get(normalize_name(name), []))
            for name in names
        }

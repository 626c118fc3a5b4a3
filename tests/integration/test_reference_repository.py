# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import ContentRef
from harbour.models.content import Company, ContentType
from harbour.models.reference import Reference
from harbour.repositories.base import BaseRepository
from harbour.repositories.reference_repository import Edge, ReferenceRepository
from tests.conftest import make_company

EVENT = ContentRef(ContentType.EVENT, 1)
OTHER_EVENT = ContentRef(ContentType.EVENT, 2)
ACME = ContentRef(ContentType.COMPANY, 7)
PYTHON_NL = ContentRef(ContentType.GROUP, 3)


class TestReplaceForSource:
    async def test_insert_and_list(self, db_session: AsyncSession) -> None:
        repo = ReferenceRepository(db_session)
        rows = await repo.replace_for_source(
            EVENT,
            [
                Edge(EVENT, ACME, None, "Acme"),
                Edge(EVENT, PYTHON_NL, "Organizer", "Python NL"),
            ],
        )
        assert len(rows) == 2
        assert rows[0].created_at is not None

        outgoing = await repo.list_outgoing(EVENT)
        assert [(r.target_type, r.target_id, r.relation) for r in outgoing] == [
            ("company", 7, None),
            ("group", 3, "Organizer"),
        ]
        incoming = await repo.list_incoming(ACME)
        assert [(r.source_type, r.source_id) for r in incoming] == [("event", 1)]

    async def test_replace_drops_previous_rows(self, db_session: AsyncSession) -> None:
        repo = ReferenceRepository(db_session)
        await repo.replace_for_source(EVENT, [Edge(EVENT, ACME, None, "Acme")])
        await repo.replace_for_source(EVENT, [Edge(EVENT, PYTHON_NL, None, "Python NL")])
        assert await repo.list_incoming(ACME) == []
        assert len(await repo.list_incoming(PYTHON_NL)) == 1
        assert await repo.count_all() == 1

    async def test_duplicates_and_self_edges_dropped(self, db_session: AsyncSession) -> None:
        repo = ReferenceRepository(db_session)
        rows = await repo.replace_for_source(
            EVENT,
            [
                Edge(EVENT, ACME, None, "Acme"),
                Edge(EVENT, ACME, None, "acme"),
                Edge(EVENT, ACME, "Sponsor", "Acme"),
                Edge(EVENT, EVENT, None, "Demo Day"),
            ],
        )
        assert [(r.target_id, r.relation) for r in rows] == [(7, None), (7, "Sponsor")]

    async def test_sources_are_independent(self, db_session: AsyncSession) -> None:
        repo = ReferenceRepository(db_session)
        await repo.replace_for_source(EVENT, [Edge(EVENT, ACME, None, "Acme")])
        await repo.replace_for_source(OTHER_EVENT, [Edge(OTHER_EVENT, ACME, None, "Acme")])
        await repo.replace_for_source(EVENT, [])
        incoming = await repo.list_incoming(ACME)
        assert [(r.source_type, r.source_id) for r in incoming] == [("event", 2)]


class TestDeleteForSource:
    async def test_returns_removed_count(self, db_session: AsyncSession) -> None:
        repo = ReferenceRepository(db_session)
        await repo.replace_for_source(
            EVENT,
            [Edge(EVENT, ACME, None, "Acme"), Edge(EVENT, PYTHON_NL, None, "Python NL")],
        )
        assert await repo.delete_for_source(EVENT) == 2
        assert await repo.delete_for_source(EVENT) == 0
        assert await repo.count_all() == 0


class TestSelfReferenceConstraint:
    async def test_database_rejects_self_reference(self, db_session: AsyncSession) -> None:
        db_session.add(
            Reference(
                source_type="company",
                source_id=7,
                target_type="company",
                target_id=7,
                reference_text="Acme",
            )
        )
        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestBaseRepository:
    async def test_get_by_id(self, db_session: AsyncSession) -> None:
        company = Company(**make_company(name="Acme"))
        db_session.add(company)
        await db_session.flush()

        repo = BaseRepository(db_session, Company)
        assert await repo.get_by_id(company.id) is company
        assert await repo.get_by_id(company.id + 100) is None

    async def test_count_all(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [Company(**make_company(name="Acme")), Company(**make_company(name="Globex"))]
        )
        await db_session.flush()
        assert await BaseRepository(db_session, Company).count_all() == 2
        assert await ReferenceRepository(db_session).count_all() == 0

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.content_types import ContentRef
from harbour.models.content import Company, ContentType
from harbour.models.reference import Reference
from harbour.references.resolver import Resolver
from harbour.repositories.base import BaseRepository
from harbour.repositories.name_index import NameIndex
from harbour.repositories.reference_repository import Edge, ReferenceRepository
from harbour.services.indexer import ReferenceIndexer


class TestBaseRepositoryInstantiation:
    def test_base_repository_stores_session_and_model(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        repo = BaseRepository(mock_session, Company)
        assert repo.session is mock_session
        assert repo.model is Company


class TestReferenceRepositoryInstantiation:
    def test_reference_repository_sets_model(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        repo = ReferenceRepository(mock_session)
        assert repo.model is Reference

    async def test_replace_rejects_foreign_edges(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        repo = ReferenceRepository(mock_session)
        repo.delete_for_source = _async_return(0)  # type: ignore[method-assign]
        source = ContentRef(ContentType.EVENT, 1)
        other = ContentRef(ContentType.EVENT, 2)
        edge = Edge(other, ContentRef(ContentType.COMPANY, 7), None, "Acme")
        with pytest.raises(ValueError):
            await repo.replace_for_source(source, [edge])


class TestServicesShareSession:
    def test_indexer_wires_session(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        indexer = ReferenceIndexer(mock_session)
        assert indexer.session is mock_session
        assert indexer.references.session is mock_session
        assert isinstance(indexer.resolver, Resolver)
        assert isinstance(indexer.resolver.index, NameIndex)
        assert indexer.resolver.index.session is mock_session


def _async_return(value: object):  # type: ignore[no-untyped-def]
    async def _inner(*args: object, **kwargs: object) -> object:
        return value

    return _inner

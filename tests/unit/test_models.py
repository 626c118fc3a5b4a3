# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

from harbour.models.base import Base, IntegerIDMixin, TimestampMixin
from harbour.models.content import Company, ContentType, Event, Person, normalize_name
from harbour.models.reference import Reference


class TestContentTypeEnum:
    def test_values(self) -> None:
        assert [t.value for t in ContentType] == [
            "event",
            "news",
            "job",
            "company",
            "project",
            "group",
            "person",
            "education",
            "product",
        ]

    def test_is_str(self) -> None:
        assert ContentType("company") == "company"


class TestContentDefaults:
    def test_event_defaults(self) -> None:
        event = Event(slug="demo-day", title="Demo Day")
        assert event.organizer is None
        assert event.location is None
        description_col = Event.__table__.c["description"]
        assert description_col.default is not None
        assert description_col.default.arg == ""

    def test_visible_defaults_true(self) -> None:
        for model in (Company, Person):
            visible_col = model.__table__.c["visible"]
            assert visible_col.default is not None
            assert visible_col.default.arg is True
            assert visible_col.server_default is not None

    def test_display_name_index_declared(self) -> None:
        index_names = {ix.name for ix in Company.__table__.indexes}
        assert "ix_companies_name_key" in index_names

    def test_name_field_per_model(self) -> None:
        assert Event.name_field == "title"
        assert Company.name_field == "name"
        assert Company.__table__.c["name_key"].nullable is False


class TestNormalizeName:
    def test_trims_and_lowercases(self) -> None:
        assert normalize_name("  Acme Corp ") == "acme corp"

    def test_inner_whitespace_kept(self) -> None:
        assert normalize_name("Acme  Corp") == "acme  corp"

    def test_folds_non_ascii(self) -> None:
        assert normalize_name("École Polytechnique") == "école polytechnique"


class TestReferenceModel:
    def test_columns(self) -> None:
        reference = Reference(
            source_type="event",
            source_id=1,
            target_type="company",
            target_id=7,
            relation=None,
            reference_text="Acme",
        )
        assert reference.source_type == "event"
        assert reference.target_id == 7
        assert reference.relation is None
        assert Reference.__table__.c["relation"].nullable is True
        assert Reference.__table__.c["reference_text"].nullable is False

    def test_indexes_and_self_reference_check(self) -> None:
        index_names = {ix.name for ix in Reference.__table__.indexes}
        assert {"idx_references_source", "idx_references_target"} <= index_names
        constraint_names = {c.name for c in Reference.__table__.constraints}
        assert "ck_references_no_self_reference" in constraint_names

    def test_table_name(self) -> None:
        assert Reference.__tablename__ == "references"


class TestMixins:
    def test_content_models_use_mixins(self) -> None:
        for model in (Event, Company, Person):
            assert issubclass(model, Base)
            assert issubclass(model, IntegerIDMixin)
            assert issubclass(model, TimestampMixin)

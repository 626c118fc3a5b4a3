# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from harbour.models.base import Base, IntegerIDMixin
from harbour.models.content import ContentType


class Reference(IntegerIDMixin, Base):
    """A [[reference]] from one entity's text body to another entity.

    Rows are derived state: the indexer deletes and re-inserts a source's
    rows on every save of that source.
    """

    __tablename__ = "references"

    source_type: Mapped[ContentType] = mapped_column(String, nullable=False)
    source_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_type: Mapped[ContentType] = mapped_column(String, nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # e.g. "CEO", "Founder", "Organizer"; from [[{CEO} at {Acme}]]
    relation: Mapped[str | None] = mapped_column(String, default=None)
    # The name as written in the source body
    reference_text: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "NOT (source_type = target_type AND source_id = target_id)",
            name="ck_references_no_self_reference",
        ),
        Index("idx_references_source", "source_type", "source_id"),
        Index("idx_references_target", "target_type", "target_id"),
    )

    __mapper_args__ = {"eager_defaults": True}

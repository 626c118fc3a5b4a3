# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Initial schema: content tables and the references table.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

_NAMED_TABLES = (
    "events",
    "news",
    "jobs",
    "companies",
    "projects",
    "groups",
    "people",
    "education",
    "products",
)


def _id() -> sa.Column:  # type: ignore[type-arg]
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _name_key() -> sa.Column:  # type: ignore[type-arg]
    # Normalised display name, written by the ORM on insert and update
    return sa.Column("name_key", sa.String(), nullable=False, server_default="")


def _visible() -> sa.Column:  # type: ignore[type-arg]
    return sa.Column("visible", sa.Boolean(), nullable=False, server_default=sa.true())


def upgrade() -> None:
    # ------------------------------------------------------------------
    # 1. events and their dates
    # ------------------------------------------------------------------
    op.create_table(
        "events",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("title", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("link", sa.String(), nullable=False),
        sa.Column("organizer", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        sa.Column("icon_image", sa.String(), nullable=True),
        sa.Column("requires_signup", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("recurrence_rule", sa.String(), nullable=True),
        sa.Column("recurrence_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("default_start_time", sa.String(), nullable=True),
        sa.Column("default_end_time", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "event_dates",
        _id(),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
    )

    # ------------------------------------------------------------------
    # 2. news and jobs
    # ------------------------------------------------------------------
    op.create_table(
        "news",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("title", sa.String(), nullable=False),
        _name_key(),
        sa.Column("type", sa.String(), nullable=False, server_default="announcement"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "jobs",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("title", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("company_name", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("workplace_type", sa.String(), nullable=True),
        sa.Column("salary_range", sa.String(), nullable=True),
        sa.Column("apply_link", sa.String(), nullable=False),
        sa.Column(
            "posted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # ------------------------------------------------------------------
    # 3. directory entries
    # ------------------------------------------------------------------
    op.create_table(
        "companies",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("founded", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        _visible(),
        *_timestamps(),
    )
    op.create_table(
        "projects",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False, server_default="other"),
        sa.Column("status", sa.String(), nullable=False, server_default="active"),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "groups",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("meeting_frequency", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        _visible(),
        *_timestamps(),
    )
    op.create_table(
        "people",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("avatar", sa.String(), nullable=True),
        _visible(),
        *_timestamps(),
    )
    op.create_table(
        "education",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("type", sa.String(), nullable=False, server_default="other"),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        _visible(),
        *_timestamps(),
    )
    op.create_table(
        "products",
        _id(),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        _name_key(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("cover_image", sa.String(), nullable=True),
        *_timestamps(),
    )

    for table in _NAMED_TABLES:
        op.create_index(f"ix_{table}_name_key", table, ["name_key"])

    # ------------------------------------------------------------------
    # 4. references
    # ------------------------------------------------------------------
    op.create_table(
        "references",
        _id(),
        sa.Column("source_type", sa.String(), nullable=False),
        sa.Column("source_id", sa.Integer(), nullable=False),
        sa.Column("target_type", sa.String(), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("relation", sa.String(), nullable=True),
        sa.Column("reference_text", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "NOT (source_type = target_type AND source_id = target_id)",
            name="ck_references_no_self_reference",
        ),
    )
    op.create_index("idx_references_source", "references", ["source_type", "source_id"])
    op.create_index("idx_references_target", "references", ["target_type", "target_id"])


def downgrade() -> None:
    op.drop_table("references")
    op.drop_table("products")
    op.drop_table("education")
    op.drop_table("people")
    op.drop_table("groups")
    op.drop_table("projects")
    op.drop_table("companies")
    op.drop_table("jobs")
    op.drop_table("news")
    op.drop_table("event_dates")
    op.drop_table("events")

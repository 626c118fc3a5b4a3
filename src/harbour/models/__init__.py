# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from harbour.models.base import Base, IntegerIDMixin, TimestampMixin
from harbour.models.content import (
    Company,
    ContentType,
    Education,
    Event,
    EventDate,
    Group,
    Job,
    NameKeyMixin,
    News,
    Person,
    Product,
    Project,
    normalize_name,
)
from harbour.models.reference import Reference

__all__ = [
    "Base",
    "Company",
    "ContentType",
    "Education",
    "Event",
    "EventDate",
    "Group",
    "IntegerIDMixin",
    "Job",
    "NameKeyMixin",
    "News",
    "Person",
    "Product",
    "Project",
    "Reference",
    "TimestampMixin",
    "normalize_name",
]

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from harbour.repositories.base import BaseRepository
from harbour.repositories.name_index import NameIndex, NamedEntity
from harbour.repositories.reference_repository import Edge, ReferenceRepository

__all__ = [
    "BaseRepository",
    "Edge",
    "NameIndex",
    "NamedEntity",
    "ReferenceRepository",
]

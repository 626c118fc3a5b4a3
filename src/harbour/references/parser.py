# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Extracts ``[[reference]]`` tokens from markdown bodies.

Grammar::

    token      = "[[" inner "]]"
    inner      = relational | name
    relational = "{" relation "}" ws+ "at" ws+ "{" name "}"

``at`` is matched case-insensitively. Anything inside the brackets that is
not a well-formed relational form, braces included, is taken as a plain
target name. Scanning never fails.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

REFERENCE_PATTERN = re.compile(r"\[\[(.+?)\]\]", re.DOTALL)
RELATION_PATTERN = re.compile(r"^\{([^}]+)\}\s+at\s+\{([^}]+)\}$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ReferenceToken:
    raw_text: str  # the full "[[...]]" occurrence
    target_name: str
    relation: str | None = None

    @property
    def is_relational(self) -> bool:
        return self.relation is not None


def parse_token(raw_text: str, inner: str) -> ReferenceToken | None:
    """Interpret the text between ``[[`` and ``]]``; None if it is blank."""
    inner = inner.strip()
    if not inner:
        return None
    match = RELATION_PATTERN.match(inner)
    if match is not None:
        relation = match.group(1).strip()
        target_name = match.group(2).strip()
        if relation and target_name:
            return ReferenceToken(raw_text, target_name, relation)
    return ReferenceToken(raw_text, inner)


def scan(body: str | None) -> list[ReferenceToken]:
    """Return the body's tokens in order of appearance, duplicates included."""
    if not body:
        return []
    tokens = []
    for match in REFERENCE_PATTERN.finditer(body):
        token = parse_token(match.group(0), match.group(1))
        if token is not None:
            tokens.append(token)
    return tokens


def scan_many(bodies: Iterable[str | None]) -> list[ReferenceToken]:
    """Scan several text fields of one entity as if they were one body."""
    tokens: list[ReferenceToken] = []
    for body in bodies:
        tokens.extend(scan(body))
    return tokens


def split_names(text: str | None) -> list[str]:
    """Split a comma-separated name list such as an event's organizer field."""
    if not text:
        return []
    return [name.strip() for name in text.split(",") if name.strip()]


def relation_by_name(tokens: Iterable[ReferenceToken]) -> dict[str, str | None]:
    """Map each distinct target name to the relation label it carries.

    The first relation seen for a name wins. A name first written as a plain
    token picks up the relation of a later relational occurrence.
    """
    relations: dict[str, str | None] = {}
    for token in tokens:
        if relations.get(token.target_name) is None:
            relations[token.target_name] = token.relation
    return relations

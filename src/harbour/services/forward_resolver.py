# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Read-time resolution of [[references]] for rendering.

Nothing here writes to the database. A page whose body mentions an unknown,
ambiguous or hidden entity still renders; the mention becomes bold text
instead of a link.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from harbour.config import get_settings
from harbour.content_types import content_url
from harbour.references.parser import (
    REFERENCE_PATTERN,
    parse_token,
    relation_by_name,
    scan,
    split_names,
)
from harbour.references.resolver import Resolved, Resolver
from harbour.repositories.name_index import NamedEntity
from harbour.schemas.reference import OrganizerLink, ResolvedRef

logger = logging.getLogger(__name__)


def _is_linkable(entity: NamedEntity) -> bool:
    return entity.visible or not get_settings().hide_invisible_references


async def resolve_for_client(
    session: AsyncSession, body: str | None
) -> dict[str, ResolvedRef]:
    """Map each resolvable target name in ``body`` to its link data."""
    tokens = scan(body)
    if not tokens:
        return {}
    relations = relation_by_name(tokens)

    try:
        resolutions = await Resolver(session).resolve_many(relations)
    except SQLAlchemyError:
        logger.warning("Could not resolve references for rendering", exc_info=True)
        return {}

    refs: dict[str, ResolvedRef] = {}
    for name, resolution in resolutions.items():
        if not isinstance(resolution, Resolved) or not _is_linkable(resolution.entity):
            continue
        entity = resolution.entity
        refs[name] = ResolvedRef(
            text=name,
            type=entity.ref.type,
            slug=entity.slug,
            name=entity.name,
            relation=relations[name],
        )
    return refs


def _escape_link_text(text: str) -> str:
    return re.sub(r"([\[\]])", r"\\\1", text)


def render_references(body: str | None, refs: dict[str, ResolvedRef]) -> str:
    """Rewrite [[references]] in ``body`` into plain markdown.

    ``[[Acme]]`` becomes ``[Acme](/directory/companies/acme)`` and
    ``[[{CEO} at {Acme}]]`` becomes ``CEO at [Acme](/directory/companies/acme)``
    when ``Acme`` is in ``refs``. Otherwise the target name is emphasised
    instead of linked: ``**Acme**`` and ``CEO at **Acme**``. Only the target
    is emphasised, so the label reads the same whether or not the target
    resolves; the braces of the written token are never shown. The relation
    label comes from each token, not from ``refs``.
    """
    if not body:
        return ""

    def _replace(match: re.Match[str]) -> str:
        token = parse_token(match.group(0), match.group(1))
        if token is None:
            return match.group(0)
        ref = refs.get(token.target_name)
        if ref is None:
            link = f"**{token.target_name}**"
        else:
            link = f"[{_escape_link_text(ref.name)}]({content_url(ref.type, ref.slug)})"
        if token.relation is not None:
            return f"{token.relation} at {link}"
        return link

    return REFERENCE_PATTERN.sub(_replace, body)


async def resolve_organizers(
    session: AsyncSession, organizer: str | None
) -> list[OrganizerLink]:
    """Resolve an event's comma-separated organizer names for display."""
    names = split_names(organizer)
    if not names:
        return []

    try:
        resolutions = await Resolver(session).resolve_many(names)
    except SQLAlchemyError:
        logger.warning("Could not resolve organizers %r", organizer, exc_info=True)
        return [OrganizerLink(text=name, resolved=False) for name in names]

    links = []
    for name in names:
        resolution = resolutions[name]
        if isinstance(resolution, Resolved) and _is_linkable(resolution.entity):
            entity = resolution.entity
            links.append(
                OrganizerLink(
                    text=name,
                    resolved=True,
                    url=content_url(entity.ref.type, entity.slug),
                    name=entity.name,
                )
            )
        else:
            links.append(OrganizerLink(text=name, resolved=False))
    return links

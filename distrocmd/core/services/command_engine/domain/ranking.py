"""
L1 Domain — Total ordering of the sources usable on a distribution.

Order: DistroSource.priority desc, Source.priority desc, default
link before non-default, source slug asc. The slug is unique, so two
different sources never compare equal and output is reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable

from distrocmd.core.models.catalog import DistroSource, Source


def rank_key(source: Source, link: DistroSource) -> tuple[int, int, int, str]:
    """Sort key for a (source, distro link) pair; smaller sorts first."""
    return (
        -link.priority,
        -source.priority,
        0 if link.is_default else 1,
        source.slug,
    )


def rank_sources(
    sources: Iterable[Source],
    links: dict[str, DistroSource],
) -> list[Source]:
    """Return the sources ordered best-first.

    Sources without a link in ``links`` are dropped: a source is only
    usable on a distro it is linked to.
    """
    usable = [s for s in sources if s.id in links]
    return sorted(usable, key=lambda s: rank_key(s, links[s.id]))

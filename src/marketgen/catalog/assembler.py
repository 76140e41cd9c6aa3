"""Catalog assembly: previous header + freshly normalized entries."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from ..errors import DuplicateNameError
from ..plugins.models import CatalogEntry
from .models import PLUGINS_KEY, Catalog


def assemble_catalog(header: Dict[str, Any], entries: Iterable[CatalogEntry]) -> Catalog:
    """Combine catalog metadata with plugin entries sorted by name.

    The entry list is always rebuilt from scratch; nothing from a previous
    ``plugins`` array survives. Two entries sharing a name raise
    DuplicateNameError naming both sources.
    """
    seen: Dict[str, CatalogEntry] = {}
    for entry in entries:
        first = seen.get(entry.name)
        if first is not None:
            a, b = sorted((first.source, entry.source))
            raise DuplicateNameError(entry.name, a, b)
        seen[entry.name] = entry

    # str ordering is code point ordering, identical to byte order for ASCII names
    ordered = [seen[name] for name in sorted(seen)]

    clean_header = {k: v for k, v in header.items() if k != PLUGINS_KEY}
    return Catalog(header=clean_header, entries=ordered)

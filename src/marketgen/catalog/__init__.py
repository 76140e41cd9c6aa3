"""Catalog Module for marketgen.

Builds the marketplace catalog (.claude-plugin/marketplace.json):
- Catalog model and loading of the persisted document
- Assembly of header + sorted plugin entries
- Change detection and patch version bumps
- Atomic writes
- The generate pipeline tying these together
"""

from .models import Catalog, load_catalog
from .assembler import assemble_catalog
from .version import bump_patch, content_digest, parse_version, plan_version, VersionPlan
from .writer import atomic_write
from .sync import SyncResult, generate_catalog, get_catalog_status, list_entries

__all__ = [
    "Catalog",
    "load_catalog",
    "assemble_catalog",
    "bump_patch",
    "content_digest",
    "parse_version",
    "plan_version",
    "VersionPlan",
    "atomic_write",
    "SyncResult",
    "generate_catalog",
    "get_catalog_status",
    "list_entries",
]

"""Catalog Sync Engine for marketgen.

Regenerates marketplace.json from the plugin manifests found in the
repository:

    load previous catalog -> discover -> normalize -> assemble
    -> plan version -> atomic write

Every fatal condition is raised before the write, so an aborted run leaves
the catalog file untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from ..config import Settings
from ..plugins.discovery import discover_manifests
from ..plugins.loader import NormalizeResult, normalize_all
from ..plugins.models import CatalogEntry
from .assembler import assemble_catalog
from .models import load_catalog
from .version import plan_version
from .writer import atomic_write

# on_event(level, message); level is one of "info", "warning", "success"
EventCallback = Callable[[str, str], None]


def _noop(level: str, message: str) -> None:
    pass


@dataclass
class SyncResult:
    """Outcome of one catalog generation."""
    catalog_path: Path
    changed: bool
    written: bool
    old_version: Optional[Any] = None
    new_version: Optional[Any] = None
    manifest_count: int = 0
    plugin_names: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "catalog_path": str(self.catalog_path),
            "changed": self.changed,
            "written": self.written,
            "old_version": self.old_version,
            "new_version": self.new_version,
            "manifest_count": self.manifest_count,
            "plugin_names": self.plugin_names,
            "warnings": self.warnings,
        }


def _collect_entries(
    settings: Settings,
    workers: int,
    on_event: EventCallback,
) -> Tuple[List[Path], NormalizeResult]:
    paths = discover_manifests(settings)
    on_event("success", f"Found {len(paths)} plugin(s)")
    for path in paths:
        on_event("info", f"Processing: {path}")

    normalized = normalize_all(paths, settings, workers=workers)
    for warning in normalized.warnings:
        on_event("warning", str(warning))
    for entry in normalized.entries:
        on_event("success", f"Added: {entry.name}")

    return paths, normalized


def generate_catalog(
    settings: Settings,
    *,
    dry_run: bool = False,
    workers: int = 1,
    on_event: Optional[EventCallback] = None,
) -> SyncResult:
    """Regenerate the catalog from the current plugin manifests.

    Returns a SyncResult. ``written`` is False when nothing changed or when
    ``dry_run`` is set.
    """
    emit = on_event or _noop
    catalog_file = settings.catalog_file()

    previous_bytes, previous = load_catalog(catalog_file)
    emit("info", "Generating marketplace.json from discovered plugins...")

    paths, normalized = _collect_entries(settings, workers, emit)

    catalog = assemble_catalog(previous.header, normalized.entries)
    plan = plan_version(previous_bytes, catalog, indent=settings.indent)

    result = SyncResult(
        catalog_path=catalog_file,
        changed=plan.changed,
        written=False,
        old_version=plan.old_version,
        new_version=plan.new_version,
        manifest_count=len(paths),
        plugin_names=[e.name for e in catalog.entries],
        warnings=[str(w) for w in normalized.warnings],
    )

    if not plan.changed:
        emit("success", "No changes, catalog is up to date")
        return result

    emit("warning", "Content changed, incrementing patch version...")
    emit("success", f"Version: {plan.old_version or '1.0.0'} -> {plan.new_version}")

    if dry_run:
        return result

    atomic_write(catalog_file, plan.payload)
    result.written = True
    emit("success", f"Successfully updated {catalog_file}")
    emit("success", f"Total plugins: {len(catalog.entries)}")
    return result


def list_entries(settings: Settings, workers: int = 1) -> NormalizeResult:
    """Discover and normalize manifests without touching the catalog."""
    paths = discover_manifests(settings)
    return normalize_all(paths, settings, workers=workers)


def get_catalog_status(settings: Settings) -> dict:
    """Summary of the catalog currently on disk."""
    _, catalog = load_catalog(settings.catalog_file())
    return {
        "path": str(settings.catalog_file()),
        "name": catalog.name,
        "version": catalog.version,
        "plugin_count": len(catalog.entries),
        "plugin_names": [e.name for e in catalog.entries],
    }


def sorted_entries(entries: List[CatalogEntry]) -> List[CatalogEntry]:
    return sorted(entries, key=lambda e: e.name)

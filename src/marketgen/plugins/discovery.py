"""Plugin manifest discovery.

Finds every ``<dir>/.claude-plugin/plugin.json`` below the repository root.
The catalog lives in a ``.claude-plugin`` directory too, so its own file is
excluded explicitly rather than by relying on its different file name.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..config import Settings
from ..errors import NoManifestsFoundError, RepositoryRootError


def _check_root(root: Path) -> None:
    if not root.is_dir() or not os.access(root, os.R_OK | os.X_OK):
        raise RepositoryRootError(root)


def discover_manifests(settings: Settings) -> List[Path]:
    """Return absolute paths of all plugin manifests under the repository root.

    Raises NoManifestsFoundError when nothing is found.
    """
    root = settings.repo_root.resolve()
    _check_root(root)

    catalog_file = settings.catalog_file()
    excluded = set(settings.exclude_dirs)
    found: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never descends into excluded directories
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)

        if Path(dirpath).name != settings.manifest_dir:
            continue
        if settings.manifest_name not in filenames:
            continue

        candidate = Path(dirpath) / settings.manifest_name
        if candidate.resolve() == catalog_file:
            continue
        found.append(candidate)

    if not found:
        raise NoManifestsFoundError(root)

    return sorted(found)


def plugin_dir_for(manifest_path: Path) -> Path:
    """Plugin directory owning a manifest: strip ``.claude-plugin/plugin.json``."""
    return manifest_path.parent.parent


def source_for(manifest_path: Path, settings: Settings) -> str:
    """Catalog ``source`` value for a manifest, e.g. ``./plugins/foo``."""
    plugin_dir = plugin_dir_for(manifest_path.resolve())
    relative = Path(os.path.relpath(plugin_dir, settings.repo_root.resolve())).as_posix()
    return f"./{relative}"

"""Manifest loading and normalization.

Turns discovered plugin.json files into CatalogEntry values. A manifest
that is not valid JSON aborts the run; a manifest without a usable name is
skipped with a warning.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

from ..config import Settings
from ..errors import FieldShapeWarning, ManifestParseError, MissingNameWarning, NameStyleWarning
from .discovery import source_for
from .models import CatalogEntry, PluginManifest, is_kebab_case


@dataclass
class NormalizeResult:
    """Entries and non-fatal warnings from a normalization pass."""
    entries: List[CatalogEntry] = field(default_factory=list)
    warnings: List[UserWarning] = field(default_factory=list)

    @property
    def skipped(self) -> List[MissingNameWarning]:
        return [w for w in self.warnings if isinstance(w, MissingNameWarning)]


def _reject_constant(token: str):
    # NaN, Infinity and -Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"invalid JSON constant {token}")


def load_manifest(path: Path) -> PluginManifest:
    """Parse one plugin.json file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestParseError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ManifestParseError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ManifestParseError(path, f"{e.msg} at line {e.lineno} column {e.colno}") from e
    except ValueError as e:
        raise ManifestParseError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ManifestParseError(path, "expected a JSON object at the top level")

    return PluginManifest.from_dict(data)


def normalize_manifest(
    path: Path,
    settings: Settings,
) -> Union[CatalogEntry, MissingNameWarning]:
    """Build the catalog entry for one manifest.

    Returns a MissingNameWarning instead of an entry when the manifest has
    no usable name. Parse failures raise ManifestParseError.
    """
    manifest = load_manifest(path)
    if not manifest.has_usable_name():
        return MissingNameWarning(path)
    return CatalogEntry.from_manifest(manifest, source_for(path, settings))


def normalize_all(
    paths: Sequence[Path],
    settings: Settings,
    workers: int = 1,
) -> NormalizeResult:
    """Normalize every manifest.

    With ``workers > 1`` manifests are parsed on a thread pool. Results are
    collected per input position, so the outcome does not depend on which
    thread finishes first.
    """
    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda p: normalize_manifest(p, settings), paths))
    else:
        outcomes = [normalize_manifest(p, settings) for p in paths]

    result = NormalizeResult()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, MissingNameWarning):
            result.warnings.append(outcome)
            continue
        if not is_kebab_case(outcome.name):
            result.warnings.append(NameStyleWarning(path, outcome.name))
        for key, shape in outcome.unexpected_shapes().items():
            result.warnings.append(FieldShapeWarning(path, key, shape.value))
        result.entries.append(outcome)

    return result

"""marketgen plugin manifests.

Reading side of the synthesizer:
- discovery  - find ``*/.claude-plugin/plugin.json`` under the repository
- loader     - parse manifests and normalize them into catalog entries
- models     - PluginManifest and CatalogEntry
"""

from .models import CatalogEntry, FieldShape, PluginManifest, classify_shape
from .discovery import discover_manifests, source_for
from .loader import NormalizeResult, load_manifest, normalize_all, normalize_manifest

__all__ = [
    "CatalogEntry",
    "FieldShape",
    "PluginManifest",
    "classify_shape",
    "discover_manifests",
    "source_for",
    "NormalizeResult",
    "load_manifest",
    "normalize_all",
    "normalize_manifest",
]

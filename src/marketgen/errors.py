"""Error types for marketgen.

Fatal conditions derive from MarketgenError and abort the run before the
catalog is written. Skippable conditions are UserWarning subclasses that are
collected into the sync result instead of being raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

PathLike = Union[str, Path]


class MarketgenError(Exception):
    """Base class for fatal marketgen errors."""


class ConfigError(MarketgenError):
    """Configuration file could not be read."""


class RepositoryRootError(MarketgenError):
    """Repository root is missing or not a readable directory."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f"Repository root is not a readable directory: {self.path}")


class CatalogReadError(MarketgenError):
    """The existing catalog could not be loaded."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read catalog {self.path}: {reason}")


class NoManifestsFoundError(MarketgenError):
    """No plugin manifests were discovered under the repository root."""

    def __init__(self, root: PathLike):
        self.root = Path(root)
        super().__init__(f"No plugin.json files found under {self.root}")


class ManifestParseError(MarketgenError):
    """A plugin manifest is not a valid JSON object."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid plugin manifest {self.path}: {reason}")


class DuplicateNameError(MarketgenError):
    """Two plugin directories declare the same plugin name."""

    def __init__(self, name: str, first_source: str, second_source: str):
        self.name = name
        self.first_source = first_source
        self.second_source = second_source
        super().__init__(
            f"Duplicate plugin name '{name}' declared by {first_source} and {second_source}"
        )


class VersionFormatError(MarketgenError):
    """Catalog version is not a usable major.minor.patch string."""

    def __init__(self, value: Any, reason: str = "expected major.minor.patch"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid catalog version {value!r}: {reason}")


class CatalogWriteError(MarketgenError):
    """Writing the catalog failed; the destination was left untouched."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


class MissingNameWarning(UserWarning):
    """Manifest has no usable name; the plugin is skipped."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f"Plugin at {self.path} has no name, skipping")


class NameStyleWarning(UserWarning):
    """Manifest name is not a kebab-case identifier; the plugin is kept."""

    def __init__(self, path: PathLike, name: str):
        self.path = Path(path)
        self.name = name
        super().__init__(f"Plugin name '{name}' at {self.path} is not kebab-case")


class FieldShapeWarning(UserWarning):
    """Manifest author or component field has an unexpected shape; it is kept as is."""

    def __init__(self, path: PathLike, field: str, shape: str):
        self.path = Path(path)
        self.field = field
        self.shape = shape
        super().__init__(f"Field '{field}' at {self.path} has unexpected shape ({shape})")

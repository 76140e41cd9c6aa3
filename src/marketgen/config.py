from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .errors import ConfigError

CONFIG_FILE = ".marketgen.json"

DEFAULT_CATALOG_PATH = ".claude-plugin/marketplace.json"
DEFAULT_MANIFEST_DIR = ".claude-plugin"
DEFAULT_MANIFEST_NAME = "plugin.json"


def _default_exclude_dirs() -> List[str]:
    return [".git", "node_modules"]


@dataclass
class Settings:
    """Resolved configuration for one marketgen run.

    Passed explicitly to every pipeline stage; only ``Settings.load`` looks
    at the environment.
    """
    repo_root: Path = field(default_factory=Path.cwd)
    catalog_path: str = DEFAULT_CATALOG_PATH
    manifest_dir: str = DEFAULT_MANIFEST_DIR
    manifest_name: str = DEFAULT_MANIFEST_NAME
    indent: int = 2
    exclude_dirs: List[str] = field(default_factory=_default_exclude_dirs)

    def __post_init__(self):
        self.repo_root = Path(self.repo_root)

    def catalog_file(self) -> Path:
        """Absolute path of the catalog document."""
        return (self.repo_root / self.catalog_path).resolve()

    def to_dict(self) -> dict:
        return {
            "repo_root": str(self.repo_root),
            "catalog_path": self.catalog_path,
            "manifest_dir": self.manifest_dir,
            "manifest_name": self.manifest_name,
            "indent": self.indent,
            "exclude_dirs": self.exclude_dirs,
        }

    @classmethod
    def from_dict(cls, data: dict, repo_root: Optional[Path] = None) -> "Settings":
        try:
            return cls(
                repo_root=Path(repo_root or data.get("repo_root") or Path.cwd()),
                catalog_path=str(data.get("catalog_path", DEFAULT_CATALOG_PATH)),
                manifest_dir=str(data.get("manifest_dir", DEFAULT_MANIFEST_DIR)),
                manifest_name=str(data.get("manifest_name", DEFAULT_MANIFEST_NAME)),
                indent=int(data.get("indent", 2)),
                exclude_dirs=[str(d) for d in data.get("exclude_dirs", _default_exclude_dirs())],
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e

    @staticmethod
    def load(
        repo_root: Optional[Path] = None,
        catalog_path: Optional[str] = None,
    ) -> "Settings":
        """Build settings from defaults, .marketgen.json, environment and overrides.

        Priority (lowest to highest):
          1. Dataclass defaults
          2. <repo_root>/.marketgen.json
          3. MARKETGEN_REPO_ROOT / MARKETGEN_CATALOG_PATH
          4. Explicit arguments (CLI flags)
        """
        env_root = os.environ.get("MARKETGEN_REPO_ROOT")
        root = Path(repo_root or env_root or Path.cwd()).resolve()

        data: dict = {}
        path = root / CONFIG_FILE
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise ConfigError(f"Cannot read {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Cannot read {path}: expected a JSON object")

        s = Settings.from_dict(data, repo_root=root)

        s.catalog_path = os.environ.get("MARKETGEN_CATALOG_PATH", s.catalog_path)
        if catalog_path:
            s.catalog_path = catalog_path

        return s

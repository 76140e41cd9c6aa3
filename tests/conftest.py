"""Shared fixtures: throwaway marketplace repositories on disk."""

import json
from pathlib import Path

import pytest

from marketgen.config import Settings


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


class RepoBuilder:
    """Builds a repository layout with a catalog and plugin manifests."""

    def __init__(self, root: Path):
        self.root = root

    @property
    def catalog_file(self) -> Path:
        return self.root / ".claude-plugin" / "marketplace.json"

    def catalog(self, **header) -> Path:
        data = {"name": "test-marketplace", "owner": {"name": "Test Owner"}}
        data.update(header)
        return write_json(self.catalog_file, data)

    def plugin(self, directory: str, manifest) -> Path:
        path = self.root / directory / ".claude-plugin" / "plugin.json"
        if isinstance(manifest, str):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(manifest, encoding="utf-8")
            return path
        return write_json(path, manifest)

    def settings(self, **overrides) -> Settings:
        return Settings(repo_root=self.root, **overrides)

    def read_catalog(self) -> dict:
        return json.loads(self.catalog_file.read_text(encoding="utf-8"))


@pytest.fixture
def repo(tmp_path):
    return RepoBuilder(tmp_path)

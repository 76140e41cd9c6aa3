"""Catalog document model.

The catalog is ``.claude-plugin/marketplace.json``: a header (name, owner,
version, ...) followed by the ``plugins`` array.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..errors import CatalogReadError
from ..plugins.models import CatalogEntry

PLUGINS_KEY = "plugins"


@dataclass
class Catalog:
    """Marketplace catalog: header metadata plus sorted plugin entries."""
    header: Dict[str, Any] = field(default_factory=dict)
    entries: List[CatalogEntry] = field(default_factory=list)

    @property
    def name(self) -> Optional[str]:
        return self.header.get("name")

    @property
    def version(self) -> Optional[Any]:
        return self.header.get("version")

    def with_version(self, version: str) -> "Catalog":
        """Copy of this catalog carrying a new header version."""
        header = dict(self.header)
        header["version"] = version
        return Catalog(header=header, entries=list(self.entries))

    def to_dict(self) -> dict:
        data = {k: v for k, v in self.header.items() if k != PLUGINS_KEY}
        data[PLUGINS_KEY] = [e.to_dict() for e in self.entries]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        header = {k: v for k, v in data.items() if k != PLUGINS_KEY}
        plugins = data.get(PLUGINS_KEY) or []
        entries = [
            CatalogEntry.from_dict(p) for p in plugins
            if isinstance(p, dict) and isinstance(p.get("name"), str)
        ]
        return cls(header=header, entries=entries)

    def serialize(self, indent: int = 2) -> bytes:
        """Deterministic UTF-8 rendering used for both writing and digests."""
        text = json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, allow_nan=False)
        return (text + "\n").encode("utf-8")


def _reject_constant(token: str):
    raise ValueError(f"invalid JSON constant {token}")


def load_catalog(path: Path) -> Tuple[bytes, Catalog]:
    """Read the persisted catalog, returning its raw bytes and parsed form."""
    path = Path(path)
    if not path.exists():
        raise CatalogReadError(path, "file does not exist")

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CatalogReadError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError as e:
        raise CatalogReadError(path, f"not valid UTF-8 ({e.reason})") from e
    except json.JSONDecodeError as e:
        raise CatalogReadError(path, f"{e.msg} at line {e.lineno} column {e.colno}") from e
    except ValueError as e:
        raise CatalogReadError(path, str(e)) from e

    if not isinstance(data, dict):
        raise CatalogReadError(path, "expected a JSON object at the top level")

    return raw, Catalog.from_dict(data)

"""Atomic catalog writes.

The new content goes to a temporary file next to the destination and is
then renamed over it, so readers see either the old or the new catalog.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from ..errors import CatalogWriteError


def atomic_write(path: Path, data: bytes) -> Path:
    """Replace ``path`` with ``data`` in a single rename."""
    path = Path(path)
    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        if path.exists():
            os.chmod(temp_path, stat.S_IMODE(path.stat().st_mode))

        os.replace(temp_path, path)
        temp_path = None
    except OSError as e:
        raise CatalogWriteError(path, e.strerror or str(e)) from e
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)

    return path

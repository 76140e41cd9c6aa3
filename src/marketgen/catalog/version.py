"""Change detection and catalog versioning.

The catalog version is bumped only when the regenerated document differs
from the one on disk. The comparison is done with the *old* version in
place, otherwise every run would look like a change.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..errors import VersionFormatError
from .models import Catalog

DEFAULT_VERSION = "1.0.0"
MAX_COMPONENT = 2**31 - 1

_VERSION_RE = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)\Z")


def _split_version(value: Any) -> Tuple[str, str, str]:
    if value is None:
        value = DEFAULT_VERSION
    if not isinstance(value, str):
        raise VersionFormatError(value, "expected a string")

    match = _VERSION_RE.match(value)
    if not match:
        raise VersionFormatError(value)
    return match.group(1), match.group(2), match.group(3)


def parse_version(value: Any) -> Tuple[int, int, int]:
    """Parse ``major.minor.patch``. A missing version counts as 1.0.0."""
    parts = tuple(int(p) for p in _split_version(value))
    if any(p > MAX_COMPONENT for p in parts):
        raise VersionFormatError(value, f"component exceeds {MAX_COMPONENT}")
    return parts  # type: ignore[return-value]


def bump_patch(value: Any) -> str:
    """Increment the patch component, keeping major and minor exactly as written."""
    patch = parse_version(value)[2]
    if patch >= MAX_COMPONENT:
        raise VersionFormatError(value, "patch component would overflow")
    major, minor, _ = _split_version(value)
    return f"{major}.{minor}.{patch + 1}"


def content_digest(data: bytes) -> str:
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


@dataclass
class VersionPlan:
    """Outcome of comparing a regenerated catalog against the persisted one."""
    changed: bool
    old_version: Optional[Any]
    new_version: Optional[Any]
    payload: bytes
    catalog: Catalog


def plan_version(previous: bytes, catalog: Catalog, indent: int = 2) -> VersionPlan:
    """Decide whether ``catalog`` is a change and produce the bytes to persist.

    ``catalog`` must still carry the previous version in its header.
    """
    old_version = catalog.version
    payload = catalog.serialize(indent)

    if content_digest(payload) == content_digest(previous):
        return VersionPlan(
            changed=False,
            old_version=old_version,
            new_version=old_version,
            payload=payload,
            catalog=catalog,
        )

    new_version = bump_patch(old_version)
    bumped = catalog.with_version(new_version)
    return VersionPlan(
        changed=True,
        old_version=old_version,
        new_version=new_version,
        payload=bumped.serialize(indent),
        catalog=bumped,
    )

"""Plugin manifest and catalog entry models.

A PluginManifest is the typed projection of one ``.claude-plugin/plugin.json``
as written by a plugin author. A CatalogEntry is what ends up in the
marketplace catalog for that plugin.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# author is either "Jane Doe" or {"name": ..., "email": ..., "url": ...}
AuthorField = Union[str, Dict[str, Any]]
# commands/agents/hooks/mcpServers/skills: path string, inline object or list
ComponentRef = Union[str, Dict[str, Any], List[Any]]

KEBAB_CASE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

COMPONENT_FIELDS = ("commands", "agents", "hooks", "mcpServers", "skills")

# Key order of a serialized catalog entry
ENTRY_FIELDS = (
    "name",
    "source",
    "version",
    "description",
    "author",
    "license",
    "homepage",
    "repository",
    "keywords",
    "commands",
    "agents",
    "hooks",
    "mcpServers",
    "skills",
)


class FieldShape(str, Enum):
    """Shape of a loosely-typed manifest value."""
    STRING = "string"
    OBJECT = "object"
    LIST = "list"
    OTHER = "other"


def classify_shape(value: Any) -> FieldShape:
    if isinstance(value, str):
        return FieldShape.STRING
    if isinstance(value, dict):
        return FieldShape.OBJECT
    if isinstance(value, list):
        return FieldShape.LIST
    return FieldShape.OTHER


def is_empty(value: Any) -> bool:
    """True for values that must not appear in a catalog entry."""
    if value is None:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def is_kebab_case(name: str) -> bool:
    return bool(KEBAB_CASE.match(name))


AUTHOR_SHAPES = (FieldShape.STRING, FieldShape.OBJECT)
COMPONENT_SHAPES = (FieldShape.STRING, FieldShape.OBJECT, FieldShape.LIST)


@dataclass
class PluginManifest:
    """Metadata declared by a plugin author in plugin.json."""
    name: Optional[Any] = None
    version: Optional[Any] = None
    description: Optional[Any] = None
    author: Optional[AuthorField] = None
    license: Optional[Any] = None
    homepage: Optional[Any] = None
    repository: Optional[Any] = None
    keywords: List[Any] = field(default_factory=list)

    # Component references, passed through unchanged
    commands: Optional[ComponentRef] = None
    agents: Optional[ComponentRef] = None
    hooks: Optional[ComponentRef] = None
    mcpServers: Optional[ComponentRef] = None
    skills: Optional[ComponentRef] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PluginManifest":
        """Project a raw manifest mapping. Unknown keys are ignored."""
        keywords = data.get("keywords")
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            description=data.get("description"),
            author=data.get("author"),
            license=data.get("license"),
            homepage=data.get("homepage"),
            repository=data.get("repository"),
            keywords=keywords if keywords is not None else [],
            commands=data.get("commands"),
            agents=data.get("agents"),
            hooks=data.get("hooks"),
            mcpServers=data.get("mcpServers"),
            skills=data.get("skills"),
        )

    def has_usable_name(self) -> bool:
        return isinstance(self.name, str) and self.name != ""


@dataclass
class CatalogEntry:
    """A plugin as listed in the marketplace catalog."""
    name: str
    source: str                                  # "./<plugin dir>", never from manifest content
    version: Optional[Any] = None
    description: Optional[Any] = None
    author: Optional[AuthorField] = None
    license: Optional[Any] = None
    homepage: Optional[Any] = None
    repository: Optional[Any] = None
    keywords: List[Any] = field(default_factory=list)
    commands: Optional[ComponentRef] = None
    agents: Optional[ComponentRef] = None
    hooks: Optional[ComponentRef] = None
    mcpServers: Optional[ComponentRef] = None
    skills: Optional[ComponentRef] = None

    @classmethod
    def from_manifest(cls, manifest: PluginManifest, source: str) -> "CatalogEntry":
        return cls(
            name=manifest.name,
            source=source,
            version=manifest.version,
            description=manifest.description,
            author=manifest.author,
            license=manifest.license,
            homepage=manifest.homepage,
            repository=manifest.repository,
            keywords=list(manifest.keywords) if isinstance(manifest.keywords, list) else manifest.keywords,
            commands=manifest.commands,
            agents=manifest.agents,
            hooks=manifest.hooks,
            mcpServers=manifest.mcpServers,
            skills=manifest.skills,
        )

    def to_dict(self) -> dict:
        """Serialize for marketplace.json, leaving out empty optional fields."""
        data: Dict[str, Any] = {"name": self.name, "source": self.source}
        for key in ENTRY_FIELDS[2:]:
            value = getattr(self, key)
            if not is_empty(value):
                data[key] = value
        return data

    def unexpected_shapes(self) -> Dict[str, FieldShape]:
        """Present author/component fields whose shape is none of the known variants.

        The values are still passed through; callers only report them.
        """
        found: Dict[str, FieldShape] = {}
        if not is_empty(self.author):
            shape = classify_shape(self.author)
            if shape not in AUTHOR_SHAPES:
                found["author"] = shape
        for key in COMPONENT_FIELDS:
            value = getattr(self, key)
            if is_empty(value):
                continue
            shape = classify_shape(value)
            if shape not in COMPONENT_SHAPES:
                found[key] = shape
        return found

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        return cls(
            name=data["name"],
            source=data.get("source", ""),
            version=data.get("version"),
            description=data.get("description"),
            author=data.get("author"),
            license=data.get("license"),
            homepage=data.get("homepage"),
            repository=data.get("repository"),
            keywords=data.get("keywords", []),
            commands=data.get("commands"),
            agents=data.get("agents"),
            hooks=data.get("hooks"),
            mcpServers=data.get("mcpServers"),
            skills=data.get("skills"),
        )

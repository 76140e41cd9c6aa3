"""marketgen - plugin marketplace catalog generator.

Discovers ``.claude-plugin/plugin.json`` manifests in a repository and
regenerates the repository's ``.claude-plugin/marketplace.json``.
"""

__version__ = "0.1.0"

"""Manifest reader: load package.json into an immutable snapshot."""

from dependency_cli.engines.manifest.models import ProjectManifest
from dependency_cli.engines.manifest.reader import MANIFEST_FILE, TOOL_CONFIG_KEY, load_manifest

__all__ = ["MANIFEST_FILE", "ProjectManifest", "TOOL_CONFIG_KEY", "load_manifest"]

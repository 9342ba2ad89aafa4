"""Read and validate package.json."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog

from dependency_cli.engines.manifest.models import ProjectManifest
from dependency_cli.exceptions import ManifestReadError

log = structlog.get_logger("dependency_cli.manifest")

MANIFEST_FILE = "package.json"

# Object in package.json holding per-project settings for this tool.
TOOL_CONFIG_KEY = "dependencyChecker"


def _keys(data: dict[str, Any], key: str) -> tuple[str, ...]:
    section = data.get(key)
    if not isinstance(section, dict):
        return ()
    return tuple(section.keys())


def _protected(tool_config: dict[str, Any]) -> frozenset[str]:
    entries = tool_config.get("protectedPackages")
    if not isinstance(entries, list):
        return frozenset()
    return frozenset(e for e in entries if isinstance(e, str) and e)


def load_manifest(project_root: Path) -> ProjectManifest:
    """Load ``package.json`` from *project_root*.

    Missing fields fall back to empty collections. Raises
    ``ManifestReadError`` if the file is absent, unreadable, or does not
    hold a JSON object.
    """
    path = project_root / MANIFEST_FILE
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ManifestReadError(f"Failed to read {MANIFEST_FILE}: {path} does not exist") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(f"Failed to read {MANIFEST_FILE}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestReadError(f"Failed to read {MANIFEST_FILE}: invalid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise ManifestReadError(f"Failed to read {MANIFEST_FILE}: top level must be a JSON object")

    tool_config = data.get(TOOL_CONFIG_KEY)
    if not isinstance(tool_config, dict):
        tool_config = {}

    engines = data.get("engines")
    if not isinstance(engines, dict):
        engines = {}

    manifest = ProjectManifest(
        name=str(data.get("name") or "unknown"),
        version=str(data.get("version") or "0.0.0"),
        dependencies=_keys(data, "dependencies"),
        dev_dependencies=_keys(data, "devDependencies"),
        scripts=_keys(data, "scripts"),
        engines=MappingProxyType({str(k): str(v) for k, v in engines.items()}),
        protected_packages=_protected(tool_config),
    )
    log.debug(
        "manifest.loaded",
        name=manifest.name,
        dependencies=len(manifest.dependencies),
        dev_dependencies=len(manifest.dev_dependencies),
    )
    return manifest

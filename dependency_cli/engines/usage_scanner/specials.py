"""Extra usage detectors for files depcheck does not understand on its own."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

log = structlog.get_logger("dependency_cli.usage_scanner")

VITE_CONFIG_GLOB = "vite.config.*"
_VITE_CONFIG_RE = re.compile(r"^vite\.config\.[cm]?[jt]s$")

# import x from 'pkg' / import 'pkg' / export ... from 'pkg' / require('pkg') / import('pkg')
_SPECIFIER_RE = re.compile(
    r"""(?:\bfrom\s*|\bimport\s*|\brequire\s*\(\s*|\bimport\s*\(\s*)(['"])([^'"\n]+)\1"""
)


def package_name(specifier: str) -> str | None:
    """Map an import specifier to the npm package it refers to.

    ``@scope/name/deep`` -> ``@scope/name``, ``pkg/sub`` -> ``pkg``.
    Relative paths, absolute paths and ``node:`` builtins return ``None``.
    """
    if not specifier or specifier.startswith((".", "/", "node:")):
        return None
    parts = specifier.split("/")
    if specifier.startswith("@"):
        if len(parts) < 2 or not parts[1]:
            return None
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def imported_packages(source: str) -> list[str]:
    """Return the distinct package names imported by *source*, in order."""
    found: dict[str, None] = {}
    for m in _SPECIFIER_RE.finditer(source):
        name = package_name(m.group(2).strip())
        if name:
            found.setdefault(name, None)
    return list(found)


def vite_config_usage(project_root: Path) -> set[str]:
    """Packages referenced from ``vite.config.{js,ts,mjs,cjs,mts,cts}`` files."""
    used: set[str] = set()
    for path in sorted(project_root.glob(VITE_CONFIG_GLOB)):
        if not path.is_file() or not _VITE_CONFIG_RE.match(path.name):
            continue
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            log.warning("usage_scanner.special_unreadable", file=path.name, error=str(exc))
            continue
        names = imported_packages(content)
        log.debug("usage_scanner.vite_config", file=path.name, packages=names)
        used.update(names)
    return used

"""Lockfile tree adapters.

``package-lock.json`` comes in two shapes: v2/v3 files carry a flat
``packages`` map keyed by install path (``node_modules/a/node_modules/b``),
while v1 files nest resolved packages under recursive ``dependencies``
objects. Both are exposed through the :class:`LockTree` protocol.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

_NODE_MODULES = "node_modules/"


@runtime_checkable
class LockTree(Protocol):
    """Interface every lockfile shape adapter must satisfy."""

    def iter_nodes(self) -> Iterator[tuple[str, str]]:
        """Yield ``(name, version)`` for every node with a resolved version."""
        ...


class FlatPackagesTree:
    """Path-keyed ``packages`` map (lockfileVersion 2 and 3)."""

    def __init__(self, packages: dict[str, Any]) -> None:
        self._packages = packages

    @staticmethod
    def name_from_path(path: str) -> str:
        idx = path.rfind(_NODE_MODULES)
        return path[idx + len(_NODE_MODULES) :] if idx >= 0 else path

    def iter_nodes(self) -> Iterator[tuple[str, str]]:
        for path, info in self._packages.items():
            # "" is the root project itself
            if not path or not isinstance(info, dict):
                continue
            version = info.get("version")
            if not isinstance(version, str) or not version:
                continue
            name = info.get("name") if isinstance(info.get("name"), str) else None
            yield name or self.name_from_path(path), version


class NestedDependenciesTree:
    """Recursive ``dependencies`` objects (lockfileVersion 1)."""

    def __init__(self, dependencies: dict[str, Any]) -> None:
        self._dependencies = dependencies

    def iter_nodes(self) -> Iterator[tuple[str, str]]:
        yield from self._walk(self._dependencies)

    def _walk(self, deps: dict[str, Any]) -> Iterator[tuple[str, str]]:
        for name, info in deps.items():
            if not isinstance(info, dict):
                continue
            version = info.get("version")
            if isinstance(version, str) and version:
                yield name, version
            children = info.get("dependencies")
            if isinstance(children, dict):
                yield from self._walk(children)


class _EmptyTree:
    def iter_nodes(self) -> Iterator[tuple[str, str]]:
        return iter(())


def open_lock_tree(data: dict[str, Any]) -> LockTree:
    """Pick the adapter for a decoded lockfile; ``packages`` wins over ``dependencies``."""
    packages = data.get("packages")
    if isinstance(packages, dict):
        return FlatPackagesTree(packages)
    dependencies = data.get("dependencies")
    if isinstance(dependencies, dict):
        return NestedDependenciesTree(dependencies)
    return _EmptyTree()

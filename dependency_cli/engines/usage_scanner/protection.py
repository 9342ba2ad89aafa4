"""Protection policy: which unused packages may never be removed automatically."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# This tool's own dependencies, framework cores, build/test/lint tooling and
# a few packages that are typically only referenced from config files.
BUILTIN_PROTECTED: frozenset[str] = frozenset(
    {
        "commander", "chalk", "depcheck", "lodash",
        "react", "react-dom", "next", "vue", "nuxt",
        "express", "fastify", "koa",
        "typescript", "node", "@types/node",
        "webpack", "vite", "rollup", "parcel",
        "jest", "mocha", "vitest", "cypress",
        "eslint", "prettier", "husky", "lint-staged",
        "@vitejs/plugin-react", "@vitejs/plugin-react-refresh",
        "gsap", "@gsap/react",
    }
)

# Type declarations, lint plugins/configs and transpiler presets.
_VETO_PREFIXES = ("@types/",)
_VETO_SUBSTRINGS = ("eslint", "babel")

# Names hinting at plugin loading or config-only usage (advisory only).
_DYNAMIC_HINT_RE = re.compile(r"plugin|vite|webpack|gsap")


@dataclass(frozen=True)
class ProtectedPackageSet:
    """Built-in protected names plus the ones declared in package.json."""

    names: frozenset[str] = BUILTIN_PROTECTED

    @classmethod
    def build(cls, user_declared: Iterable[str] = ()) -> ProtectedPackageSet:
        return cls(names=BUILTIN_PROTECTED | frozenset(user_declared))

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)


def is_vetoed(name: str, protected: ProtectedPackageSet) -> bool:
    """Return True if *name* must never be offered for automatic removal."""
    if name in protected:
        return True
    if name.startswith(_VETO_PREFIXES):
        return True
    return any(token in name for token in _VETO_SUBSTRINGS)


def looks_dynamic(name: str) -> bool:
    """Return True if *name* suggests dynamic or config-only usage.

    This only drives a warning; it never changes whether a package is
    removable.
    """
    return bool(_DYNAMIC_HINT_RE.search(name))

"""Shared pytest fixtures for dependency-cli tests: no npm/npx needed (faked)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from dependency_cli.core.config import Settings
from dependency_cli.core.logging import setup_logging
from dependency_cli.core.process import CommandResult


class FakeRunner:
    """Stand-in for ``run_command`` that replays scripted results.

    Responses are matched by substring against the joined argument list;
    the first matching entry wins. ``once=True`` entries are consumed.
    Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._responses: list[dict[str, Any]] = []

    def on(
        self,
        needle: str,
        *,
        exit_code: int = 0,
        stdout: str | dict | list = "",
        stderr: str = "",
        raises: Exception | None = None,
        once: bool = False,
    ) -> FakeRunner:
        if not isinstance(stdout, str):
            stdout = json.dumps(stdout)
        self._responses.append(
            {
                "needle": needle,
                "exit_code": exit_code,
                "stdout": stdout,
                "stderr": stderr,
                "raises": raises,
                "once": once,
            }
        )
        return self

    def calls_matching(self, needle: str) -> list[list[str]]:
        return [c for c in self.calls if needle in " ".join(c)]

    async def __call__(
        self,
        args: list[str],
        *,
        cwd: Path,
        timeout: float,
        capture: bool = True,
    ) -> CommandResult:
        self.calls.append(list(args))
        joined = " ".join(args)
        for resp in self._responses:
            if resp["needle"] in joined:
                if resp["once"]:
                    self._responses.remove(resp)
                if resp["raises"] is not None:
                    raise resp["raises"]
                return CommandResult(
                    args=list(args),
                    exit_code=resp["exit_code"],
                    stdout=resp["stdout"],
                    stderr=resp["stderr"],
                )
        return CommandResult(args=list(args), exit_code=0)


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    """Configure structlog once so engine log lines never reach stdout."""
    setup_logging(level="CRITICAL")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings() -> Settings:
    return Settings(timeout=5.0, npm="npm", depcheck=["depcheck"], batch_size=10)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal npm project with package.json only."""
    (tmp_path / "package.json").write_text(
        json.dumps(
            {
                "name": "demo-app",
                "version": "1.2.3",
                "dependencies": {"left-pad": "^1.3.0", "react": "^18.0.0"},
                "devDependencies": {"mocha-reporter": "^1.0.0"},
                "scripts": {"build": "vite build", "test": "vitest"},
            }
        )
    )
    return tmp_path

"""Tests for the fix orchestrator."""

from __future__ import annotations

import pytest

from dependency_cli.engines.fixer import FixOrchestrator, FixSelection, batched
from dependency_cli.engines.usage_scanner import ProtectedPackageSet
from dependency_cli.exceptions import CommandTimeoutError


def _unused(n: int) -> list[str]:
    return [f"pkg-{i:02d}" for i in range(n)]


@pytest.fixture
def orchestrator(project, settings, fake_runner):
    return FixOrchestrator(project, ProtectedPackageSet.build(), settings, fake_runner)


class TestFixSelection:
    def test_empty(self):
        assert FixSelection().is_empty
        assert FixSelection(force=True).is_empty

    def test_all(self):
        assert FixSelection(all=True).categories == [
            "unused", "outdated", "vulnerabilities", "duplicates",
        ]

    def test_subset_keeps_order(self):
        sel = FixSelection(duplicates=True, unused=True)
        assert sel.categories == ["unused", "duplicates"]


class TestBatched:
    def test_batches(self):
        assert [len(b) for b in batched(_unused(23), 10)] == [10, 10, 3]

    def test_empty(self):
        assert list(batched([], 10)) == []


class TestRemoveUnused:
    @pytest.mark.asyncio
    async def test_nothing_to_remove_reports_protected(self, orchestrator, fake_runner):
        fake_runner.on("depcheck", stdout={"dependencies": ["react"], "devDependencies": []})
        results = await orchestrator.apply(FixSelection(unused=True))
        assert results[0].success
        assert results[0].removed == []
        assert results[0].kept_protected == ["react"]
        assert fake_runner.calls_matching("uninstall") == []

    @pytest.mark.asyncio
    async def test_force_does_not_remove_protected(self, orchestrator, fake_runner):
        fake_runner.on(
            "depcheck", stdout={"dependencies": ["react", "left-pad"], "devDependencies": []}
        )
        results = await orchestrator.apply(FixSelection(unused=True, force=True))
        assert results[0].removed == ["left-pad"]
        assert fake_runner.calls_matching("uninstall") == [["npm", "uninstall", "left-pad"]]

    @pytest.mark.asyncio
    async def test_batches_of_ten(self, orchestrator, fake_runner):
        names = _unused(23)
        fake_runner.on("depcheck", stdout={"dependencies": names[:13], "devDependencies": names[13:]})
        results = await orchestrator.apply(FixSelection(unused=True))
        calls = fake_runner.calls_matching("uninstall")
        assert [len(c) - 2 for c in calls] == [10, 10, 3]
        assert results[0].success
        assert results[0].removed == names

    @pytest.mark.asyncio
    async def test_second_batch_failure_stops(self, orchestrator, fake_runner):
        names = _unused(23)
        fake_runner.on("depcheck", stdout={"dependencies": names, "devDependencies": []})
        fake_runner.on("uninstall", exit_code=0, once=True)
        fake_runner.on("uninstall", exit_code=1, stderr="npm ERR! EACCES", once=True)
        results = await orchestrator.apply(FixSelection(unused=True))

        calls = fake_runner.calls_matching("uninstall")
        assert len(calls) == 2
        assert calls[1][2:] == names[10:20]
        assert not results[0].success
        assert "Failed to remove: pkg-10" in results[0].error
        assert "EACCES" in results[0].error

    @pytest.mark.asyncio
    async def test_scan_failure_is_category_error(self, orchestrator, fake_runner):
        fake_runner.on("depcheck", exit_code=2, stdout="")
        results = await orchestrator.apply(FixSelection(unused=True, duplicates=True))
        assert [r.category for r in results] == ["unused", "duplicates"]
        assert not results[0].success
        assert "Error checking unused dependencies" in results[0].error
        assert results[1].success


class TestOtherActions:
    @pytest.mark.asyncio
    async def test_commands(self, orchestrator, fake_runner):
        results = await orchestrator.apply(
            FixSelection(outdated=True, vulnerabilities=True, duplicates=True)
        )
        assert all(r.success for r in results)
        assert fake_runner.calls == [
            ["npm", "update"],
            ["npm", "audit", "fix"],
            ["npm", "dedupe"],
        ]

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_siblings(self, orchestrator, fake_runner):
        fake_runner.on("depcheck", stdout={"dependencies": [], "devDependencies": []})
        fake_runner.on("update", exit_code=1)
        fake_runner.on("audit fix", raises=CommandTimeoutError(["npm", "audit", "fix"], 5.0))
        results = await orchestrator.apply(FixSelection(all=True))
        status = {r.category: r.success for r in results}
        assert status == {
            "unused": True,
            "outdated": False,
            "vulnerabilities": False,
            "duplicates": True,
        }
        errors = {r.category: r.error for r in results}
        assert errors["outdated"] == "npm update exited with code 1"
        assert "timed out after 5s" in errors["vulnerabilities"]

    @pytest.mark.asyncio
    async def test_on_start_callback(self, orchestrator):
        started = []
        orchestrator.on_start = started.append
        await orchestrator.apply(FixSelection(outdated=True, duplicates=True))
        assert started == ["outdated", "duplicates"]

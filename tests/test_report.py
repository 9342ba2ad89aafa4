"""Tests for project analysis aggregation."""

from __future__ import annotations

import json

import pytest

from dependency_cli.exceptions import LockfileParseError, ManifestReadError, UsageScanError
from dependency_cli.report import analyze_project

_DEPCHECK = {
    "dependencies": ["left-pad", "react"],
    "devDependencies": ["mocha-reporter"],
    "missing": {"axios": ["src/api.js"]},
    "using": {"lodash": ["src/util.js"]},
}


@pytest.fixture
def scripted(fake_runner):
    fake_runner.on("depcheck", exit_code=255, stdout=_DEPCHECK)
    fake_runner.on(
        "outdated --json",
        exit_code=1,
        stdout={
            "chalk": {"current": "4.1.2", "wanted": "4.1.2", "latest": "5.3.0"},
            "react": {"current": "17.0.2", "wanted": "17.0.2", "latest": "18.3.1"},
        },
    )
    fake_runner.on(
        "audit --json",
        exit_code=1,
        stdout={"vulnerabilities": {"minimist": {"severity": "high"}}},
    )
    return fake_runner


class TestAnalyzeProject:
    @pytest.mark.asyncio
    async def test_aggregates_all_checks(self, project, settings, scripted):
        (project / "package-lock.json").write_text(
            json.dumps(
                {
                    "packages": {
                        "": {"version": "1.2.3"},
                        "node_modules/ms": {"version": "2.1.3"},
                        "node_modules/debug/node_modules/ms": {"version": "2.0.0"},
                    }
                }
            )
        )
        analysis = await analyze_project(project, settings, scripted)

        assert analysis.manifest.name == "demo-app"
        assert analysis.usage.all_unused == ["left-pad", "mocha-reporter"]
        assert analysis.usage.protected_unused == ["react"]
        assert list(analysis.outdated) == ["react"]
        assert analysis.vulnerabilities.total == 1
        assert analysis.duplicates.total == 1

        health = analysis.health()
        # unused 2*3, outdated 1*2, vulns 1*5, duplicates 1*2, missing 1*4
        assert health.score == 100 - 6 - 2 - 5 - 2 - 4
        assert len(health.issues) == 5

    @pytest.mark.asyncio
    async def test_stats_json_shape(self, project, settings, scripted):
        analysis = await analyze_project(project, settings, scripted)
        data = json.loads(analysis.to_stats().to_json())

        assert data["project"] == {
            "name": "demo-app",
            "version": "1.2.3",
            "totalDeps": 2,
            "totalDevDeps": 1,
            "totalScripts": 2,
            "hasEngines": False,
        }
        assert data["unused"]["devDependencies"] == ["mocha-reporter"]
        assert data["unused"]["total"] == 2
        assert data["unused"]["using"] == {"lodash": ["src/util.js"]}
        assert data["missing"]["packages"] == ["axios"]
        assert data["outdated"]["details"]["react"]["latest"] == "18.3.1"
        assert data["vulnerabilities"]["counts"]["high"] == 1
        assert data["duplicates"]["lockFileExists"] is False
        assert data["health"]["score"] == 100 - 6 - 2 - 5 - 4

    @pytest.mark.asyncio
    async def test_registry_failures_degrade(self, project, settings, fake_runner):
        fake_runner.on("depcheck", stdout={"dependencies": [], "devDependencies": []})
        fake_runner.on("outdated", exit_code=1, stdout="")
        fake_runner.on("audit", exit_code=1, stdout="not json")
        analysis = await analyze_project(project, settings, fake_runner)
        assert analysis.outdated == {}
        assert analysis.vulnerabilities.total == 0
        assert analysis.health().score == 100

    @pytest.mark.asyncio
    async def test_missing_manifest_aborts(self, tmp_path, settings, fake_runner):
        with pytest.raises(ManifestReadError):
            await analyze_project(tmp_path, settings, fake_runner)
        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_usage_failure_aborts(self, project, settings, fake_runner):
        fake_runner.on("depcheck", exit_code=1, stdout="")
        with pytest.raises(UsageScanError):
            await analyze_project(project, settings, fake_runner)

    @pytest.mark.asyncio
    async def test_lockfile_failure_aborts(self, project, settings, scripted):
        (project / "package-lock.json").write_text("{nope")
        with pytest.raises(LockfileParseError):
            await analyze_project(project, settings, scripted)

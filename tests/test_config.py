"""Tests for settings loading."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from dependency_cli.core.config import Settings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = load_settings()
        assert s == Settings()
        assert s.depcheck == ["npx", "--yes", "depcheck"]
        assert s.timeout == 120.0
        assert s.batch_size == 10

    def test_env_overrides(self):
        env = {
            "DEPENDENCY_CLI_TIMEOUT": "7.5",
            "DEPENDENCY_CLI_NPM": "/opt/npm",
            "DEPENDENCY_CLI_DEPCHECK": "node ./node_modules/.bin/depcheck",
            "DEPENDENCY_CLI_BATCH_SIZE": "3",
            "DEPENDENCY_CLI_LOG_LEVEL": "debug",
            "DEPENDENCY_CLI_LOG_FORMAT": "JSON",
        }
        with patch.dict(os.environ, env, clear=True):
            s = load_settings()
        assert s.timeout == 7.5
        assert s.npm == "/opt/npm"
        assert s.depcheck == ["node", "./node_modules/.bin/depcheck"]
        assert s.batch_size == 3
        assert s.log_level == "DEBUG"
        assert s.log_format == "json"

    def test_invalid_batch_size(self):
        with patch.dict(os.environ, {"DEPENDENCY_CLI_BATCH_SIZE": "0"}, clear=True):
            with pytest.raises(ValueError):
                load_settings()

    def test_with_overrides_skips_none(self):
        s = Settings().with_overrides(timeout=None, npm="pnpm")
        assert s.timeout == 120.0
        assert s.npm == "pnpm"

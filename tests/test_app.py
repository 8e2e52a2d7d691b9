"""Tests for astralqueens.app – logging and game construction."""

from __future__ import annotations

import logging
from pathlib import Path

from astralqueens.app import build_game, configure_logging
from astralqueens.core.config import GameSettings
from conftest import FakeGrid


class TestBuildGame:
    def test_registers_configured_altars(self, grid: FakeGrid, progress_path: Path, catalog_path: Path):
        settings = GameSettings(progress_path=progress_path, catalog_path=catalog_path, altar_count=4)
        game = build_game(grid, settings=settings)
        assert game.registry.ids() == ["altar_1", "altar_2", "altar_3", "altar_4"]
        assert game.settings is settings
        assert not game.pool.is_loaded

    def test_reads_settings_file(self, grid: FakeGrid, tmp_path: Path, monkeypatch):
        config = tmp_path / "config.yaml"
        config.write_text(f"altar_count: 2\nprogress_path: {tmp_path / 'p.json'}\n", encoding="utf-8")
        monkeypatch.setenv("ASTRALQUEENS_CONFIG", str(config))
        game = build_game(FakeGrid())
        assert len(game.registry) == 2
        assert game.progress.file_path == tmp_path / "p.json"


class TestConfigureLogging:
    def test_configure_logging_is_safe_to_call(self):
        configure_logging()
        assert logging.getLogger().handlers

"""Tests for backend.config and backend.logging_config."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError

from backend.config import Settings, settings
from backend.logging_config import log_file_path, setup_logging
from core.types import Viewport


class TestSettings:
    def test_defaults(self) -> None:
        cfg = Settings(_env_file=None)
        assert cfg.viewport == Viewport(cfg.viewport_width, cfg.viewport_height)
        assert cfg.log_file_level == "DEBUG"
        assert cfg.log_retention_days == 7

    def test_log_levels_are_normalized(self) -> None:
        cfg = Settings(_env_file=None, log_level="warning", log_file_level="info")
        assert cfg.log_level == "WARNING"
        assert cfg.log_file_level == "INFO"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings(_env_file=None, log_file_level="chatty")

    @pytest.mark.parametrize("max_hands", [0, 3])
    def test_max_hands_range(self, max_hands: int) -> None:
        with pytest.raises(ValidationError, match="max_hands"):
            Settings(_env_file=None, max_hands=max_hands)


@pytest.fixture
def restore_logger() -> Iterator[None]:
    yield
    logger.remove()
    logger.configure(extra={})
    logger.add(sys.stderr)


class TestSetupLogging:
    def test_file_path_pattern(self, tmp_path: Path) -> None:
        path = log_file_path(tmp_path)
        assert path.parent == tmp_path
        assert path.name == "orrery_{time:YYYY-MM-DD}.log"

    def test_records_carry_component(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_logger: None
    ) -> None:
        monkeypatch.setattr(settings, "log_dir", str(tmp_path))
        monkeypatch.setattr(settings, "log_file_level", "DEBUG")

        setup_logging(component="demo")
        logger.debug("render tick slow")
        logger.complete()

        files = list(tmp_path.glob("orrery_*.log"))
        assert len(files) == 1
        text = files[0].read_text(encoding="utf-8")
        assert "| demo |" in text
        assert "render tick slow" in text

    def test_file_level_filters(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_logger: None
    ) -> None:
        monkeypatch.setattr(settings, "log_dir", str(tmp_path))
        monkeypatch.setattr(settings, "log_file_level", "WARNING")

        setup_logging(component="api")
        logger.info("frame applied")
        logger.warning("detector stalled")
        logger.complete()

        text = next(tmp_path.glob("orrery_*.log")).read_text(encoding="utf-8")
        assert "frame applied" not in text
        assert "detector stalled" in text

    def test_no_file_sink(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_logger: None) -> None:
        monkeypatch.setattr(settings, "log_dir", str(tmp_path))
        setup_logging(log_to_file=False)
        logger.info("console only")
        assert list(tmp_path.iterdir()) == []

"""
Unit tests for highlighted_text/__init__.py
Package metadata, logging setup, configuration loading and the public API.
"""

import json
import logging
import logging.handlers
import re
from pathlib import Path
from typing import Iterator

import pytest

import highlighted_text


@pytest.fixture
def fresh_package_logger() -> Iterator[logging.Logger]:
    """Detach package handlers so _setup_logging can run again, then restore them."""
    logger = logging.getLogger("highlighted_text")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    saved_propagate = logger.propagate
    for handler in saved_handlers:
        logger.removeHandler(handler)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


class TestVersionMetadata:
    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", highlighted_text.__version__)

    def test_version_components(self) -> None:
        expected = (
            f"{highlighted_text.VERSION_MAJOR}."
            f"{highlighted_text.VERSION_MINOR}."
            f"{highlighted_text.VERSION_PATCH}"
        )
        assert highlighted_text.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(highlighted_text, name)
            assert isinstance(value, str) and value


class TestPublicAPI:
    def test_all_exports_exist(self) -> None:
        for name in highlighted_text.__all__:
            assert hasattr(highlighted_text, name), f"missing export {name}"

    def test_no_duplicate_exports(self) -> None:
        assert len(highlighted_text.__all__) == len(set(highlighted_text.__all__))

    def test_engine_reachable_from_package(self) -> None:
        rules = [
            highlighted_text.HighlightRule.single(
                r"\d+",
                highlighted_text.TextFormattingRule.computed("n", lambda s, d, r: int(s)),
            )
        ]
        result = highlighted_text.compute_highlighted_text(
            "count: 42", highlighted_text.TextDefaults(), rules
        )
        assert result.attribute("n", 7) == 42


class TestLogging:
    def test_get_logger_prefixes_namespace(self) -> None:
        assert highlighted_text.get_logger("my_plugin").name == "highlighted_text.my_plugin"

    def test_get_logger_keeps_qualified_name(self) -> None:
        name = "highlighted_text.model.rules"
        assert highlighted_text.get_logger(name).name == name
        assert highlighted_text.get_logger("highlighted_text").name == "highlighted_text"

    def test_get_logger_main(self) -> None:
        assert highlighted_text.get_logger("__main__").name == "highlighted_text.main"

    def test_get_logger_strips_relative_dots(self) -> None:
        assert highlighted_text.get_logger(".engine").name == "highlighted_text.engine"

    def test_get_logger_similar_prefix_is_namespaced(self) -> None:
        logger = highlighted_text.get_logger("highlighted_textual")
        assert logger.name == "highlighted_text.highlighted_textual"

    def test_package_logger_configured(self) -> None:
        assert len(logging.getLogger("highlighted_text").handlers) >= 1

    def test_log_level_from_environment(
        self, fresh_package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HIGHLIGHTED_TEXT_LOG_LEVEL", "debug")
        monkeypatch.delenv("HIGHLIGHTED_TEXT_LOG_DIR", raising=False)
        highlighted_text._setup_logging()
        assert fresh_package_logger.level == logging.DEBUG
        assert len(fresh_package_logger.handlers) == 1
        assert fresh_package_logger.handlers[0].level == logging.WARNING
        assert fresh_package_logger.propagate is False

    def test_unknown_level_falls_back_to_info(
        self, fresh_package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HIGHLIGHTED_TEXT_LOG_LEVEL", "verbose")
        monkeypatch.delenv("HIGHLIGHTED_TEXT_LOG_DIR", raising=False)
        highlighted_text._setup_logging()
        assert fresh_package_logger.level == logging.INFO

    def test_setup_is_idempotent(
        self, fresh_package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("HIGHLIGHTED_TEXT_LOG_DIR", raising=False)
        highlighted_text._setup_logging()
        highlighted_text._setup_logging()
        assert len(fresh_package_logger.handlers) == 1

    def test_file_logging_when_directory_set(
        self,
        fresh_package_logger: logging.Logger,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("HIGHLIGHTED_TEXT_LOG_DIR", str(log_dir))
        highlighted_text._setup_logging()
        assert log_dir.is_dir()
        assert len(fresh_package_logger.handlers) == 2
        fresh_package_logger.info("written to file")
        for handler in fresh_package_logger.handlers:
            handler.flush()
        assert "written to file" in (log_dir / "highlighted_text.log").read_text(encoding="utf-8")


class TestConfiguration:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        config = highlighted_text.load_config(tmp_path / "missing.json")
        assert config == {
            "log_level": "INFO",
            "default_font_family": "system-ui",
            "default_font_size": 13.0,
            "default_text_color": "#000000",
        }

    def test_returned_dict_is_a_copy(self, tmp_path: Path) -> None:
        config = highlighted_text.load_config(tmp_path / "missing.json")
        config["log_level"] = "DEBUG"
        assert highlighted_text.load_config(tmp_path / "missing.json")["log_level"] == "INFO"

    def test_file_values_override_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"default_font_family": "Menlo", "custom_key": 1}), encoding="utf-8"
        )
        config = highlighted_text.load_config(config_path)
        assert config["default_font_family"] == "Menlo"
        assert config["custom_key"] == 1
        assert config["default_font_size"] == 13.0

    def test_default_path_is_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / highlighted_text.DEFAULT_CONFIG_FILENAME).write_text(
            json.dumps({"default_text_color": "red"}), encoding="utf-8"
        )
        assert highlighted_text.load_config()["default_text_color"] == "red"

    @pytest.mark.parametrize(
        "content, message",
        [
            ("{invalid json", "invalid JSON"),
            ('["not", "a", "dict"]', "Invalid config format"),
        ],
    )
    def test_bad_file_falls_back_to_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str, message: str
    ) -> None:
        config_path = tmp_path / "bad.json"
        config_path.write_text(content, encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            config = highlighted_text.load_config(config_path)
        assert config["default_font_family"] == "system-ui"
        assert message in caplog.text

    def test_unreadable_path_falls_back(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        # A directory exists but cannot be opened as a file.
        with caplog.at_level(logging.WARNING):
            config = highlighted_text.load_config(tmp_path)
        assert config["log_level"] == "INFO"
        assert "Cannot read" in caplog.text

    def test_config_feeds_engine_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"default_font_family": "Menlo", "default_font_size": 10}),
            encoding="utf-8",
        )
        engine = highlighted_text.HighlightEngine.from_config(
            highlighted_text.load_config(config_path)
        )
        font = engine.highlight("x").attribute("font", 0)
        assert font == highlighted_text.FontDescriptor("Menlo", 10.0)

    def test_apply_config_sets_log_level(
        self,
        fresh_package_logger: logging.Logger,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("HIGHLIGHTED_TEXT_LOG_LEVEL", "INFO")
        monkeypatch.setenv("HIGHLIGHTED_TEXT_LOG_DIR", str(tmp_path / "logs"))
        highlighted_text._setup_logging()
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"log_level": "debug"}), encoding="utf-8")

        highlighted_text.apply_config(highlighted_text.load_config(config_path))

        assert fresh_package_logger.level == logging.DEBUG
        levels = {type(h): h.level for h in fresh_package_logger.handlers}
        assert levels[logging.handlers.RotatingFileHandler] == logging.DEBUG
        assert levels[logging.StreamHandler] == logging.WARNING

    def test_apply_config_ignores_unknown_level(
        self, fresh_package_logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        fresh_package_logger.setLevel(logging.INFO)
        with caplog.at_level(logging.WARNING):
            highlighted_text.apply_config({"log_level": "chatty"})
        assert fresh_package_logger.level == logging.INFO
        assert "CHATTY" in caplog.text

"""Unit tests for configuration loading."""

import json
import logging

import pytest
from pydantic import ValidationError

from driver_assertions.config import AssertionsConfig, ResolutionOrder, load_config
from driver_assertions.constants import CONFIG_ENV_VAR, VALUE_PRESENCE_KEYS
from driver_assertions.errors import ConfigurationError, ErrorCode


@pytest.fixture
def package_logger():
    """The package logger, with its level restored afterwards."""
    logger = logging.getLogger("driver_assertions")
    previous = logger.level
    yield logger
    logger.setLevel(previous)


class TestAssertionsConfig:
    """Test model defaults and validation."""

    def test_defaults(self):
        config = AssertionsConfig()

        assert config.resolution_order == ResolutionOrder.ARRIVAL
        assert config.suppress_absent_expected is True
        assert config.value_presence_keys == VALUE_PRESENCE_KEYS
        assert config.log_level == "WARNING"

    def test_log_level_normalized(self):
        assert AssertionsConfig(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AssertionsConfig(log_level="LOUD")

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            AssertionsConfig(resolution="issuance")

    def test_apply_logging(self, package_logger):
        AssertionsConfig(log_level="DEBUG").apply_logging()
        assert package_logger.level == logging.DEBUG

    def test_default_level_leaves_host_level(self, package_logger):
        """Test that a config without log_level keeps the level set by the host."""
        package_logger.setLevel(logging.INFO)

        AssertionsConfig().apply_logging()
        AssertionsConfig(resolution_order="issuance").apply_logging()

        assert package_logger.level == logging.INFO

    def test_level_from_file_applied(self, tmp_path, package_logger):
        path = tmp_path / "assertions.json"
        path.write_text(json.dumps({"log_level": "error"}))

        load_config(path).apply_logging()

        assert package_logger.level == logging.ERROR


class TestLoadConfig:
    """Test loading from JSON files."""

    def test_no_file_gives_defaults(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert load_config() == AssertionsConfig()

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "assertions.json"
        path.write_text(json.dumps({
            "resolution_order": "issuance",
            "value_presence_keys": ["title", "url"],
        }))

        config = load_config(path)

        assert config.resolution_order == ResolutionOrder.ISSUANCE
        assert config.value_presence_keys == frozenset({"title", "url"})

    def test_load_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "assertions.json"
        path.write_text(json.dumps({"suppress_absent_expected": False}))
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().suppress_absent_expected is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "missing.json")

        assert exc_info.value.code == ErrorCode.CONFIG_LOAD_FAILED
        assert exc_info.value.to_dict()["context"]["file_path"].endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.code == ErrorCode.CONFIG_LOAD_FAILED

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.code == ErrorCode.INVALID_CONFIG

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"resolution_order": "sometimes"}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.code == ErrorCode.INVALID_CONFIG
        assert "resolution_order" in error.suggestion

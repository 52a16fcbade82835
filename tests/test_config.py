"""Tests for ParserConfig YAML loading and settings helpers."""

import pytest

from llhls.config import ParserConfig
from llhls.settings import ConfigError
from llhls.settings import get_env
from llhls.settings import get_env_bool
from llhls.settings import get_env_int


class TestParserConfig:
    def test_defaults(self):
        config = ParserConfig()

        assert config.trailing_segment_policy == "discard"
        assert config.quote_aware_attributes is True
        assert config.encoding == "utf-8-sig"

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text("parser:\n  trailing_segment_policy: error\n  quote_aware_attributes: false\n")

        config = ParserConfig(str(path))

        assert config.trailing_segment_policy == "error"
        assert config.quote_aware_attributes is False

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ParserConfig(str(tmp_path / "nope.yaml"))

        assert config.to_dict() == {
            "trailing_segment_policy": "discard",
            "quote_aware_attributes": True,
            "encoding": "utf-8-sig",
        }

    def test_overrides_take_precedence(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text("parser:\n  trailing_segment_policy: error\n")

        config = ParserConfig(str(path), trailing_segment_policy="discard")

        assert config.trailing_segment_policy == "discard"

    def test_invalid_policy_rejected(self):
        with pytest.raises(ValueError):
            ParserConfig(trailing_segment_policy="seal")

    def test_unknown_override_rejected(self):
        with pytest.raises(ValueError):
            ParserConfig(strict=True)

    def test_non_mapping_yaml_rejected(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            ParserConfig(str(path))

    def test_malformed_yaml_rejected(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text("parser: [unclosed\n")

        with pytest.raises(ValueError, match="not valid YAML"):
            ParserConfig(str(path))


class TestSettingsHelpers:
    def test_required_env_missing(self, monkeypatch):
        monkeypatch.delenv("LLHLS_TEST_VALUE", raising=False)

        with pytest.raises(ConfigError):
            get_env("LLHLS_TEST_VALUE")

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("LLHLS_TEST_PORT", "9100")

        assert get_env_int("LLHLS_TEST_PORT") == 9100

    def test_env_int_invalid(self, monkeypatch):
        monkeypatch.setenv("LLHLS_TEST_PORT", "ninety")

        with pytest.raises(ConfigError):
            get_env_int("LLHLS_TEST_PORT")

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("on", True), ("no", False)])
    def test_env_bool(self, monkeypatch, value, expected):
        monkeypatch.setenv("LLHLS_TEST_FLAG", value)

        assert get_env_bool("LLHLS_TEST_FLAG") is expected

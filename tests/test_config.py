"""Unit tests for environment configuration."""
import os
from pathlib import Path

import pytest

from heavengpt.config import DEFAULT_BASE_URL, ConfigError, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without HEAVENGPT_* variables."""
    for name in list(os.environ):
        if name.upper().startswith("HEAVENGPT_"):
            monkeypatch.delenv(name)
    return monkeypatch


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.model == "gpt-3.5-turbo"
        assert config.temperature == 0.1
        assert config.max_tokens == 2048
        assert config.system_prompt is None
        assert config.include_history is False
        assert config.history_limit == 10
        assert config.timeout == 60.0
        assert config.log_file.name == "heavengpt.log"

    def test_reads_prefixed_variables(self, clean_env):
        for name, value in {
            "HEAVENGPT_BASE_URL": "http://localhost:8000",
            "HEAVENGPT_MODEL": "local-model",
            "HEAVENGPT_TEMPERATURE": "0.7",
            "HEAVENGPT_MAX_TOKENS": "512",
            "HEAVENGPT_HISTORY_LIMIT": "4",
            "HEAVENGPT_TIMEOUT": "5",
            "HEAVENGPT_LOG_FILE": "/tmp/hg.log",
            "UNRELATED": "ignored",
        }.items():
            clean_env.setenv(name, value)

        config = load_config()

        assert config.base_url == "http://localhost:8000"
        assert config.model == "local-model"
        assert config.temperature == 0.7
        assert config.max_tokens == 512
        assert config.history_limit == 4
        assert config.timeout == 5.0
        assert config.log_file == Path("/tmp/hg.log")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("false", False), ("", False)],
    )
    def test_boolean_parsing(self, clean_env, raw, expected):
        clean_env.setenv("HEAVENGPT_INCLUDE_HISTORY", raw)

        assert load_config().include_history is expected

    def test_invalid_boolean(self, clean_env):
        clean_env.setenv("HEAVENGPT_INCLUDE_HISTORY", "maybe")

        with pytest.raises(ConfigError, match="HEAVENGPT_INCLUDE_HISTORY"):
            load_config()

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("HEAVENGPT_TEMPERATURE", "3"),
            ("HEAVENGPT_MAX_TOKENS", "zero"),
            ("HEAVENGPT_MAX_TOKENS", "0"),
            ("HEAVENGPT_TIMEOUT", "-1"),
        ],
    )
    def test_invalid_values_name_the_variable(self, clean_env, name, value):
        clean_env.setenv(name, value)

        with pytest.raises(ConfigError, match=name):
            load_config()

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_system_prompt_is_unset(self, clean_env, value):
        clean_env.setenv("HEAVENGPT_SYSTEM_PROMPT", value)

        assert load_config().system_prompt is None
        assert load_config(system_prompt=value).system_prompt is None

    def test_overrides_win_and_none_is_ignored(self, clean_env):
        clean_env.setenv("HEAVENGPT_MODEL", "from-env")
        clean_env.setenv("HEAVENGPT_BASE_URL", "http://env")

        config = load_config(model="from-flag", base_url=None)

        assert config.model == "from-flag"
        assert config.base_url == "http://env"

    def test_invalid_override(self):
        with pytest.raises(ConfigError, match="HEAVENGPT_TEMPERATURE"):
            load_config(temperature=5)

    def test_config_is_frozen(self):
        config = load_config()

        with pytest.raises(ValueError):
            config.model = "other"

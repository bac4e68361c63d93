"""
Property-based tests for configuration loading.

Valid files load into an equivalent RunConfig; anything else is rejected
with a ConfigurationError before a run can start.
"""

import pytest
import json
import tempfile
import os
from pathlib import Path
from hypothesis import given, strategies as st
from hypothesis import settings

# Add project root to path
import sys
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import ConfigManager, RunConfig, ENV_PREFIX, load_config
from website_checker.utils.errors import ConfigurationError, ValidationError


REQUIRED_KEYS = ["worker_threads", "request_timeout_secs", "max_retries", "log_file"]


@st.composite
def config_data_strategy(draw):
    """Generate valid configuration file content."""
    return {
        "worker_threads": draw(st.integers(min_value=0, max_value=64)),
        "request_timeout_secs": draw(st.integers(min_value=0, max_value=120)),
        "max_retries": draw(st.integers(min_value=0, max_value=10)),
        "log_file": draw(st.text(
            min_size=1, max_size=30,
            alphabet=st.characters(whitelist_categories=('Lu', 'Ll', 'Nd'), whitelist_characters='_-./')
        ))
    }


def write_config(directory, data):
    config_file = Path(directory) / "config.json"
    with open(config_file, 'w', encoding='utf-8') as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
    return config_file


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any WEBSITE_CHECKER_* variables from the environment."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def valid_data():
    return {
        "worker_threads": 4,
        "request_timeout_secs": 5,
        "max_retries": 2,
        "log_file": "logs/checks.jsonl"
    }


class TestConfigurationLoadingProperties:
    """Valid configuration files round into RunConfig unchanged."""

    @given(config_data=config_data_strategy())
    @settings(max_examples=20)
    def test_valid_config_loads_equivalent_values(self, config_data):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = write_config(temp_dir, config_data)

            config = ConfigManager(config_file).load_config()

        assert config.to_dict() == config_data
        assert config.effective_worker_threads == max(1, config_data["worker_threads"])
        assert config.timeout == float(config_data["request_timeout_secs"])

    @given(
        config_data=config_data_strategy(),
        missing=st.sampled_from(REQUIRED_KEYS)
    )
    @settings(max_examples=10)
    def test_missing_key_rejected(self, config_data, missing):
        del config_data[missing]

        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = write_config(temp_dir, config_data)

            with pytest.raises(ConfigurationError):
                ConfigManager(config_file).load_config()

    @given(
        config_data=config_data_strategy(),
        field=st.sampled_from(REQUIRED_KEYS[:3]),
        value=st.integers(max_value=-1)
    )
    @settings(max_examples=10)
    def test_negative_integers_rejected(self, config_data, field, value):
        config_data[field] = value

        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = write_config(temp_dir, config_data)

            with pytest.raises(ConfigurationError):
                ConfigManager(config_file).load_config()


class TestConfigurationErrors:
    """Concrete rejection cases."""

    def test_unknown_key_rejected(self, tmp_path, valid_data, clean_env):
        valid_data["worker_count"] = 3

        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, valid_data)).load_config()

    @pytest.mark.parametrize("field,value", [
        ("worker_threads", "4"),
        ("request_timeout_secs", 2.5),
        ("max_retries", None),
        ("log_file", ""),
        ("log_file", 42),
    ])
    def test_wrong_types_rejected(self, tmp_path, valid_data, clean_env, field, value):
        valid_data[field] = value

        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, valid_data)).load_config()

    def test_malformed_json_rejected(self, tmp_path, clean_env):
        config_file = write_config(tmp_path, '{"worker_threads": 4,')

        with pytest.raises(ConfigurationError, match="Malformed JSON"):
            ConfigManager(config_file).load_config()

    def test_non_object_rejected(self, tmp_path, clean_env):
        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, [1, 2, 3])).load_config()

    def test_missing_file_rejected(self, tmp_path, clean_env):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.json")

    def test_whole_number_floats_accepted(self, tmp_path, valid_data, clean_env):
        valid_data["max_retries"] = 3.0

        config = ConfigManager(write_config(tmp_path, valid_data)).load_config()

        assert config.max_retries == 3
        assert isinstance(config.max_retries, int)


class TestEnvironmentOverrides:
    """WEBSITE_CHECKER_* variables take precedence over the file."""

    def test_integer_and_path_overrides(self, tmp_path, valid_data, clean_env):
        clean_env.setenv(ENV_PREFIX + "WORKER_THREADS", "16")
        clean_env.setenv(ENV_PREFIX + "MAX_RETRIES", "0")
        clean_env.setenv(ENV_PREFIX + "LOG_FILE", "other.jsonl")

        config = ConfigManager(write_config(tmp_path, valid_data)).load_config()

        assert config.worker_threads == 16
        assert config.max_retries == 0
        assert config.log_file == "other.jsonl"
        assert config.request_timeout_secs == 5

    def test_blank_override_ignored(self, tmp_path, valid_data, clean_env):
        clean_env.setenv(ENV_PREFIX + "REQUEST_TIMEOUT_SECS", "  ")

        config = ConfigManager(write_config(tmp_path, valid_data)).load_config()

        assert config.request_timeout_secs == 5

    @pytest.mark.parametrize("value", ["many", "-1"])
    def test_invalid_override_rejected(self, tmp_path, valid_data, clean_env, value):
        clean_env.setenv(ENV_PREFIX + "WORKER_THREADS", value)

        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, valid_data)).load_config()


class TestRunConfig:

    def test_defaults_are_valid(self):
        config = RunConfig()
        assert config.effective_worker_threads == 4
        assert config.timeout == 10.0

    def test_zero_workers_clamped(self):
        assert RunConfig(worker_threads=0).effective_worker_threads == 1

    def test_zero_timeout_is_kept_as_zero(self):
        assert RunConfig(request_timeout_secs=0).timeout == 0.0

    def test_negative_values_raise(self):
        with pytest.raises(ValidationError) as exc_info:
            RunConfig(worker_threads=-1, max_retries=-2)
        assert len(exc_info.value.details["errors"]) == 2

    def test_frozen(self):
        config = RunConfig()
        with pytest.raises(Exception):
            config.max_retries = 5

"""
Unit tests for configuration loading and validation.
"""

import pytest
import toml
from pairplan.config import Config, ConfigError


@pytest.fixture
def config_file(tmp_path):
    """Write a TOML config and return its path."""

    def _write(data):
        path = tmp_path / "pairplan.toml"
        path.write_text(toml.dumps(data))
        return str(path)

    return _write


class TestConfigLoad:
    """Test loading from disk."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Missing file falls back to defaults."""
        config = Config.load(str(tmp_path / "absent.toml"))
        assert config.get("plan", "group_size") == 5
        assert config.get("plan", "strategy") == "global_greedy"

    def test_defaults_not_shared(self, tmp_path):
        """Mutating one loaded config leaves the defaults intact."""
        config = Config.load(str(tmp_path / "absent.toml"))
        config["plan"]["group_size"] = 3
        assert Config.DEFAULT_CONFIG["plan"]["group_size"] == 5

    def test_env_var_path(self, tmp_path, monkeypatch, config_file):
        """PAIRPLAN_CONFIG_PATH selects the file."""
        path = config_file({"plan": {"group_size": 4, "strategy": "naive"}})
        monkeypatch.setenv("PAIRPLAN_CONFIG_PATH", path)
        config = Config.load()
        assert config.get("plan", "group_size") == 4
        assert config.get("plan", "strategy") == "naive"

    def test_malformed_file(self, tmp_path):
        """Unparseable TOML raises ConfigError."""
        path = tmp_path / "broken.toml"
        path.write_text("[plan\ngroup_size = ")
        with pytest.raises(ConfigError):
            Config.load(str(path))

    def test_seed_passthrough(self, config_file):
        """Seed is kept as given."""
        config = Config.load(config_file({"plan": {"seed": 42}}))
        assert config.get("plan", "seed") == 42


class TestConfigValidation:
    """Test bounds and choices."""

    def test_missing_section_filled(self):
        """Missing sections come from defaults."""
        config = Config({"plan": {"group_size": 5}})
        assert config["report"]["top_n"] == 10
        assert config["execute"]["max_retries"] == 5

    def test_missing_param_filled(self):
        """Missing params come from defaults."""
        config = Config({"plan": {"group_size": 3}})
        assert config.get("plan", "strategy") == "global_greedy"

    @pytest.mark.parametrize("group_size", [1, 11])
    def test_group_size_out_of_bounds(self, group_size):
        """Group size outside 2..10 is rejected."""
        with pytest.raises(ConfigError, match="out of bounds"):
            Config({"plan": {"group_size": group_size}})

    def test_unknown_strategy(self):
        """Strategy must be one of the known names."""
        with pytest.raises(ConfigError, match="not one of"):
            Config({"plan": {"strategy": "exhaustive"}})

    def test_negative_retry_delay(self):
        """Negative retry delay is rejected."""
        with pytest.raises(ConfigError):
            Config({"execute": {"retry_delay_seconds": -1}})

    def test_get_default(self):
        """get() returns the fallback for unknown keys."""
        config = Config({})
        assert config.get("plan", "nope", "fallback") == "fallback"
        assert config["unknown"] == {}

    def test_repr(self):
        """repr shows the config version."""
        assert repr(Config({"config_version": "1.0"})) == "Config(version=1.0)"

"""Test Settings loading."""

import pytest

from trade_analytics.core.config import Settings, load_settings
from trade_analytics.core.errors import ConfigError


class TestSettingsDefaults:
    def test_analytics_defaults(self):
        settings = Settings()
        assert settings.analytics.initial_balance == 10_000.0
        assert settings.analytics.adherence_threshold == 0.8
        assert settings.analytics.tool_min_sample == 3

    def test_monte_carlo_defaults(self):
        settings = Settings()
        assert settings.monte_carlo.runs == 100
        assert settings.monte_carlo.trades_per_run == 200
        assert settings.monte_carlo.min_trades == 5
        assert settings.monte_carlo.seed is None


class TestLoadSettings:
    def test_no_file(self):
        assert load_settings().observability.log_level == "INFO"

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.monte_carlo.runs == 100

    def test_toml_file(self, tmp_path):
        path = tmp_path / "analytics.toml"
        path.write_text(
            "[analytics]\ninitial_balance = 5000.0\n\n[monte_carlo]\nruns = 20\nseed = 7\n"
        )
        settings = load_settings(path)
        assert settings.analytics.initial_balance == 5000.0
        assert settings.monte_carlo.runs == 20
        assert settings.monte_carlo.seed == 7

    def test_overrides_merge_with_file(self, tmp_path):
        path = tmp_path / "analytics.toml"
        path.write_text("[monte_carlo]\nruns = 20\n")
        settings = load_settings(path, {"monte_carlo": {"seed": 3}})
        assert settings.monte_carlo.runs == 20
        assert settings.monte_carlo.seed == 3

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TRADE_ANALYTICS_MONTE_CARLO__RUNS", "42")
        assert load_settings().monte_carlo.runs == 42

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[analytics\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_zero_trades_per_run_allowed(self):
        settings = load_settings(overrides={"monte_carlo": {"trades_per_run": 0}})
        assert settings.monte_carlo.trades_per_run == 0

    def test_negative_trades_per_run_rejected(self):
        with pytest.raises(ConfigError):
            load_settings(overrides={"monte_carlo": {"trades_per_run": -1}})

    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            load_settings(overrides={"monte_carlo": {"runs": 0}})

"""Unit tests for Settings."""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jangi import Settings, Side


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.depth == 3
        assert settings.ai_side == Side.BLUE
        assert settings.ai_delay == 0.5
        assert settings.seed is None
        assert settings.session_ttl == 3600
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = Settings.from_env({
            "JANGI_DEPTH": "2",
            "JANGI_AI_SIDE": "red",
            "JANGI_AI_DELAY": "0",
            "JANGI_SEED": "42",
            "JANGI_SESSION_TTL": "60",
            "JANGI_LOG_LEVEL": "debug",
        })

        assert settings.depth == 2
        assert settings.ai_side == Side.RED
        assert settings.ai_delay == 0.0
        assert settings.seed == 42
        assert settings.session_ttl == 60
        assert settings.log_level == "DEBUG"

    def test_empty_seed_means_unseeded(self):
        assert Settings.from_env({"JANGI_SEED": ""}).seed is None

    @pytest.mark.parametrize("env", [
        {"JANGI_DEPTH": "deep"},
        {"JANGI_DEPTH": "0"},
        {"JANGI_AI_SIDE": "green"},
        {"JANGI_AI_DELAY": "-1"},
        {"JANGI_SEED": "x"},
    ])
    def test_malformed_values(self, env):
        with pytest.raises(ValueError):
            Settings.from_env(env)

"""Tests for configuration management."""

import logging

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    ExportThresholds,
    get_environment,
    get_environment_info,
    get_log_level,
    get_thresholds,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("ELEMENTOR_ID_SEED", raising=False)
        result = get_environment(EnvVar.ELEMENTOR_ID_SEED)
        assert result == 1000

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("PATTERN_MIN_SCORE", "90")
        result = get_environment(EnvVar.PATTERN_MIN_SCORE, override=45)
        assert result == 45

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("ELEMENTOR_ID_SEED", "4096")
        result = get_environment(EnvVar.ELEMENTOR_ID_SEED)
        assert result == 4096
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("EXPORT_VALIDATE", value)
            assert get_environment(EnvVar.EXPORT_VALIDATE) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("EXPORT_OPTIMIZE", value)
            assert get_environment(EnvVar.EXPORT_OPTIMIZE) is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean text falls back to the default."""
        monkeypatch.setenv("EXPORT_VALIDATE", "maybe")
        assert get_environment(EnvVar.EXPORT_VALIDATE) is True

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("ELEMENTOR_VERSION", "3.20.1")
        result = get_environment(EnvVar.ELEMENTOR_VERSION)
        assert result == "3.20.1"

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("SAVED_BLOCK_MIN_SCORE", "not-a-number")
        assert get_environment(EnvVar.SAVED_BLOCK_MIN_SCORE) == 60


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.TEMPLATE_PART_MIN_CONFIDENCE)
        assert isinstance(info, EnvConfig)
        assert info.name == "TEMPLATE_PART_MIN_CONFIDENCE"
        assert info.default == 60
        assert info.var_type is int
        assert info.category == "thresholds"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated."""
        info = get_environment_info(EnvVar.ELEMENTOR_VERSION)
        assert "Elementor" in info.description


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        threshold_vars = list_environment_variables("thresholds")
        assert EnvVar.PATTERN_MIN_SCORE in threshold_vars
        assert EnvVar.GLOBAL_BLOCK_MIN_SCORE in threshold_vars
        assert EnvVar.ELEMENTOR_VERSION not in threshold_vars

    @pytest.mark.unit
    def test_unknown_category_is_empty(self):
        """Unknown category yields no variables."""
        assert list_environment_variables("docker") == []


# =============================================================================
# Tests for thresholds and log level
# =============================================================================


class TestGetThresholds:
    """Tests for promotion threshold resolution."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        """Defaults match the documented cut-offs."""
        for var in list_environment_variables("thresholds"):
            monkeypatch.delenv(var.value.name, raising=False)
        assert get_thresholds() == ExportThresholds()
        assert get_thresholds().saved_block_min_score == 60

    @pytest.mark.unit
    def test_env_override(self, monkeypatch):
        """Environment variables feed the threshold fields."""
        monkeypatch.setenv("TEMPLATE_MIN_SCORE", "75")
        assert get_thresholds().template_min_score == 75

    @pytest.mark.unit
    def test_keyword_override_beats_env(self, monkeypatch):
        """Keyword overrides take precedence over the environment."""
        monkeypatch.setenv("PATTERN_MIN_OCCURRENCES", "5")
        assert get_thresholds(pattern_min_occurrences=3).pattern_min_occurrences == 3

    @pytest.mark.unit
    def test_unknown_override_raises(self):
        """Unknown threshold names are rejected."""
        with pytest.raises(TypeError, match="bogus"):
            get_thresholds(bogus=1)

    @pytest.mark.unit
    def test_frozen(self):
        """Thresholds are immutable."""
        thresholds = ExportThresholds()
        with pytest.raises(AttributeError):
            thresholds.pattern_min_score = 1


class TestGetLogLevel:
    """Tests for log level resolution."""

    @pytest.mark.unit
    def test_named_level(self, monkeypatch):
        """Level names resolve case-insensitively."""
        monkeypatch.setenv("BUILDER_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_unknown_level_falls_back(self):
        """Unknown level names resolve to INFO."""
        assert get_log_level(override="chatty") == logging.INFO

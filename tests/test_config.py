"""
Tests for configuration presets, overrides and validation.
"""

import dataclasses

import pytest

from company_dedup.engine import (
    CONFIG_PRESETS,
    DEFAULT_CONFIG,
    create_config,
    describe_config,
    validate_config,
)
from company_dedup.errors import InvalidConfigurationError


class TestPresets:
    """The three named presets."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("conservative", (0.92, 0.88, 0.85, 0.85, 10)),
            ("balanced", (0.85, 0.80, 0.70, 0.75, 10)),
            ("aggressive", (0.78, 0.70, 0.60, 0.60, 15)),
        ],
    )
    def test_preset_values(self, name, expected):
        cfg = CONFIG_PRESETS[name]
        assert (
            cfg.high_similarity,
            cfg.token_match,
            cfg.partial_match,
            cfg.min_confidence,
            cfg.max_results_per_name,
        ) == expected
        assert cfg.remove_suffixes is True
        assert cfg.handle_accents is True
        assert cfg.remove_numbers is False

    def test_default_is_balanced(self):
        assert DEFAULT_CONFIG == CONFIG_PRESETS["balanced"]
        assert create_config() == CONFIG_PRESETS["balanced"]

    def test_presets_are_valid(self):
        for cfg in CONFIG_PRESETS.values():
            assert validate_config(cfg) == []

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.high_similarity = 0.1


class TestCreateConfig:
    """Building a config from a preset plus overrides."""

    def test_overrides_merge_over_preset(self):
        cfg = create_config("conservative", {"min_confidence": 0.5, "remove_numbers": True})
        assert cfg.min_confidence == 0.5
        assert cfg.remove_numbers is True
        assert cfg.high_similarity == 0.92

    def test_none_overrides_are_ignored(self):
        cfg = create_config("aggressive", {"token_match": None})
        assert cfg.token_match == 0.70

    def test_boundaries_are_valid(self):
        cfg = create_config("balanced", {"high_similarity": 0, "token_match": 1, "max_results_per_name": 1})
        assert cfg.high_similarity == 0
        assert cfg.token_match == 1

    def test_every_violation_is_reported(self):
        with pytest.raises(InvalidConfigurationError) as exc:
            create_config(
                "balanced",
                {
                    "high_similarity": 1.5,
                    "token_match": -0.1,
                    "partial_match": 2,
                    "min_confidence": -1,
                    "max_results_per_name": 0,
                },
            )
        errors = exc.value.errors
        assert len(errors) == 5
        for field in ("high_similarity", "token_match", "partial_match", "min_confidence", "max_results_per_name"):
            assert any(field in e for e in errors)
            assert field in str(exc.value)

    def test_unknown_preset_and_field_reported_together(self):
        with pytest.raises(InvalidConfigurationError) as exc:
            create_config("reckless", {"colour": "red", "min_confidence": 3})
        errors = exc.value.errors
        assert len(errors) == 3
        assert any("reckless" in e for e in errors)
        assert any("colour" in e for e in errors)
        assert any("min_confidence" in e for e in errors)

    def test_wrong_types_are_violations(self):
        with pytest.raises(InvalidConfigurationError) as exc:
            create_config(
                "balanced",
                {
                    "high_similarity": True,
                    "token_match": "0.8",
                    "max_results_per_name": 2.5,
                    "handle_accents": "yes",
                },
            )
        assert len(exc.value.errors) == 4

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            create_config("balanced", {"max_results_per_name": -3})


class TestValidateConfig:
    def test_returns_all_messages(self):
        cfg = dataclasses.replace(DEFAULT_CONFIG, high_similarity=1.01, max_results_per_name=0)
        assert validate_config(cfg) == [
            "high_similarity must be between 0 and 1",
            "max_results_per_name must be > 0",
        ]


class TestDescribeConfig:
    def test_mentions_thresholds_and_flags(self):
        text = describe_config(CONFIG_PRESETS["balanced"])
        assert "High similarity >= 85%" in text
        assert "Token match     >= 80%" in text
        assert "Partial match   >= 70%" in text
        assert "remove_suffixes=True" in text
        assert "min_confidence >= 75%" in text
        assert "max_results_per_name=10" in text

"""
Tests for the matching layers and match reconciliation.
"""

import pytest

from company_dedup.constants import (
    METHOD_EXACT,
    METHOD_HIGH_SIMILARITY,
    METHOD_PARTIAL,
    METHOD_TOKEN,
)
from company_dedup.engine import create_config
from company_dedup.engine.matcher import (
    calculate_levenshtein_distance,
    calculate_similarity,
    find_all_matches,
    find_exact_matches,
    find_high_similarity_matches,
    find_partial_matches,
    find_token_matches,
)


class TestSimilarity:
    """Tests for edit distance and similarity scores."""

    def test_levenshtein_distance(self):
        assert calculate_levenshtein_distance("kitten", "sitting") == 3
        assert calculate_levenshtein_distance("", "abc") == 3
        assert calculate_levenshtein_distance("abc", "abc") == 0

    def test_similarity_values(self):
        assert calculate_similarity("abc", "abc") == 1.0
        assert calculate_similarity("abcd", "abce") == 0.75
        assert calculate_similarity("abc", "") == 0.0

    def test_two_empty_strings_are_identical(self):
        assert calculate_similarity("", "") == 1.0

    @pytest.mark.parametrize(
        "a,b",
        [
            ("bolt technology", "bolt technlgy"),
            ("ubisoft", "ubisoft montreal"),
            ("", "acme"),
            ("santa monica", "sony santa monica"),
        ],
    )
    def test_symmetric(self, a, b):
        assert calculate_similarity(a, b) == calculate_similarity(b, a)


class TestFindAllMatches:
    """End-to-end matching of one company against a pool."""

    def test_exact_after_normalization(self, balanced):
        matches = find_all_matches("Ubisoft Montreal", ["Ubisoft Montréal Studio"], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_EXACT
        assert matches[0].confidence == 1.0
        assert matches[0].normalized_original == "ubisoft montreal"
        assert matches[0].normalized_candidate == "ubisoft montreal"

    def test_exact_and_typo_ranked_by_confidence(self, balanced):
        matches = find_all_matches(
            "Ubisoft Montreal",
            ["Ubisot Montral Studio", "Ubisoft Montréal Studio"],
            balanced,
        )
        assert [m.candidate for m in matches] == ["Ubisoft Montréal Studio", "Ubisot Montral Studio"]
        assert matches[0].method == METHOD_EXACT
        assert matches[1].method == METHOD_HIGH_SIMILARITY
        assert matches[1].confidence == 0.875

    def test_high_similarity_typo(self, balanced):
        matches = find_all_matches("Bolt Technology", ["Bolt Technlgy"], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_HIGH_SIMILARITY
        assert matches[0].confidence >= 0.85

    def test_token_match_word_order(self, balanced):
        matches = find_all_matches("Ubisoft Montreal", ["Montreal Ubisoft"], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_TOKEN
        assert matches[0].confidence == 1.0

    def test_partial_match_with_aggressive_preset(self, aggressive):
        matches = find_all_matches("Santa Monica Studio", ["Sony Santa Monica"], aggressive)
        assert len(matches) == 1
        assert matches[0].method == METHOD_PARTIAL
        assert matches[0].confidence == 0.706

    def test_conservative_preset_filters_borderline(self, conservative):
        assert find_all_matches("Getir", ["Getir Brand"], conservative) == []

    def test_geographic_boost_lifts_token_match(self, balanced):
        # Jaccard 0.75 plus the regional boost clears the 0.80 threshold
        matches = find_all_matches("Acme Widgets Robotics", ["Acme Widgets Robotics Canada"], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_TOKEN
        assert matches[0].confidence == 0.85

    def test_no_boost_for_non_geographic_difference(self, balanced):
        matches = find_all_matches("Acme Widgets Robotics", ["Acme Widgets Robotics Hammer"], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_PARTIAL
        assert matches[0].confidence == 0.75

    def test_identical_normalized_forms_keep_only_exact(self, balanced):
        # every layer scores 1.0 here; the exact layer wins the tie
        matches = find_all_matches("Acme", ["ACME Inc."], balanced)
        assert len(matches) == 1
        assert matches[0].method == METHOD_EXACT

    def test_self_is_excluded(self, balanced):
        matches = find_all_matches("Acme", ["Acme", "Acme Inc"], balanced)
        assert [m.candidate for m in matches] == ["Acme Inc"]

    def test_repeated_candidates_collapse(self, balanced):
        matches = find_all_matches("Acme", ["Acme Inc", "Acme Inc"], balanced)
        assert len(matches) == 1

    def test_truncates_to_max_results_in_pool_order(self):
        cfg = create_config("balanced", {"max_results_per_name": 2})
        matches = find_all_matches("Acme", ["Acme Inc", "Acme Ltd", "Acme Corp"], cfg)
        assert [m.candidate for m in matches] == ["Acme Inc", "Acme Ltd"]

    def test_threshold_is_inclusive(self):
        # Jaccard("getir", "getir brand") is exactly 0.5
        cfg = create_config("balanced", {"token_match": 0.5, "min_confidence": 0.5})
        matches = find_all_matches("Getir", ["Getir Brand"], cfg)
        assert len(matches) == 1
        assert matches[0].method == METHOD_TOKEN
        assert matches[0].confidence == 0.5

    def test_just_above_threshold_excludes(self):
        cfg = create_config("balanced", {"token_match": 0.51, "min_confidence": 0.5})
        assert find_all_matches("Getir", ["Getir Brand"], cfg) == []

    def test_min_confidence_filters_accepted_matches(self):
        cfg = create_config("balanced", {"token_match": 0.5, "min_confidence": 0.6})
        assert find_all_matches("Getir", ["Getir Brand"], cfg) == []

    def test_empty_normalized_names_do_not_crash(self, balanced):
        matches = find_all_matches("Inc.", ["Ltd", "Acme"], balanced)
        # two empty forms are identical under the similarity formula,
        # but never an exact or partial match
        assert [(m.candidate, m.method) for m in matches] == [("Ltd", METHOD_HIGH_SIMILARITY)]

    def test_repeatable_output(self, aggressive):
        pool = [
            "Ubisoft Montréal Studio",
            "Montreal Ubisoft",
            "Ubisoft Paris",
            "Ubisot Montral",
            "Ubisoft",
            "Sony Santa Monica",
        ]
        first = find_all_matches("Ubisoft Montreal", pool, aggressive)
        for _ in range(5):
            assert find_all_matches("Ubisoft Montreal", pool, aggressive) == first

    def test_cache_is_filled(self, balanced):
        cache = {}
        find_all_matches("Acme", ["Acme Inc", "Other"], balanced, cache)
        assert set(cache) == {"Acme", "Acme Inc", "Other"}
        assert cache["Acme Inc"].text == "acme"

    def test_match_to_dict(self, balanced):
        match = find_all_matches("Acme", ["Acme Inc"], balanced)[0]
        assert match.to_dict() == {
            "original": "Acme",
            "candidate": "Acme Inc",
            "confidence": 1.0,
            "method": METHOD_EXACT,
            "normalized_original": "acme",
            "normalized_candidate": "acme",
        }


class TestLayers:
    """Each layer on its own, before reconciliation."""

    def test_exact_layer(self, balanced):
        matches = find_exact_matches("Acme", ["Acme Ltd", "Acme Widgets"], balanced)
        assert [m.candidate for m in matches] == ["Acme Ltd"]

    def test_exact_layer_ignores_empty_forms(self, balanced):
        assert find_exact_matches("Inc", ["Ltd"], balanced) == []

    def test_similarity_layer(self, balanced):
        matches = find_high_similarity_matches("Bolt Technology", ["Bolt Technlgy", "Volt"], balanced)
        assert [m.candidate for m in matches] == ["Bolt Technlgy"]
        assert matches[0].confidence == 0.867

    def test_token_layer(self, balanced):
        matches = find_token_matches("Ubisoft Montreal", ["Montreal Ubisoft", "Ubisoft"], balanced)
        assert [m.candidate for m in matches] == ["Montreal Ubisoft"]

    def test_partial_layer(self, aggressive):
        matches = find_partial_matches("Santa Monica", ["Sony Santa Monica", "Monica"], aggressive)
        assert [m.candidate for m in matches] == ["Sony Santa Monica"]

    def test_partial_layer_skips_empty_forms(self):
        cfg = create_config("balanced", {"partial_match": 0.0})
        assert find_partial_matches("Inc", ["Acme", "Ltd"], cfg) == []

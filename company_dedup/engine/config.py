from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional

from ..errors import InvalidConfigurationError
from ..settings import DEFAULT_PRESET


@dataclass(frozen=True)
class DedupConfig:
    # Layer thresholds (0-1, where 1 is an exact match)
    high_similarity: float  # Levenshtein-based matching
    token_match: float  # word-level matching
    partial_match: float  # substring matching
    min_confidence: float  # minimum confidence kept in results
    max_results_per_name: int
    # Normalization options
    remove_suffixes: bool = True
    handle_accents: bool = True
    remove_numbers: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


THRESHOLD_FIELDS = ("high_similarity", "token_match", "partial_match", "min_confidence")
TOGGLE_FIELDS = ("remove_suffixes", "handle_accents", "remove_numbers")
CONFIG_FIELDS = tuple(f.name for f in fields(DedupConfig))


CONFIG_PRESETS: Dict[str, DedupConfig] = {
    "conservative": DedupConfig(
        high_similarity=0.92,
        token_match=0.88,
        partial_match=0.85,
        min_confidence=0.85,
        max_results_per_name=10,
    ),
    "balanced": DedupConfig(
        high_similarity=0.85,
        token_match=0.80,
        partial_match=0.70,
        min_confidence=0.75,
        max_results_per_name=10,
    ),
    "aggressive": DedupConfig(
        high_similarity=0.78,
        token_match=0.70,
        partial_match=0.60,
        min_confidence=0.60,
        max_results_per_name=15,
    ),
}

DEFAULT_CONFIG = CONFIG_PRESETS[DEFAULT_PRESET]


def validate_config(cfg: DedupConfig) -> List[str]:
    """Return every violated field as a message. Empty list means valid."""
    errs: List[str] = []
    for name in THRESHOLD_FIELDS:
        value = getattr(cfg, name)
        if isinstance(value, bool) or not isinstance(value, Real):
            errs.append(f"{name} must be a number between 0 and 1")
        elif not 0 <= value <= 1:
            errs.append(f"{name} must be between 0 and 1")

    limit = cfg.max_results_per_name
    if isinstance(limit, bool) or not isinstance(limit, int):
        errs.append("max_results_per_name must be an integer > 0")
    elif limit <= 0:
        errs.append("max_results_per_name must be > 0")

    for name in TOGGLE_FIELDS:
        if not isinstance(getattr(cfg, name), bool):
            errs.append(f"{name} must be true or false")
    return errs


def ensure_valid(cfg: DedupConfig) -> DedupConfig:
    errs = validate_config(cfg)
    if errs:
        raise InvalidConfigurationError(errs)
    return cfg


def create_config(
    preset: str = DEFAULT_PRESET,
    overrides: Optional[Mapping[str, Any]] = None,
) -> DedupConfig:
    """
    Build a validated config from a named preset with optional field overrides.
    All problems (unknown preset, unknown fields, out-of-range values) are
    reported together.
    """
    errs: List[str] = []
    base = CONFIG_PRESETS.get(preset)
    if base is None:
        errs.append(
            f"preset must be one of {', '.join(CONFIG_PRESETS)} (got {preset!r})"
        )
        base = DEFAULT_CONFIG

    known: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key not in CONFIG_FIELDS:
            errs.append(f"unknown config field {key!r}")
        elif value is not None:
            known[key] = value

    cfg = replace(base, **known)
    errs.extend(validate_config(cfg))
    if errs:
        raise InvalidConfigurationError(errs)
    return cfg


def describe_config(cfg: DedupConfig) -> str:
    return (
        "Configuration:\n"
        "  Thresholds:\n"
        f"    - High similarity >= {cfg.high_similarity * 100:.0f}%\n"
        f"    - Token match     >= {cfg.token_match * 100:.0f}%\n"
        f"    - Partial match   >= {cfg.partial_match * 100:.0f}%\n"
        f"  Normalization: remove_suffixes={cfg.remove_suffixes}, "
        f"handle_accents={cfg.handle_accents}, remove_numbers={cfg.remove_numbers}\n"
        f"  Output: min_confidence >= {cfg.min_confidence * 100:.0f}%, "
        f"max_results_per_name={cfg.max_results_per_name}"
    )

from .config import (
    CONFIG_PRESETS,
    DEFAULT_CONFIG,
    DedupConfig,
    create_config,
    describe_config,
    validate_config,
)
from .deduplicator import (
    ClaimState,
    CompanyDeduplicator,
    DeduplicationResult,
    DuplicateGroup,
)
from .matcher import (
    CompanyMatch,
    calculate_levenshtein_distance,
    calculate_similarity,
    find_all_matches,
)
from .name_normalizer import (
    calculate_token_overlap,
    extract_tokens,
    is_geographic_variant,
    normalize_company_name,
)

__all__ = [
    "CONFIG_PRESETS",
    "DEFAULT_CONFIG",
    "DedupConfig",
    "create_config",
    "describe_config",
    "validate_config",
    "ClaimState",
    "CompanyDeduplicator",
    "DeduplicationResult",
    "DuplicateGroup",
    "CompanyMatch",
    "calculate_levenshtein_distance",
    "calculate_similarity",
    "find_all_matches",
    "calculate_token_overlap",
    "extract_tokens",
    "is_geographic_variant",
    "normalize_company_name",
]

"""Find probable duplicate company names in a list."""

from .engine import (
    CONFIG_PRESETS,
    DEFAULT_CONFIG,
    CompanyDeduplicator,
    CompanyMatch,
    DeduplicationResult,
    DedupConfig,
    DuplicateGroup,
    create_config,
    describe_config,
    find_all_matches,
    normalize_company_name,
    validate_config,
)
from .errors import DedupError, EmptyInputError, InputReadError, InvalidConfigurationError

__version__ = "1.0.0"

__all__ = [
    "CONFIG_PRESETS",
    "DEFAULT_CONFIG",
    "CompanyDeduplicator",
    "CompanyMatch",
    "DeduplicationResult",
    "DedupConfig",
    "DuplicateGroup",
    "create_config",
    "describe_config",
    "find_all_matches",
    "normalize_company_name",
    "validate_config",
    "DedupError",
    "EmptyInputError",
    "InputReadError",
    "InvalidConfigurationError",
]

PRESET_NAMES = [
    "conservative",  # Fewer, safer groups
    "balanced",  # Recommended default
    "aggressive",  # More groups, more false positives
]

DEFAULT_PRESET = "balanced"

OUTPUT_FORMATS = ["text", "json", "csv", "xlsx"]

DEFAULT_OUTPUT_FORMAT = "text"

THEMES = ["dark", "light"]

DEFAULT_EXPORT_BASE = "duplicate_groups"

"""
Application-wide constants
"""

# Match method tags
METHOD_EXACT = "exact_after_normalization"
METHOD_HIGH_SIMILARITY = "high_similarity"
METHOD_TOKEN = "token_match"
METHOD_PARTIAL = "partial_match"

# Strategy evaluation order (also the reconciliation tie-break order)
MATCH_METHODS = (
    METHOD_EXACT,
    METHOD_HIGH_SIMILARITY,
    METHOD_TOKEN,
    METHOD_PARTIAL,
)

# Business / legal / industry words dropped when remove_suffixes is on.
# Matched as whole tokens only.
BUSINESS_SUFFIXES = frozenset({
    "ltd", "limited", "inc", "incorporated", "corp", "corporation", "co", "company",
    "llc", "plc",
    "studio", "studios", "games", "entertainment", "interactive", "digital",
    "software", "technologies", "tech", "systems", "solutions", "services",
    "group", "holdings", "ventures", "partners", "associates", "enterprises",
})

# Regional terms that usually mark a different office of the same company
GEOGRAPHIC_TERMS = frozenset({
    "usa", "us", "america", "american", "canada", "canadian", "uk", "britain", "british",
    "europe", "european", "asia", "asian", "japan", "japanese", "china", "chinese",
    "france", "french", "germany", "german", "italy", "italian", "spain", "spanish",
    "montreal", "toronto", "vancouver", "london", "paris", "berlin", "tokyo", "shanghai",
    "emea", "benelux", "oecd",
})

# Token-match boost for names differing only by geographic terms
GEOGRAPHIC_BOOST = 0.10

# Confidence bands (used for reporting and export colouring)
CONFIDENCE_HIGH_THRESHOLD = 0.90
CONFIDENCE_MEDIUM_THRESHOLD = 0.80
CONFIDENCE_LOW_THRESHOLD = 0.70

# Decimal places kept on a match confidence
CONFIDENCE_DECIMALS = 3

# Progress update frequency (update every N% instead of every name)
PROGRESS_UPDATE_INTERVAL_PERCENT = 1

# Column labels for tabular output
COL_GROUP = "Group"
COL_ORIGINAL = "Original"
COL_DUPLICATE = "Duplicate"
COL_CONFIDENCE = "Confidence"
COL_METHOD = "Method"
COL_NORM_ORIGINAL = "Normalized Original"
COL_NORM_DUPLICATE = "Normalized Duplicate"

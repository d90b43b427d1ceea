from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from rapidfuzz.distance import Levenshtein

from .config import DedupConfig
from .name_normalizer import (
    NormalizedName,
    calculate_token_overlap,
    is_geographic_variant,
    prepare_name,
)
from ..constants import (
    CONFIDENCE_DECIMALS,
    GEOGRAPHIC_BOOST,
    METHOD_EXACT,
    METHOD_HIGH_SIMILARITY,
    METHOD_PARTIAL,
    METHOD_TOKEN,
)

MatchMethod = str


@dataclass(frozen=True)
class CompanyMatch:
    original: str  # the query company name
    candidate: str  # the potential duplicate
    confidence: float  # 0-1, rounded
    method: MatchMethod  # which layer found it
    normalized_original: str
    normalized_candidate: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


NormalizedCache = Dict[str, NormalizedName]


def calculate_levenshtein_distance(a: str, b: str) -> int:
    """Single-character edits (insert, delete, substitute; cost 1 each)."""
    return Levenshtein.distance(a, b)


def calculate_similarity(a: str, b: str) -> float:
    """1 - distance / longest length. Two empty strings are identical (1.0)."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - calculate_levenshtein_distance(a, b)) / max_len


def _make_match(
    original: NormalizedName,
    candidate: NormalizedName,
    confidence: float,
    method: MatchMethod,
) -> CompanyMatch:
    return CompanyMatch(
        original=original.raw,
        candidate=candidate.raw,
        confidence=round(confidence, CONFIDENCE_DECIMALS),
        method=method,
        normalized_original=original.text,
        normalized_candidate=candidate.text,
    )


def _normalize_all(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache],
) -> tuple[NormalizedName, List[NormalizedName]]:
    """Normalize the query and the candidate pool once, reusing `cache`."""
    if cache is None:
        cache = {}

    def get(raw: str) -> NormalizedName:
        norm = cache.get(raw)
        if norm is None:
            norm = prepare_name(raw, cfg)
            cache[raw] = norm
        return norm

    query = get(original)
    pool = [get(c) for c in candidates if c != original]
    return query, pool


# ---------------------------------------------------------------------------
# Matching layers: exact, then high similarity, then shared words, then
# substrings. Each one sees the whole pool, the query itself excluded.
# ---------------------------------------------------------------------------

def _exact_layer(query: NormalizedName, pool: List[NormalizedName]) -> List[CompanyMatch]:
    results = []
    for cand in pool:
        if query.text and cand.text == query.text:
            results.append(_make_match(query, cand, 1.0, METHOD_EXACT))
    return results


def _similarity_layer(
    query: NormalizedName, pool: List[NormalizedName], cfg: DedupConfig
) -> List[CompanyMatch]:
    results = []
    for cand in pool:
        score = calculate_similarity(query.text, cand.text)
        if score >= cfg.high_similarity:
            results.append(_make_match(query, cand, score, METHOD_HIGH_SIMILARITY))
    return results


def _token_layer(
    query: NormalizedName, pool: List[NormalizedName], cfg: DedupConfig
) -> List[CompanyMatch]:
    results = []
    for cand in pool:
        overlap = calculate_token_overlap(query.text, cand.text)
        # same company, different office
        if is_geographic_variant(query.text, cand.text):
            overlap = min(1.0, overlap + GEOGRAPHIC_BOOST)
        if overlap >= cfg.token_match:
            results.append(_make_match(query, cand, overlap, METHOD_TOKEN))
    return results


def _partial_layer(
    query: NormalizedName, pool: List[NormalizedName], cfg: DedupConfig
) -> List[CompanyMatch]:
    results = []
    for cand in pool:
        if len(query.text) <= len(cand.text):
            shorter, longer = query.text, cand.text
        else:
            shorter, longer = cand.text, query.text
        if not shorter or shorter not in longer:
            continue
        confidence = len(shorter) / len(longer)
        if confidence >= cfg.partial_match:
            results.append(_make_match(query, cand, confidence, METHOD_PARTIAL))
    return results


def find_exact_matches(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache] = None,
) -> List[CompanyMatch]:
    query, pool = _normalize_all(original, candidates, cfg, cache)
    return _exact_layer(query, pool)


def find_high_similarity_matches(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache] = None,
) -> List[CompanyMatch]:
    query, pool = _normalize_all(original, candidates, cfg, cache)
    return _similarity_layer(query, pool, cfg)


def find_token_matches(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache] = None,
) -> List[CompanyMatch]:
    query, pool = _normalize_all(original, candidates, cfg, cache)
    return _token_layer(query, pool, cfg)


def find_partial_matches(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache] = None,
) -> List[CompanyMatch]:
    query, pool = _normalize_all(original, candidates, cfg, cache)
    return _partial_layer(query, pool, cfg)


def reconcile_matches(
    matches: Iterable[CompanyMatch],
    pool_order: Mapping[str, int],
    cfg: DedupConfig,
) -> List[CompanyMatch]:
    """
    Keep the best match per candidate, drop those under min_confidence,
    rank by confidence and truncate.

    Matches must arrive in layer order: on equal confidence the earlier
    layer wins. Equal-confidence candidates keep their pool order.
    """
    best: Dict[str, CompanyMatch] = {}
    for match in matches:
        existing = best.get(match.candidate)
        if existing is None or match.confidence > existing.confidence:
            best[match.candidate] = match

    kept = [m for m in best.values() if m.confidence >= cfg.min_confidence]
    kept.sort(key=lambda m: (-m.confidence, pool_order[m.candidate]))
    return kept[: cfg.max_results_per_name]


def find_all_matches(
    original: str,
    candidates: Iterable[str],
    cfg: DedupConfig,
    cache: Optional[NormalizedCache] = None,
) -> List[CompanyMatch]:
    """
    Run all matching layers for one company against a candidate pool and
    return unique matches ordered by confidence.

    `cache` maps raw names to their NormalizedName; pass the same dict across
    calls with the same config to avoid normalizing a name more than once.
    """
    candidates = list(candidates)
    query, pool = _normalize_all(original, candidates, cfg, cache)

    pool_order: Dict[str, int] = {}
    for idx, cand in enumerate(pool):
        pool_order.setdefault(cand.raw, idx)

    combined: List[CompanyMatch] = []
    combined.extend(_exact_layer(query, pool))
    combined.extend(_similarity_layer(query, pool, cfg))
    combined.extend(_token_layer(query, pool, cfg))
    combined.extend(_partial_layer(query, pool, cfg))

    return reconcile_matches(combined, pool_order, cfg)

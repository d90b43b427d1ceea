from __future__ import annotations
import re
import unicodedata
from dataclasses import dataclass
from typing import List, Tuple

from ..constants import BUSINESS_SUFFIXES, GEOGRAPHIC_TERMS
from .config import DedupConfig

_DIGITS = re.compile(r"\d+")
# anything that is not a letter, digit or whitespace (underscore included)
_PUNCT = re.compile(r"[^\w\s]|_")
_SPACES = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    text = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in text if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", text)


def basic_clean(text: str) -> str:
    # punctuation becomes a word break, then squeeze whitespace
    text = _PUNCT.sub(" ", text)
    text = _SPACES.sub(" ", text)
    return text.strip()


def remove_suffixes(text: str) -> str:
    """Drop whole-word business suffixes ("inc", "ltd", "studio", ...)."""
    words = [w for w in text.split(" ") if w and w.lower() not in BUSINESS_SUFFIXES]
    return " ".join(words)


def normalize_company_name(name: str, cfg: DedupConfig) -> str:
    """
    Canonical comparable form of a company name.

    Steps run in a fixed order: lowercase/trim, accent folding, digit
    removal, punctuation collapse, suffix removal. Suffixes go last so that
    punctuation cannot hide a suffix token ("Acme,Inc." -> "acme").
    """
    normalized = name.lower().strip()

    if cfg.handle_accents:
        normalized = strip_accents(normalized)

    if cfg.remove_numbers:
        normalized = _DIGITS.sub("", normalized)

    normalized = basic_clean(normalized)

    if cfg.remove_suffixes:
        normalized = remove_suffixes(normalized)

    return normalized


def extract_tokens(normalized: str) -> List[str]:
    """Sorted distinct words of a normalized name."""
    return sorted({t for t in normalized.split(" ") if t})


def calculate_token_overlap(name1: str, name2: str) -> float:
    """Jaccard index of the two token sets (0 when both are empty)."""
    tokens1 = set(extract_tokens(name1))
    tokens2 = set(extract_tokens(name2))
    union = tokens1 | tokens2
    if not union:
        return 0.0
    return len(tokens1 & tokens2) / len(union)


def is_geographic_variant(name1: str, name2: str) -> bool:
    """
    True when the names differ only by regional terms
    ("Ubisoft Montreal" vs "Ubisoft Paris"). Identical token sets are not
    variants.
    """
    diff = set(extract_tokens(name1)) ^ set(extract_tokens(name2))
    return bool(diff) and all(t in GEOGRAPHIC_TERMS for t in diff)


@dataclass(frozen=True)
class NormalizedName:
    """Pre-computed normalized data for one raw name"""
    raw: str
    text: str
    tokens: Tuple[str, ...]


def prepare_name(raw: str, cfg: DedupConfig) -> NormalizedName:
    text = normalize_company_name(raw, cfg)
    return NormalizedName(raw=raw, text=text, tokens=tuple(extract_tokens(text)))

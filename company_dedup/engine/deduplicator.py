from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import DEFAULT_CONFIG, DedupConfig, create_config, ensure_valid
from .matcher import CompanyMatch, NormalizedCache, find_all_matches
from ..constants import PROGRESS_UPDATE_INTERVAL_PERCENT

logger = logging.getLogger(__name__)


class ClaimState(Enum):
    UNPROCESSED = "unprocessed"
    REPRESENTATIVE = "representative"
    CLAIMED_AS_MATCH = "claimed_as_match"


@dataclass(frozen=True)
class DuplicateGroup:
    original: str  # the representative company name
    duplicates: Tuple[CompanyMatch, ...]  # ordered by descending confidence

    @property
    def total_matches(self) -> int:
        return len(self.duplicates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "duplicates": [m.to_dict() for m in self.duplicates],
            "total_matches": self.total_matches,
        }


@dataclass(frozen=True)
class DeduplicationResult:
    total_companies: int  # distinct non-blank names processed
    duplicate_groups: Tuple[DuplicateGroup, ...]
    processing_time_ms: int
    config: DedupConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_companies": self.total_companies,
            "duplicate_groups": [g.to_dict() for g in self.duplicate_groups],
            "processing_time_ms": self.processing_time_ms,
            "config": self.config.to_dict(),
        }


def unique_names(names: Iterable[str]) -> List[str]:
    """Trimmed, non-blank names, first occurrence kept, input order preserved."""
    seen = set()
    out = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            out.append(name)
    return out


class CompanyDeduplicator:
    """
    Groups probable duplicate company names.

    Grouping is a greedy single pass: names are visited in input order and
    the first unclaimed name to find matches becomes the representative of
    its group. Its matches are claimed and never start a group of their
    own, even where they would have produced a different group. The result
    therefore depends on input order and is not an equivalence-class
    clustering.
    """

    def __init__(self, config: DedupConfig = DEFAULT_CONFIG):
        self._config = ensure_valid(config)

    def get_config(self) -> DedupConfig:
        return self._config

    def set_config(self, config: DedupConfig) -> None:
        """Replace configuration entirely (validated first)."""
        self._config = ensure_valid(config)

    def use_preset(self, preset: str, overrides: Optional[Mapping[str, Any]] = None) -> None:
        self.set_config(create_config(preset, overrides))

    def find_duplicates(
        self,
        companies: Iterable[str],
        progress_cb: Optional[Callable[[int], None]] = None,
    ) -> DeduplicationResult:
        start = time.perf_counter()
        cfg = self._config

        names = unique_names(companies)
        logger.debug(f"{len(names)} unique companies")

        state: Dict[str, ClaimState] = {n: ClaimState.UNPROCESSED for n in names}
        cache: NormalizedCache = {}
        groups: List[DuplicateGroup] = []

        total = len(names)
        step = max(1, total * PROGRESS_UPDATE_INTERVAL_PERCENT // 100)

        for i, company in enumerate(names):
            if state[company] is ClaimState.UNPROCESSED:
                matches = find_all_matches(company, names, cfg, cache)
                if matches:
                    groups.append(DuplicateGroup(original=company, duplicates=tuple(matches)))
                    state[company] = ClaimState.REPRESENTATIVE
                    for m in matches:
                        if state[m.candidate] is ClaimState.UNPROCESSED:
                            state[m.candidate] = ClaimState.CLAIMED_AS_MATCH
                    logger.debug(f"Group {len(groups)}: {company!r} with {len(matches)} match(es)")

            # Throttled progress update
            if progress_cb is not None and ((i + 1) % step == 0 or i + 1 == total):
                progress_cb(int((i + 1) * 100 / total))

        elapsed_ms = int(round((time.perf_counter() - start) * 1000))
        logger.info(
            f"Found {len(groups)} duplicate group(s) among {total} companies in {elapsed_ms}ms"
        )
        return DeduplicationResult(
            total_companies=total,
            duplicate_groups=tuple(groups),
            processing_time_ms=elapsed_ms,
            config=cfg,
        )

    def find_duplicates_for_company(
        self, company: str, candidates: Iterable[str]
    ) -> List[CompanyMatch]:
        """Matches for a single company, without grouping."""
        company = company.strip()
        if not company:
            return []
        return find_all_matches(company, unique_names(candidates), self._config)

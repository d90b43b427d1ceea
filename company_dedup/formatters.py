from __future__ import annotations
import json
import os
from typing import List

import pandas as pd

from .constants import (
    COL_CONFIDENCE,
    COL_DUPLICATE,
    COL_GROUP,
    COL_METHOD,
    COL_NORM_DUPLICATE,
    COL_NORM_ORIGINAL,
    COL_ORIGINAL,
    CONFIDENCE_HIGH_THRESHOLD,
    CONFIDENCE_LOW_THRESHOLD,
    CONFIDENCE_MEDIUM_THRESHOLD,
)
from .engine import DeduplicationResult
from .errors import UnsupportedFormatError

CSV_COLUMNS = [COL_ORIGINAL, COL_DUPLICATE, COL_CONFIDENCE, COL_METHOD]


def confidence_band(score: float) -> str:
    """Reporting band for a match confidence."""
    if score >= CONFIDENCE_HIGH_THRESHOLD:
        return "High"
    elif score >= CONFIDENCE_MEDIUM_THRESHOLD:
        return "Medium"
    elif score >= CONFIDENCE_LOW_THRESHOLD:
        return "Low"
    return "Very Low"


def results_to_dataframe(result: DeduplicationResult) -> pd.DataFrame:
    """One row per (representative, duplicate) pair."""
    rows: List[dict] = []
    for group_no, group in enumerate(result.duplicate_groups, start=1):
        for m in group.duplicates:
            rows.append(
                {
                    COL_GROUP: group_no,
                    COL_ORIGINAL: group.original,
                    COL_DUPLICATE: m.candidate,
                    COL_CONFIDENCE: m.confidence,
                    COL_METHOD: m.method,
                    COL_NORM_ORIGINAL: m.normalized_original,
                    COL_NORM_DUPLICATE: m.normalized_candidate,
                }
            )
    return pd.DataFrame(
        rows,
        columns=[
            COL_GROUP,
            COL_ORIGINAL,
            COL_DUPLICATE,
            COL_CONFIDENCE,
            COL_METHOD,
            COL_NORM_ORIGINAL,
            COL_NORM_DUPLICATE,
        ],
    )


def format_text(result: DeduplicationResult) -> str:
    out = []
    for group in result.duplicate_groups:
        out.append(f"\n{group.original}\n")
        for m in group.duplicates:
            out.append(f"  -> {m.candidate}  ({m.confidence * 100:.1f}%)\n")
    return "".join(out)


def format_csv(result: DeduplicationResult) -> str:
    df = results_to_dataframe(result)[CSV_COLUMNS]
    return df.to_csv(index=False, lineterminator="\n")


def format_json(result: DeduplicationResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


_RENDERERS = {
    "text": format_text,
    "csv": format_csv,
    "json": format_json,
}


def render(result: DeduplicationResult, fmt: str) -> str:
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unknown output format {fmt!r} (expected one of {', '.join(_RENDERERS)})"
        ) from None
    return renderer(result)


def write_output(path: str, data: str) -> None:
    """Write results to `path`, creating the parent directory if needed."""
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(data)

from __future__ import annotations
import logging
import os
from typing import Any, Dict

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.worksheet.worksheet import Worksheet

from ..constants import COL_CONFIDENCE
from ..engine import DeduplicationResult
from ..formatters import confidence_band, results_to_dataframe
from ..settings import DEFAULT_EXPORT_BASE

PLUGIN_NAME = "Export Customizer"
PLUGIN_DESCRIPTION = (
    "Creates an Excel workbook with duplicate and summary sheets, "
    "color-coded by confidence band."
)
PLUGIN_STAGE = "post_match"

logger = logging.getLogger(__name__)

BAND_FILLS = {
    "High": PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
    "Medium": PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
    "Low": PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"),
    "Very Low": PatternFill(start_color="FF9999", end_color="FF9999", fill_type="solid"),
}


def _autosize(ws: Worksheet, df: pd.DataFrame) -> None:
    # Estimate width from header and a sample of values
    for idx, col_name in enumerate(df.columns, start=1):
        max_len = len(str(col_name))
        if len(df) > 0:
            sample_len = max((len(str(v)) for v in df[col_name].head(50).values), default=0)
            max_len = max(max_len, sample_len)
        ws.column_dimensions[get_column_letter(idx)].width = min(max(max_len + 2, 10), 50)


def _write_duplicates_sheet(ws: Worksheet, df: pd.DataFrame) -> None:
    for r in dataframe_to_rows(df, index=False, header=True):
        ws.append(r)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    conf_col_idx = list(df.columns).index(COL_CONFIDENCE) + 1
    for row in ws.iter_rows(min_row=2):
        value = row[conf_col_idx - 1].value
        if value is None:
            continue
        fill = BAND_FILLS[confidence_band(float(value))]
        for cell in row:
            cell.fill = fill
    _autosize(ws, df)


def _write_summary_sheet(ws: Worksheet, result: DeduplicationResult) -> None:
    grouped = sum(1 + g.total_matches for g in result.duplicate_groups)
    rows = [
        ("Total companies", result.total_companies),
        ("Duplicate groups", len(result.duplicate_groups)),
        ("Names in groups (incl. repeats)", grouped),
        ("Processing time (ms)", result.processing_time_ms),
    ]
    rows.extend((f"config.{k}", v) for k, v in result.config.to_dict().items())
    ws.append(["Field", "Value"])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for key, value in rows:
        ws.append([key, value])
    ws.column_dimensions["A"].width = 34
    ws.column_dimensions["B"].width = 16


def export_workbook(result: DeduplicationResult, path: str) -> str:
    """Write the result to an .xlsx workbook and return its path."""
    df = results_to_dataframe(result)

    wb = Workbook()
    ws_main = wb.active
    ws_main.title = "Duplicates"
    _write_duplicates_sheet(ws_main, df)
    _write_summary_sheet(wb.create_sheet("Summary"), result)

    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    wb.save(path)
    logger.info(f"Exported Excel to {path}")
    return path


def post_match(result: DeduplicationResult, ctx: Dict[str, Any]) -> None:
    export_folder = ctx.get("export_folder") or ""
    base = ctx.get("export_base") or DEFAULT_EXPORT_BASE
    log = ctx.get("log") or (lambda msg: None)

    if not export_folder or not os.path.isdir(export_folder):
        log("[ExportCustomizer] No valid export folder; skipping.")
        return

    path = os.path.join(export_folder, f"{base}.xlsx")
    try:
        export_workbook(result, path)
        log(f"[ExportCustomizer] Exported Excel to {path}")
    except OSError as e:
        log(f"[ExportCustomizer] Failed to save Excel: {e}")

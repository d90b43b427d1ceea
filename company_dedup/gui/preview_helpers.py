from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QTableWidget, QTableWidgetItem

from ..constants import COL_CONFIDENCE
from ..formatters import confidence_band

BAND_COLORS = {
    "High": QColor("#2e7d32"),
    "Medium": QColor("#f9a825"),
    "Low": QColor("#ef6c00"),
    "Very Low": QColor("#c62828"),
}


def populate_table_from_dataframe(
    table: QTableWidget,
    df: Optional[pd.DataFrame],
    preferred_columns: Optional[Iterable[str]] = None,
    max_rows: Optional[int] = 5,
) -> None:
    """
    Fill a QTableWidget from a DataFrame (first `max_rows` rows, all when None).
    A Confidence column, if shown, is tinted by confidence band.
    """
    if df is None or df.empty:
        table.setRowCount(0)
        table.setColumnCount(0)
        return

    if preferred_columns:
        cols = [c for c in preferred_columns if c in df.columns]
        df_preview = df[cols] if cols else df
    else:
        df_preview = df

    df_head = df_preview if max_rows is None else df_preview.head(max_rows)
    columns = [str(c) for c in df_head.columns]
    conf_idx = columns.index(COL_CONFIDENCE) if COL_CONFIDENCE in columns else None

    table.setColumnCount(len(columns))
    table.setRowCount(len(df_head.index))
    table.setHorizontalHeaderLabels(columns)

    for row_idx, (_, row) in enumerate(df_head.iterrows()):
        for col_idx, value in enumerate(row):
            item = QTableWidgetItem("" if value is None else str(value))
            if col_idx == conf_idx and value is not None:
                item.setForeground(BAND_COLORS[confidence_band(float(value))])
            table.setItem(row_idx, col_idx, item)

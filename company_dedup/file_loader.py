from __future__ import annotations
import logging
import os
from typing import List, Optional
from zipfile import BadZipFile

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from .errors import EmptyInputError, InputReadError, UnsupportedFormatError

logger = logging.getLogger(__name__)

NAME_COLUMN = "Name"
SUPPORTED_EXTENSIONS = (".txt", ".csv", ".xlsx")


def read_table(path: str) -> pd.DataFrame:
    """
    Supports:
      - Plain text, one company name per line (LF or CRLF)
      - CSV (header row expected)
      - Excel .xlsx (header row expected)
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {os.path.abspath(path)}")

    ext = os.path.splitext(path)[1].lower()
    if ext and ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Unsupported input file type {ext!r} (expected one of {', '.join(SUPPORTED_EXTENSIONS)})"
        )

    try:
        if ext == ".xlsx":
            return pd.read_excel(path, dtype=str, keep_default_na=False)

        if ext == ".csv":
            try:
                return pd.read_csv(path, dtype=str, keep_default_na=False)
            except pd.errors.EmptyDataError:
                return pd.DataFrame()

        # Iterating the file splits on \n, \r\n and \r only
        with open(path, "r", encoding="utf-8-sig") as f:
            lines = [line.strip() for line in f]
        return pd.DataFrame({NAME_COLUMN: [line for line in lines if line]})
    except (ValueError, BadZipFile, InvalidFileException) as e:
        # ValueError covers UnicodeDecodeError and pandas ParserError
        raise InputReadError(f"Could not parse {path}: {e}") from e


def read_names(path: str, column: Optional[str] = None) -> List[str]:
    """
    Trimmed, non-blank company names from `column` (or the first column).
    Raises EmptyInputError when nothing usable is left.
    """
    df = read_table(path)
    if df.empty or len(df.columns) == 0:
        raise EmptyInputError(f"No company names found in {path}")

    if column:
        if column not in df.columns:
            # Try case-insensitive
            lower = {str(c).lower(): c for c in df.columns}
            if column.lower() not in lower:
                raise KeyError(f"Column {column!r} not found in {path}")
            column = lower[column.lower()]
        series = df[column]
    else:
        series = df.iloc[:, 0]

    names = [str(v).strip() for v in series.dropna().tolist()]
    names = [n for n in names if n]
    if not names:
        raise EmptyInputError(f"No company names found in {path}")

    logger.debug(f"Loaded {len(names)} names from {path}")
    return names

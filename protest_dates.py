#!/usr/bin/env python3
"""
PROTEST DATE RECONSTRUCTOR
==========================
Merges separate year/month/day fields into start_date / end_date.
A row whose components do not form a calendar date aborts the run.
"""

from datetime import date

import pandas as pd

from protest_core import DATE_BOUNDARIES, DateParseError


def make_date(year, month, day) -> date:
    """Build one calendar date. Raises DateParseError on anything invalid."""
    try:
        if any(pd.isna(v) for v in (year, month, day)):
            raise ValueError("missing component")
        parts = [float(v) for v in (year, month, day)]
        if any(p != int(p) for p in parts):
            raise ValueError("non-integer component")
        return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except (TypeError, ValueError) as e:
        raise DateParseError(f"Invalid date {year}-{month}-{day}: {e}") from e


def _boundary_dates(df: pd.DataFrame, name: str, cols: tuple) -> pd.Series:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing date column(s) for {name}: {missing}")
    parts = df[list(cols)].apply(pd.to_numeric, errors="coerce")
    parts.columns = ["year", "month", "day"]
    dates = pd.to_datetime(parts, errors="coerce")
    # to_datetime truncates fractional days; reject those as well
    fractional = (parts % 1 != 0).any(axis=1)
    bad = dates.isna() | fractional
    if bad.any():
        ids = df.loc[bad, "id"].tolist() if "id" in df.columns else df.index[bad].tolist()
        preview = ", ".join(str(i) for i in ids[:10])
        raise DateParseError(f"{bad.sum()} row(s) with invalid {name}: id {preview}", ids=ids)
    return dates


def reconstruct_dates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add start_date and end_date columns (datetime64).
    Raises DateParseError naming the offending ids; never returns partial output.
    """
    out = df.copy()
    for name, cols in DATE_BOUNDARIES.items():
        out[name] = _boundary_dates(df, name, cols)
    return out

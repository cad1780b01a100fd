#!/usr/bin/env python3
"""
PROTEST LOADER — Raw protest-event table
========================================
One row per protest: id, country, start/end year-month-day, participants text,
participants_category, protesterviolence, protesterdemand1..4, stateresponse1..7.

Usage:
  1. Download the protest export CSV (e.g. Mass Mobilization mmALL)
  2. Save to protest_data/mmALL.csv (or set PROTEST_RAW_PATH)
  3. Run: python protest_pipeline.py
"""

import os
from pathlib import Path

import pandas as pd

from protest_core import DATE_BOUNDARIES

SCRIPT_DIR = Path(__file__).resolve().parent
DATA_DIR = SCRIPT_DIR / "protest_data"
RAW_PATH = Path(os.environ.get("PROTEST_RAW_PATH", DATA_DIR / "mmALL.csv"))

REQUIRED_COLUMNS = [
    "id",
    "country",
    *[c for cols in DATE_BOUNDARIES.values() for c in cols],
    "participants",
    "participants_category",
    "protesterviolence",
]


def load_raw_protests(path: Path = RAW_PATH) -> pd.DataFrame:
    """Read the raw CSV. Falls back to latin-1 for exports that are not UTF-8."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"{path} not found. Save the raw protest export there or set PROTEST_RAW_PATH."
        )
    try:
        df = pd.read_csv(path, low_memory=False, dtype={"participants": str, "participants_category": str})
    except UnicodeDecodeError:
        df = pd.read_csv(
            path, low_memory=False, encoding="latin-1",
            dtype={"participants": str, "participants_category": str},
        )
    print(f"Protests loaded: {len(df)} rows, {len(df.columns)} columns")
    return df


def validate_raw(df: pd.DataFrame) -> pd.DataFrame:
    """Required columns present, id non-null and unique. Raises ValueError otherwise."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Raw protest table missing required column(s): {missing}")
    if df["id"].isna().any():
        raise ValueError(f"{df['id'].isna().sum()} row(s) with null id")
    dupes = df["id"].duplicated()
    if dupes.any():
        raise ValueError(f"{dupes.sum()} duplicated id value(s): {df.loc[dupes, 'id'].head(10).tolist()}")
    out = df.copy()
    out["id"] = out["id"].astype("int64")
    return out


def filter_protest_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Drop country-year placeholder rows (protest == 0) when the marker column exists."""
    if "protest" not in df.columns:
        return df
    kept = df[pd.to_numeric(df["protest"], errors="coerce") == 1]
    dropped = len(df) - len(kept)
    if dropped:
        print(f"  Dropped {dropped} non-protest placeholder row(s)")
    return kept.reset_index(drop=True)


def load_protests(path: Path = RAW_PATH) -> pd.DataFrame:
    """Load, validate and filter in one step."""
    return filter_protest_rows(validate_raw(load_raw_protests(path)))

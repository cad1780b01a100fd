#!/usr/bin/env python3
"""
PROTEST RECORD ASSEMBLER
========================
Fixed per-protest attributes (continent, dates, participants_range, ...)
joined 1:N with the dense action table on id.
Output column order is OUTPUT_COLUMNS; participants_range stays ordered.
"""

import pandas as pd

from protest_core import ACTION_COLUMNS, OUTPUT_COLUMNS, PROTEST_COLUMNS, DensificationError


def protest_attributes(df: pd.DataFrame) -> pd.DataFrame:
    """Select fixed attributes in output order. year falls back to startyear."""
    out = df.copy()
    if "year" not in out.columns:
        out["year"] = out["startyear"]
    missing = [c for c in PROTEST_COLUMNS if c not in out.columns]
    if missing:
        raise ValueError(f"Cannot assemble, missing protest column(s): {missing}")
    return out[PROTEST_COLUMNS]


def assemble(protests: pd.DataFrame, actions: pd.DataFrame) -> pd.DataFrame:
    """
    Final long-form table. Raises DensificationError unless every protest
    carries exactly one row per vocabulary pair.
    """
    fixed = protest_attributes(protests)
    if fixed["id"].duplicated().any():
        raise ValueError("Duplicate protest ids in fixed attributes")
    vocab_size = len(actions[["action_source", "action"]].drop_duplicates())
    tidy = fixed.merge(actions[["id"] + ACTION_COLUMNS], on="id", how="inner", validate="one_to_many")
    expected = len(fixed) * vocab_size
    if len(tidy) != expected:
        raise DensificationError(
            f"Assembled {len(tidy)} rows, expected {len(fixed)} protests x {vocab_size} actions = {expected}"
        )
    tidy = tidy.sort_values(["id", "action_source", "action"]).reset_index(drop=True)
    return tidy[OUTPUT_COLUMNS]

#!/usr/bin/env python3
"""
PROTEST CATEGORY RESOLVER
=========================
participants_range from the numeric estimate and the raw participants_category.
Raw label wins when present ("50-99" is repaired to "1-99"); otherwise the
bucket is derived from the estimate. Result is an ordered Categorical.
"""

from typing import Optional

import pandas as pd

from protest_core import (
    CATEGORY_REPAIRS,
    MISSING_RANGE,
    PARTICIPANT_RANGES,
    RANGE_THRESHOLDS,
)

PARTICIPANT_RANGE_DTYPE = pd.CategoricalDtype(categories=list(PARTICIPANT_RANGES), ordered=True)


def bucket_for_estimate(estimate) -> str:
    """
    Derive a bucket from a numeric estimate.
    Intervals are [lo, next lo) so fractional means (99.5) land in one bucket;
    5000-10000 includes 10000, >10000 is strictly above it.
    """
    if estimate is None or pd.isna(estimate):
        return MISSING_RANGE
    x = float(estimate)
    for i, (label, lo, hi) in enumerate(RANGE_THRESHOLDS):
        if hi is None:
            if x > lo:
                return label
            continue
        upper = RANGE_THRESHOLDS[i + 1][1]
        if lo <= x < upper or (x == hi and upper == hi):
            return label
    return MISSING_RANGE


def _clean_label(raw) -> Optional[str]:
    if raw is None or pd.isna(raw):
        return None
    label = str(raw).strip()
    return label or None


def resolve_category(estimate, raw_category) -> str:
    """One bucket per protest. Idempotent for any (estimate, raw) pair."""
    label = _clean_label(raw_category)
    if label is None:
        return bucket_for_estimate(estimate)
    label = CATEGORY_REPAIRS.get(label, label)
    if label not in PARTICIPANT_RANGES:
        return bucket_for_estimate(estimate)
    return label


def resolve_categories(df: pd.DataFrame) -> pd.Series:
    """participants_range for every row as an ordered Categorical."""
    raw = df["participants_category"] if "participants_category" in df.columns else pd.Series(None, index=df.index)
    unknown = sorted(
        {
            label
            for label in (_clean_label(r) for r in raw)
            if label is not None and CATEGORY_REPAIRS.get(label, label) not in PARTICIPANT_RANGES
        }
    )
    if unknown:
        print(f"  ⚠ Unknown participants_category label(s), using derived bucket: {unknown}")
    labels = [resolve_category(e, r) for e, r in zip(df["participants"], raw)]
    return pd.Series(labels, index=df.index, name="participants_range").astype(PARTICIPANT_RANGE_DTYPE)


def category_disagreements(df: pd.DataFrame) -> pd.DataFrame:
    """Rows where a raw label exists and differs from the derived bucket (reported, not repaired)."""
    derived = df["participants"].map(bucket_for_estimate)
    raw = df["participants_category"].map(_clean_label).map(lambda l: CATEGORY_REPAIRS.get(l, l) if l else l)
    mask = raw.notna() & derived.ne(MISSING_RANGE) & raw.ne(derived)
    out = df.loc[mask, ["id", "participants", "participants_category"]].copy()
    out["derived_range"] = derived[mask]
    return out

#!/usr/bin/env python3
"""
PROTEST PARTICIPANT ESTIMATOR — Ordered cascade over free-text counts
=====================================================================
participants text is prose: "500-700", "between 100 and 200", "300+",
"100s", "about 50 people", "over 200", "thousands".

Rules run in priority order; the first rule that yields a number wins.
A pattern that matches but captures nothing usable falls through.
Protest ids with a known count that no rule can read are resolved from
the override table (protest_data/participant_overrides.json), last.

Output columns: participants (float, nullable), participants_rule (audit)
"""

import json
import math
import os
import re
from pathlib import Path
from typing import Callable, NamedTuple, Optional

import numpy as np
import pandas as pd

from protest_core import PEOPLE_KEYWORDS, QUALIFIER_KEYWORDS

SCRIPT_DIR = Path(__file__).resolve().parent
OVERRIDES_PATH = Path(
    os.environ.get("PROTEST_OVERRIDES_PATH", SCRIPT_DIR / "protest_data" / "participant_overrides.json")
)

OVERRIDE_RULE = "override"

_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d)")
_SPACES_RE = re.compile(r"\s+")


class CascadeRule(NamedTuple):
    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match], Optional[float]]


def _to_number(raw) -> Optional[float]:
    """Capture → float. Empty, non-numeric, negative or non-finite → None."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _mean_of_groups(m: re.Match) -> Optional[float]:
    lo, hi = _to_number(m.group(1)), _to_number(m.group(2))
    if lo is None or hi is None:
        return None
    return (lo + hi) / 2


def _first_group(m: re.Match) -> Optional[float]:
    return _to_number(m.group(1))


def _keyword_alternation(words) -> str:
    return "|".join(re.escape(w) for w in words)


CASCADE = (
    CascadeRule("explicit_range", re.compile(r"(\d+)\s*(?:-|to)\s*(\d+)"), _mean_of_groups),
    CascadeRule("worded_range", re.compile(r"between\s+(\d+)\s+and\s+(\d+)"), _mean_of_groups),
    CascadeRule("bare_integer", re.compile(r"^\s*(\d+)\s*$"), _first_group),
    CascadeRule("plus_suffixed", re.compile(r"(\d+)[a-z\s]*\+"), _first_group),
    CascadeRule("magnitude_s", re.compile(r"(\d+)s\b"), _first_group),
    CascadeRule(
        "number_keyword",
        re.compile(r"(\d+) ?(?:" + _keyword_alternation(PEOPLE_KEYWORDS) + r")"),
        _first_group,
    ),
    CascadeRule(
        "keyword_number",
        re.compile(r"(?:" + _keyword_alternation(QUALIFIER_KEYWORDS) + r") ?(\d+)"),
        _first_group,
    ),
)


def normalize_participants_text(text) -> str:
    """Lower-case, drop thousands separators, collapse whitespace. Null → ''."""
    if text is None or (isinstance(text, float) and np.isnan(text)):
        return ""
    s = str(text).lower()
    s = _THOUSANDS_RE.sub("", s)
    return _SPACES_RE.sub(" ", s).strip()


def explain_estimate(text, rules=CASCADE) -> tuple[Optional[float], Optional[str]]:
    """Run the cascade. Returns (estimate, rule name) or (None, None)."""
    s = normalize_participants_text(text)
    if not s:
        return None, None
    for rule in rules:
        m = rule.pattern.search(s)
        if m is None:
            continue
        value = rule.extract(m)
        if value is not None:
            return value, rule.name
    return None, None


def estimate_participants(text) -> Optional[float]:
    """Single numeric estimate from free text, or None when unresolved."""
    return explain_estimate(text)[0]


def load_overrides(path: Path = OVERRIDES_PATH) -> dict[int, float]:
    """
    Load hand-verified estimates keyed by protest id.
    Expects {"overrides": [{"id": int, "participants": number, "note": str}, ...]}.
    Missing file → empty table.
    """
    path = Path(path)
    if not path.exists():
        return {}
    with open(path) as f:
        data = json.load(f)
    table = {}
    for entry in data.get("overrides", []):
        try:
            pid = int(entry["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Override entry {entry} has no usable id") from e
        value = _to_number(entry.get("participants"))
        if value is None:
            raise ValueError(f"Override for id {pid} has no usable participants value")
        table[pid] = value
    return table


def estimate_series(df: pd.DataFrame, overrides: Optional[dict] = None) -> pd.DataFrame:
    """
    Add participants (float) and participants_rule columns.
    Overrides apply only to ids the cascade left unresolved.
    """
    if "participants" not in df.columns:
        raise ValueError("Missing column: participants")
    overrides = overrides or {}
    results = [explain_estimate(t) for t in df["participants"]]
    out = df.copy()
    out["participants_text"] = df["participants"]
    out["participants"] = pd.Series([r[0] for r in results], index=df.index, dtype=float)
    out["participants_rule"] = pd.Series([r[1] for r in results], index=df.index, dtype=object)
    if overrides and "id" in out.columns:
        unresolved = out["participants"].isna() & out["id"].isin(list(overrides))
        out.loc[unresolved, "participants"] = out.loc[unresolved, "id"].map(overrides)
        out.loc[unresolved, "participants_rule"] = OVERRIDE_RULE
    return out


def rule_summary(estimated: pd.DataFrame) -> pd.Series:
    """Count of protests resolved by each rule (None → 'unresolved')."""
    return estimated["participants_rule"].fillna("unresolved").value_counts()

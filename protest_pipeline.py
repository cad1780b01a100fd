#!/usr/bin/env python3
"""
PROTEST NORMALIZATION PIPELINE
==============================
raw protests → dates → participant estimate → participants_range → continent
            ↘ dense action table ↗
                 → assembled long-form table

Run: python protest_pipeline.py [raw.csv] [out.csv]
Defaults: protest_data/mmALL.csv → protest_data/protests_tidy.csv
          (PROTEST_RAW_PATH / PROTEST_OUTPUT_PATH)

Any DateParseError or DensificationError aborts before output is written.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Optional

import pandas as pd

from protest_actions import densify_actions
from protest_assembler import assemble
from protest_category import resolve_categories
from protest_continent import assign_continents, lookup_continent
from protest_core import DateParseError, DensificationError
from protest_dates import reconstruct_dates
from protest_loader import DATA_DIR, RAW_PATH, load_protests
from protest_participants import OVERRIDES_PATH, estimate_series, load_overrides, rule_summary

OUTPUT_PATH = Path(os.environ.get("PROTEST_OUTPUT_PATH", DATA_DIR / "protests_tidy.csv"))


def normalize_protests(
    raw: pd.DataFrame,
    overrides: Optional[dict] = None,
    continent_lookup: Optional[Callable[[str], Optional[str]]] = None,
) -> pd.DataFrame:
    """Fixed per-protest attributes: dates, participants, participants_range, continent."""
    df = reconstruct_dates(raw)
    df = estimate_series(df, overrides=overrides)
    df["participants_range"] = resolve_categories(df)
    return assign_continents(df, lookup=continent_lookup or lookup_continent)


def run_pipeline(
    raw: pd.DataFrame,
    overrides: Optional[dict] = None,
    continent_lookup: Optional[Callable[[str], Optional[str]]] = None,
) -> pd.DataFrame:
    """Validated raw table → assembled long-form table."""
    protests = normalize_protests(raw, overrides=overrides, continent_lookup=continent_lookup)
    actions = densify_actions(raw)
    return assemble(protests, actions)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    raw_path = Path(argv[0]) if len(argv) > 0 else RAW_PATH
    out_path = Path(argv[1]) if len(argv) > 1 else OUTPUT_PATH

    print("PROTEST NORMALIZATION PIPELINE")
    print("=" * 50)
    try:
        raw = load_protests(raw_path)
        overrides = load_overrides(OVERRIDES_PATH)
        protests = normalize_protests(raw, overrides=overrides)
        actions = densify_actions(raw)
        tidy = assemble(protests, actions)
    except (FileNotFoundError, ValueError, DateParseError, DensificationError) as e:
        print(f"  ✗ {type(e).__name__}: {e}")
        return 1

    print("  Participant estimate by rule:", rule_summary(protests).to_dict())
    print("  Participants range:", protests["participants_range"].value_counts(sort=False).to_dict())
    vocab = actions[["action_source", "action"]].drop_duplicates()
    print(f"  ✓ {len(protests)} protests x {len(vocab)} actions = {len(tidy)} rows")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    tidy.to_csv(out_path, index=False)
    print(f"  ✓ {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

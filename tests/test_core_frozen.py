#!/usr/bin/env python3
"""Frozen constants: range order, thresholds, keyword sets, output column contract."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def test_range_order_locked():
    from protest_core import PARTICIPANT_RANGES

    assert PARTICIPANT_RANGES == ("Missing", "1-99", "100-999", "1000-1999", "2000-4999", "5000-10000", ">10000")


def test_thresholds_cover_every_non_missing_range():
    from protest_core import PARTICIPANT_RANGES, RANGE_THRESHOLDS

    assert [t[0] for t in RANGE_THRESHOLDS] == list(PARTICIPANT_RANGES[1:])
    bounds = [(lo, hi) for _, lo, hi in RANGE_THRESHOLDS[:-1]]
    for (_, hi), (next_lo, _) in zip(bounds, bounds[1:]):
        assert hi < next_lo, "thresholds must not overlap"


def test_only_one_category_repair():
    from protest_core import CATEGORY_REPAIRS

    assert CATEGORY_REPAIRS == {"50-99": "1-99"}


def test_keyword_sets():
    from protest_core import PEOPLE_KEYWORDS, QUALIFIER_KEYWORDS

    assert "demonstrators" in PEOPLE_KEYWORDS and "former" in PEOPLE_KEYWORDS
    assert set(QUALIFIER_KEYWORDS) == {"about", "around", "more than", "almost", "over", ">", "<"}


def test_output_columns():
    from protest_core import OUTPUT_COLUMNS

    assert OUTPUT_COLUMNS[0] == "id"
    assert OUTPUT_COLUMNS[-3:] == ["action_source", "action", "occurred"]
    assert len(set(OUTPUT_COLUMNS)) == len(OUTPUT_COLUMNS)


def test_core_locked():
    from protest_core import CORE_LOCKED, CORE_VERSION

    assert CORE_LOCKED
    assert CORE_VERSION.count(".") == 2

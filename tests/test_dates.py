#!/usr/bin/env python3
"""Date reconstruction: valid dates only, invalid rows abort with their ids."""

import sys
import unittest
from datetime import date
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _frame(**overrides):
    base = {
        "id": [10, 11],
        "startyear": [1990, 2019],
        "startmonth": [1, 2],
        "startday": [15, 28],
        "endyear": [1990, 2019],
        "endmonth": [1, 3],
        "endday": [16, 1],
    }
    base.update(overrides)
    return pd.DataFrame(base)


class TestMakeDate(unittest.TestCase):
    def test_valid(self):
        from protest_dates import make_date

        self.assertEqual(make_date(2020, 2, 29), date(2020, 2, 29))
        self.assertEqual(make_date(1990.0, 1.0, 1.0), date(1990, 1, 1))

    def test_invalid_raises(self):
        from protest_core import DateParseError
        from protest_dates import make_date

        for args in [(2019, 2, 29), (2020, 13, 1), (2020, 1, None), (2020, 1, 1.5), ("x", 1, 1)]:
            with self.assertRaises(DateParseError, msg=str(args)):
                make_date(*args)

    def test_date_parse_error_is_value_error(self):
        from protest_core import DateParseError

        self.assertTrue(issubclass(DateParseError, ValueError))


class TestReconstructDates(unittest.TestCase):
    def test_columns_added(self):
        from protest_dates import reconstruct_dates

        out = reconstruct_dates(_frame())
        self.assertEqual(out["start_date"].tolist(), [pd.Timestamp("1990-01-15"), pd.Timestamp("2019-02-28")])
        self.assertEqual(out["end_date"].tolist(), [pd.Timestamp("1990-01-16"), pd.Timestamp("2019-03-01")])
        self.assertFalse(out["start_date"].isna().any())

    def test_input_not_mutated(self):
        from protest_dates import reconstruct_dates

        df = _frame()
        reconstruct_dates(df)
        self.assertNotIn("start_date", df.columns)

    def test_invalid_row_aborts_with_ids(self):
        from protest_core import DateParseError
        from protest_dates import reconstruct_dates

        with self.assertRaises(DateParseError) as ctx:
            reconstruct_dates(_frame(endday=[16, 30], endmonth=[1, 2]))
        self.assertEqual(ctx.exception.ids, [11])
        self.assertIn("end_date", str(ctx.exception))

    def test_missing_component_aborts(self):
        from protest_core import DateParseError
        from protest_dates import reconstruct_dates

        with self.assertRaises(DateParseError) as ctx:
            reconstruct_dates(_frame(startday=[None, 28]))
        self.assertEqual(ctx.exception.ids, [10])

    def test_missing_column(self):
        from protest_dates import reconstruct_dates

        with self.assertRaises(ValueError):
            reconstruct_dates(_frame().drop(columns=["endday"]))


if __name__ == "__main__":
    unittest.main()

import math
import unittest

import numpy as np
import pandas as pd

from stackbar_plot import ChartDataError
from stackbar_plot.adapters.normalize import coerce_numeric_column, first_finite_value
from stackbar_plot.rows import normalize_rows, series_names, target_value_from_column


class RowModelTests(unittest.TestCase):
    def test_normalize_rows_from_mapping(self) -> None:
        rows = normalize_rows({"cat": ["A", "B"], "a": [10, 5], "b": [20, 5]}, "cat", ["a", "b"])
        self.assertEqual([r.category for r in rows], ["A", "B"])
        self.assertEqual(rows[0].values, (10.0, 20.0))
        self.assertEqual(rows[0].total, 30.0)
        self.assertEqual(rows[1].total, 10.0)

    def test_normalize_rows_from_dataframe(self) -> None:
        frame = pd.DataFrame({"cat": ["A", None], "a": [1.5, np.nan], "b": ["2", "x"]})
        rows = normalize_rows(frame, "cat", ["a", "b"])
        self.assertEqual(rows[0].values, (1.5, 2.0))
        self.assertEqual(rows[1].category, "")
        self.assertEqual(rows[1].values, (0.0, 0.0))

    def test_totals_match_values_and_series_count(self) -> None:
        data = {"cat": ["A", "B", "C"], "a": [1, None, 3], "b": [4, 5]}
        rows = normalize_rows(data, "cat", ["a", "b", "missing"])
        for row in rows:
            self.assertEqual(len(row.values), 3)
            self.assertEqual(row.total, sum(row.values))
        self.assertEqual(rows[2].values, (3.0, 0.0, 0.0))

    def test_duplicate_categories_keep_first_occurrence(self) -> None:
        rows = normalize_rows({"cat": ["A", "B", "A"], "a": [1, 2, 99]}, "cat", ["a"])
        self.assertEqual([r.category for r in rows], ["A", "B"])
        self.assertEqual(rows[0].values, (1.0,))

    def test_unconfigured_source_yields_no_rows(self) -> None:
        self.assertEqual(normalize_rows(None, "cat", ["a"]), ())
        self.assertEqual(normalize_rows({"cat": ["A"]}, None, ["a"]), ())
        self.assertEqual(normalize_rows({"cat": ["A"]}, "cat", []), ())

    def test_missing_category_column_yields_no_rows(self) -> None:
        self.assertEqual(normalize_rows({"a": [1]}, "cat", ["a"]), ())
        self.assertEqual(normalize_rows(pd.DataFrame({"a": [1]}), "cat", ["a"]), ())

    def test_integer_categories_with_blanks_keep_integer_text(self) -> None:
        frame = pd.DataFrame({"year": [2019, None, 2020], "a": [1, 2, 3]})
        rows = normalize_rows(frame, "year", ["a"])
        self.assertEqual([r.category for r in rows], ["2019", "", "2020"])
        rows = normalize_rows({"year": [2019.5, 7.0], "a": [1, 2]}, "year", ["a"])
        self.assertEqual([r.category for r in rows], ["2019.5", "7"])

    def test_unsupported_source_type_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_rows([("A", 1)], "cat", ["a"])

    def test_series_names_fall_back_to_column_id(self) -> None:
        names = series_names(["rev", "cost", "other"], {"rev": {"name": "Revenue"}, "cost": "Cost"})
        self.assertEqual(names, ("Revenue", "Cost", "other"))

    def test_coerce_numeric_column_pads_short_columns(self) -> None:
        out = coerce_numeric_column([1, "bad", None], length=4, label="a")
        np.testing.assert_array_equal(out, np.asarray([1.0, 0.0, 0.0, 0.0]))

    def test_target_value_reads_first_entry(self) -> None:
        self.assertEqual(target_value_from_column({"t": ["25", 40]}, "t"), 25.0)
        self.assertTrue(math.isnan(target_value_from_column({"t": []}, "t")))
        self.assertTrue(math.isnan(target_value_from_column({"t": [1]}, None)))
        self.assertTrue(math.isnan(first_finite_value(["n/a"])))


if __name__ == "__main__":
    unittest.main()

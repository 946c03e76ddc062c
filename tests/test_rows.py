"""
Unit tests for module row validation.

Column order: module, date expression, activities, technology, onsite, async, hours
"""

import unittest

from syllabuscal.model import ModuleRow, RawRow, Skip
from syllabuscal.rows import parse_flag, parse_hours, parse_module_row, parse_table


def _row(index: int, *fields: str) -> RawRow:
    return RawRow(index=index, fields=tuple(fields))


HEADER = _row(0, "Module", "Date", "Activities", "Technology", "Onsite", "Async", "Hours")


class TestParseModuleRow(unittest.TestCase):
    def test_full_row(self) -> None:
        row = parse_module_row(
            _row(1, "M1", "Week 1 (Jan. 5-10)", "Lecture", "Zoom", "true", "FALSE", "2.5")
        )
        self.assertEqual(
            row,
            ModuleRow(
                module="M1",
                date_expression="Week 1 (Jan. 5-10)",
                activities="Lecture",
                technology="Zoom",
                is_onsite=True,
                is_async=False,
                hours=2.5,
            ),
        )

    def test_too_few_fields_is_skipped(self) -> None:
        result = parse_module_row(_row(1, "M1", "Week 1 (Jan. 5-10)", "Lecture", "Zoom", "true"))
        self.assertIsInstance(result, Skip)
        self.assertIn("got 5", result.reason)

    def test_extra_fields_are_ignored(self) -> None:
        result = parse_module_row(
            _row(1, "M1", "Week 1 (Jan. 5-10)", "Lecture", "Zoom", "true", "true", "3", "extra")
        )
        self.assertIsInstance(result, ModuleRow)
        assert isinstance(result, ModuleRow)
        self.assertEqual(result.hours, 3.0)
        self.assertTrue(result.is_async)


class TestFlagsAndHours(unittest.TestCase):
    def test_flags(self) -> None:
        self.assertTrue(parse_flag("true"))
        self.assertTrue(parse_flag("TRUE"))
        self.assertTrue(parse_flag(" True "))
        self.assertFalse(parse_flag("yes"))
        self.assertFalse(parse_flag(""))
        self.assertFalse(parse_flag("false"))

    def test_hours(self) -> None:
        self.assertEqual(parse_hours("2"), 2.0)
        self.assertEqual(parse_hours("1.5"), 1.5)

    def test_hours_fallback(self) -> None:
        for bad in ("", "two", "0", "-3", "nan", "inf"):
            with self.subTest(value=bad):
                self.assertEqual(parse_hours(bad), 1.0)


class TestParseTable(unittest.TestCase):
    def test_header_only_table_is_skipped(self) -> None:
        result = parse_table([HEADER])
        self.assertIsInstance(result, Skip)

    def test_empty_table_is_skipped(self) -> None:
        self.assertIsInstance(parse_table([]), Skip)

    def test_data_rows_keep_order_and_bad_rows_do_not_stop(self) -> None:
        good = _row(1, "M1", "Week 1 (Jan. 5-10)", "Lecture", "Zoom", "true", "false", "2")
        short = _row(2, "M2", "Week 2")
        good2 = _row(3, "M3", "Week 3 (Jan. 19-24)", "Lab", "Moodle", "false", "true", "x")

        result = parse_table([HEADER, good, short, good2])
        assert not isinstance(result, Skip)

        self.assertEqual([raw.index for raw, _ in result], [1, 2, 3])
        self.assertIsInstance(result[0][1], ModuleRow)
        self.assertIsInstance(result[1][1], Skip)
        self.assertIsInstance(result[2][1], ModuleRow)
        self.assertEqual(result[2][1].hours, 1.0)


if __name__ == "__main__":
    unittest.main()

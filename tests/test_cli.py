"""
Tests for CLI entry points.

These tests focus on:
- exit codes for events, "no data" outcomes and bad input
- extract --out followed by export producing an .ics file
"""

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from syllabuscal.cli import EXIT_ERROR, EXIT_NO_DATA, EXIT_OK, main

TEXT = (
    "<title>Intro to Computing</title>\n"
    "<table>Module $ Date $ A $ T $ O $ As $ H @\n"
    "M1 $ Week 1 (Jan. 5-10) $ Lecture $ Zoom $ true $ false $ 2 @\n"
    "M2 $ Week 2 $ Lab $ Moodle $ true\n"
    "</table>\n"
)


def _run(argv: list) -> tuple:
    # main() always ends with SystemExit; return its code and the printed output
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        try:
            main(argv)
        except SystemExit as e:
            return e.code, out.getvalue()
    return None, out.getvalue()


class TestCLI(unittest.TestCase):
    def test_extract_and_export(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "syllabus.txt"
            src.write_text(TEXT, encoding="utf-8")
            events_json = Path(d) / "events.json"
            ics = Path(d) / "course.ics"

            code, output = _run(
                ["extract", str(src), "--year", "2025", "--timezone", "UTC", "--out", str(events_json)]
            )
            self.assertEqual(code, EXIT_OK)
            self.assertIn("2025-01-05 09:00-11:00 Intro to Computing | Week 1", output)
            self.assertIn("skipped (table 0, row 2)", output)

            data = json.loads(events_json.read_text(encoding="utf-8"))
            self.assertEqual(data["events"][0]["startTime"], "2025-01-05T09:00:00+00:00")

            code, output = _run(["export", str(events_json), str(ics)])
            self.assertEqual(code, EXIT_OK)
            self.assertIn("Exported 1 events", output)
            self.assertIn("DTSTART:20250105T090000Z", ics.read_text(encoding="utf-8"))

    def test_overnight_session_prints_end_date(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "long.txt"
            src.write_text(
                "<title>Hackathon</title><table>Module $ Date $ A $ T $ O $ As $ H @ "
                "M1 $ Week 1 (Jan. 5-10) $ Build $ Git $ true $ false $ 16</table>",
                encoding="utf-8",
            )

            code, output = _run(["extract", str(src), "--year", "2025", "--timezone", "UTC"])
            self.assertEqual(code, EXIT_OK)
            self.assertIn("- 2025-01-05 09:00-2025-01-06 01:00 Hackathon | Week 1", output)

    def test_extract_without_tables_is_no_data(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "plain.txt"
            src.write_text("<title>Nothing</title> no tables here", encoding="utf-8")

            code, output = _run(["extract", str(src), "--year", "2025", "--timezone", "UTC"])
            self.assertEqual(code, EXIT_NO_DATA)
            self.assertIn("No tables found", output)

    def test_extract_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, _ = _run(["extract", str(Path(d) / "missing.txt"), "--year", "2025"])
            self.assertEqual(code, EXIT_ERROR)

    def test_extract_bad_timezone(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "syllabus.txt"
            src.write_text(TEXT, encoding="utf-8")
            code, output = _run(["extract", str(src), "--timezone", "Nowhere/Land"])
            self.assertEqual(code, EXIT_ERROR)
            self.assertIn("Configuration error", output)

    def test_export_requires_paths(self) -> None:
        code, _ = _run(["export", "", ""])
        self.assertNotEqual(code, 0)

    def test_export_missing_events_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, output = _run(["export", str(Path(d) / "none.json"), str(Path(d) / "out.ics")])
            self.assertEqual(code, EXIT_OK)
            self.assertIn("No events to export.", output)


if __name__ == "__main__":
    unittest.main()

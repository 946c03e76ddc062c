import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from syllabuscal.export_ics import export_events_to_ics


EVENT = {
    "summary": "Intro to Computing | Week 1",
    "description": "Intro to Computing\n==================\n\nModule: M1",
    "startTime": "2025-01-05T09:00:00+08:00",
    "endTime": "2025-01-05T11:00:00+08:00",
    "metadata": {"module": "M1"},
}

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_events_to_ics([EVENT], out, now=NOW)
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertIn("BEGIN:VEVENT", text)
            self.assertIn("SUMMARY:Intro to Computing | Week 1", text)
            # 09:00 +08:00 is 01:00 UTC
            self.assertIn("DTSTART:20250105T010000Z", text)
            self.assertIn("DTEND:20250105T030000Z", text)
            self.assertIn("DTSTAMP:20250101T120000Z", text)
            self.assertIn("DESCRIPTION:Intro to Computing\\n==================\\n\\nModule: M1", text)

    def test_invalid_events_are_skipped(self) -> None:
        broken = [
            {"summary": "no times"},
            dict(EVENT, startTime="not a date"),
            dict(EVENT, startTime="2025-01-05T09:00:00"),
            dict(EVENT, endTime=EVENT["startTime"]),
        ]
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            self.assertEqual(export_events_to_ics(broken, out, now=NOW), 0)
            self.assertNotIn("BEGIN:VEVENT", out.read_text(encoding="utf-8"))

    def test_output_is_stable_for_fixed_timestamp(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            a = Path(d) / "a.ics"
            b = Path(d) / "b.ics"
            export_events_to_ics([EVENT], a, now=NOW)
            export_events_to_ics([EVENT], b, now=NOW)
            self.assertEqual(a.read_bytes(), b.read_bytes())


if __name__ == "__main__":
    unittest.main()

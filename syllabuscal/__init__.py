"""
syllabuscal: syllabus text dumps -> calendar events.
"""

from syllabuscal.model import CalendarEvent, Diagnostic, ExtractionResult, Outcome
from syllabuscal.parse import extract_course_title, extract_events

__all__ = [
    "CalendarEvent",
    "Diagnostic",
    "ExtractionResult",
    "Outcome",
    "extract_course_title",
    "extract_events",
]

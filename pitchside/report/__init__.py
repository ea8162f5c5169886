"""Session reports: assembly, feedback and export."""

from .builder import build_participant_report, build_session_report
from .export import export_csv, export_json, export_json_rows
from .feedback import session_feedback, slalom_feedback
from .markdown_writer import MarkdownSessionWriter
from .models import CSV_COLUMNS, ParticipantReport, SessionReport

__all__ = [
    "CSV_COLUMNS",
    "MarkdownSessionWriter",
    "ParticipantReport",
    "SessionReport",
    "build_participant_report",
    "build_session_report",
    "export_csv",
    "export_json",
    "export_json_rows",
    "session_feedback",
    "slalom_feedback",
]

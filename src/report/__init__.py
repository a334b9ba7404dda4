"""
Report layer
------------

Captions and HTML assembly of the dairy consumption report.
"""

from .document import (  # noqa: F401
    REPORT_HTML_NAME,
    ReportSection,
    render_report_html,
    write_report,
)

__all__ = [
    "REPORT_HTML_NAME",
    "ReportSection",
    "render_report_html",
    "write_report",
]

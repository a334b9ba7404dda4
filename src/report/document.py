"""
Static HTML report assembly.

The document is a single self-contained HTML file rendered from
`templates/report.html.j2`: the title and intro, then one section per
figure in a fixed order, each made of a heading, the caption and the
figure embedded as a base64 PNG. A section whose chart could not be built
carries a short notice instead of the image.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .captions import REPORT_INTRO, REPORT_TITLE

REPORT_HTML_NAME = "dairy_report.html"
REPORT_TEMPLATE_NAME = "report.html.j2"


@dataclass
class ReportSection:
    key: str
    title: str
    caption: str
    png: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def rendered(self) -> bool:
        return self.png is not None

    @property
    def png_base64(self) -> Optional[str]:
        if self.png is None:
            return None
        return base64.b64encode(self.png).decode("ascii")


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_report_html(
    sections: Sequence[ReportSection],
    *,
    title: str = REPORT_TITLE,
    intro: str = REPORT_INTRO,
) -> str:
    template = _template_env().get_template(REPORT_TEMPLATE_NAME)
    return template.render(title=title, intro=intro, sections=list(sections))


def write_report(
    sections: Sequence[ReportSection],
    *,
    output_dir: Path | str,
    file_name: str = REPORT_HTML_NAME,
) -> Path:
    output_root = Path(output_dir)
    output_root.mkdir(parents=True, exist_ok=True)
    output_path = output_root / file_name
    output_path.write_text(render_report_html(sections), encoding="utf-8")
    return output_path


__all__ = [
    "REPORT_HTML_NAME",
    "ReportSection",
    "render_report_html",
    "write_report",
]

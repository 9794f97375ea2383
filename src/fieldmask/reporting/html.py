from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from jinja2 import Environment, PackageLoader, select_autoescape


@dataclass
class ReportRow:
    line: int
    raw: str
    formatted: str
    value: str
    iso_date: str = ""


def write_report(rows: List[ReportRow], path: Path, title: str = "fieldmask report") -> None:
    env = Environment(
        loader=PackageLoader("fieldmask.reporting", "templates"),
        autoescape=select_autoescape()
    )
    tmpl = env.get_template("report.html.j2")
    html = tmpl.render(rows=rows, title=title, show_dates=any(r.iso_date for r in rows))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html)

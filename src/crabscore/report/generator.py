"""JSON and HTML renderings of a CrabScore.

The HTML page is self-contained (inline CSS, no scripts) and simply shows
the pretty-printed JSON report, so it can be opened from a file:// path or
served by the dashboard.
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..score import CrabScore
from .formats import export_csrd

_HTML_TEMPLATE = (
    "<!DOCTYPE html><html><head><meta charset='utf-8'><title>CrabScore Report</title>"
    "<style>body{{background:#18191c;color:#f7f7f7;font-family:'JetBrains Mono',monospace;"
    "padding:2rem}}</style></head><body><h1 style='color:#ff5522;text-align:center'>"
    "CRABSCORE REPORT</h1><pre style='background:#111;color:#aaa;padding:1rem;"
    "border-radius:0.5rem;overflow-x:auto'>{body}</pre></body></html>"
)


@dataclass(frozen=True)
class JsonReport:
    """Wrapper serialized as ``{"score": {...}}``."""

    score: CrabScore

    def to_dict(self) -> dict:
        return {"score": self.score.to_dict()}

    def to_pretty_string(self) -> str:
        """Two-space indented JSON; keys keep declaration order."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JsonReport":
        return cls(score=CrabScore.from_dict(data["score"]))

    @classmethod
    def from_json(cls, text: str) -> "JsonReport":
        return cls.from_dict(json.loads(text))


def generate_json(score: CrabScore) -> JsonReport:
    return JsonReport(score=score)


def generate_html(score: CrabScore) -> str:
    """Minimal dark page with the JSON report in a ``<pre>`` block."""
    body = html.escape(generate_json(score).to_pretty_string())
    return _HTML_TEMPLATE.format(body=body)


REPORT_JSON = "crabscore_report.json"
REPORT_HTML = "crabscore_report.html"
REPORT_CSRD = "report_csrd.json"


def write_reports(score: CrabScore, output_dir: Path) -> list[Path]:
    """Write the JSON, HTML and CSRD reports into *output_dir*.

    Returns:
        Paths of the written files, in that order.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    outputs = [
        (output_dir / REPORT_JSON, generate_json(score).to_pretty_string()),
        (output_dir / REPORT_HTML, generate_html(score)),
        (output_dir / REPORT_CSRD, export_csrd(score)),
    ]
    for path, content in outputs:
        path.write_text(content, encoding="utf-8")
    return [path for path, _ in outputs]

"""Report rendering and export formats."""

from .formats import export_cra, export_csrd, export_sbom
from .generator import JsonReport, generate_html, generate_json, write_reports

__all__ = [
    "JsonReport",
    "generate_json",
    "generate_html",
    "write_reports",
    "export_csrd",
    "export_sbom",
    "export_cra",
]

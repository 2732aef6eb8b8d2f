"""Renderer registry."""

from __future__ import annotations

from typing import List

from .base import BaseRenderer


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_renderer(name: str) -> BaseRenderer:
    normalized = _normalized(name)
    if normalized in {"site_report_markdown", "markdown", "md"}:
        from .site_report_markdown import SiteReportMarkdownRenderer

        return SiteReportMarkdownRenderer()
    if normalized in {"site_report_pdf", "pdf"}:
        from .site_report_pdf import SiteReportPDFRenderer

        return SiteReportPDFRenderer()
    if normalized in {"site_report_html", "html"}:
        from .site_report_html import SiteReportHTMLRenderer

        return SiteReportHTMLRenderer()
    raise ValueError(f"Unknown renderer '{name}'")


def available_renderers() -> List[str]:
    return ["site_report_markdown", "site_report_pdf", "site_report_html"]

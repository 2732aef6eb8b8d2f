"""Helpers shared by the site report renderers."""

from __future__ import annotations

import html
from typing import List, Tuple

from config import SiteConfig
from models import SiteAnalysisResult

# Line styles understood by the layout-aware renderers.
TITLE = "title"
HEADING = "heading"
BODY = "body"

StyledLine = Tuple[str, str]


def require_exportable(result: SiteAnalysisResult) -> None:
    if not result.has_report:
        raise ValueError("Site analysis has no narrative report to export.")
    if not result.report_blocks:
        raise ValueError("Site analysis has no report blocks to export.")


def styled_lines(result: SiteAnalysisResult) -> List[StyledLine]:
    lines: List[StyledLine] = [(SiteConfig.REPORT_TITLE, TITLE)]
    for block in result.report_blocks:
        if block.heading:
            lines.append((block.heading, HEADING))
        lines.extend((line, BODY) for line in block.lines)
    return lines


def _markdown_item(line: str) -> str:
    glyph = f"{SiteConfig.BULLET_GLYPH} "
    if line.startswith(glyph):
        return f"- {line[len(glyph):]}"
    return f"- {line}"


def report_markdown(result: SiteAnalysisResult, escape_html: bool = False) -> str:
    """Markdown view of the report blocks.

    With ``escape_html`` every service-provided line is entity-escaped so raw tags
    survive Markdown conversion as text.
    """

    clean = (lambda text: html.escape(text, quote=False)) if escape_html else (lambda text: text)
    parts: List[str] = [f"# {SiteConfig.REPORT_TITLE}", ""]
    for block in result.report_blocks:
        if block.heading:
            parts.append(f"## {clean(block.heading)}")
            parts.append("")
            parts.extend(_markdown_item(clean(line)) for line in block.lines)
        else:
            parts.extend(clean(line) for line in block.lines)
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"

"""Markdown → HTML companion renderer."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import SiteConfig
from models import SiteAnalysisResult
from report_assembler import report_filename

from .base import BaseRenderer
from .context import report_markdown, require_exportable

LOGGER = logging.getLogger(__name__)


class SiteReportHTMLRenderer(BaseRenderer):
    """Render a minimal standalone HTML page for the site report."""

    name = "site_report_html"
    extension = "html"

    def __init__(self, template_path: Optional[str] = None) -> None:
        self.template_path = Path(template_path or SiteConfig.HTML_TEMPLATE)
        if not self.template_path.exists():
            raise FileNotFoundError(f"HTML report template not found at {self.template_path}")
        self.env = Environment(
            loader=FileSystemLoader([str(self.template_path.parent)]),
            autoescape=select_autoescape(["html"]),
        )
        self.template = self.env.get_template(self.template_path.name)

    def render(self, result: SiteAnalysisResult, report_dir: str) -> List[str]:
        require_exportable(result)
        article_body = markdown.markdown(
            report_markdown(result, escape_html=True),
            extensions=["sane_lists"],
            output_format="html5",
        )
        page = self.template.render(
            report_title=SiteConfig.REPORT_TITLE,
            location=result.location_label,
            article_body=article_body,
            generated_at=datetime.now().strftime("%b %d, %Y"),
        )
        output_path = Path(report_dir) / report_filename(result.location_label, self.extension)
        output_path.write_text(page, encoding="utf-8")
        LOGGER.info("Wrote site report HTML to %s", output_path)
        return [str(output_path)]

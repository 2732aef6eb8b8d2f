"""Site report Markdown renderer."""

from __future__ import annotations

from pathlib import Path
from typing import List

from models import SiteAnalysisResult
from report_assembler import report_filename

from .base import BaseRenderer
from .context import report_markdown, require_exportable


class SiteReportMarkdownRenderer(BaseRenderer):
    """Persist the assembled report as Markdown next to the PDF."""

    name = "site_report_markdown"
    extension = "md"

    def render(self, result: SiteAnalysisResult, report_dir: str) -> List[str]:
        require_exportable(result)
        output_path = Path(report_dir) / report_filename(result.location_label, self.extension)
        output_path.write_text(report_markdown(result), encoding="utf-8")
        return [str(output_path)]

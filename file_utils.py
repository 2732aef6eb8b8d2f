"""
File utilities for the site analysis workflow.

Handles report directory creation, atomic JSON saves, and running the
configured renderers over an analysis result.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Dict, List, Optional

from config import SiteConfig
from models import SiteAnalysisResult
from renderers import get_renderer
from report_assembler import report_filename, sanitize_location_label

logger = logging.getLogger(__name__)


def _atomic_write_text(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", delete=False, encoding="utf-8", dir=str(path.parent)) as tmp:
        tmp.write(data)
        tmp_name = tmp.name
    os.replace(tmp_name, path)


def write_json(path: Path, payload: Any) -> None:
    serialized = json.dumps(payload, indent=2, ensure_ascii=False)
    _atomic_write_text(path, serialized)


class SiteReportFileManager:
    def __init__(self, base_output_dir: Optional[str] = None):
        self.base_output_dir = base_output_dir or SiteConfig.REPORT_DIR
        Path(self.base_output_dir).mkdir(parents=True, exist_ok=True)

    def create_report_directory(self, location: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        location_slug = sanitize_location_label(location).lower()[:24]
        path = Path(self.base_output_dir) / f"site_output_{timestamp}_{location_slug}"
        path.mkdir(parents=True, exist_ok=True)
        return str(path)

    def save_report(
        self,
        result: SiteAnalysisResult,
        report_dir: Optional[str] = None,
        renderers: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        report_dir = report_dir or self.create_report_directory(result.location_label)

        analysis_path = Path(report_dir) / "site_analysis.json"
        write_json(analysis_path, result.model_dump(mode="json"))

        rendered_files: List[str] = []
        failures: Dict[str, str] = {}
        for renderer_name in renderers or SiteConfig.REPORT_RENDERERS:
            try:
                renderer = get_renderer(renderer_name)
            except ValueError:
                logger.warning("Unknown renderer '%s' requested. Skipping.", renderer_name)
                failures[renderer_name] = "unknown renderer"
                continue
            try:
                rendered_files.extend(renderer.render(result, report_dir))
            except Exception as exc:
                logger.error("Renderer %s failed: %s", renderer_name, exc)
                failures[renderer_name] = str(exc)

        metadata = {
            "generated_at": datetime.now().isoformat(),
            "location": result.location_label,
            "report_file": report_filename(result.location_label),
            "classifier_tier": result.decision.tier.value,
            "has_metrics": result.metrics is not None,
            "has_protein": result.protein is not None,
            "key_point_count": len(result.key_points),
            "files": [str(analysis_path)] + rendered_files,
            "renderer_failures": failures,
        }
        write_json(Path(report_dir) / "metadata.json", metadata)
        return {"report_dir": report_dir, **metadata}


__all__ = ["SiteReportFileManager", "write_json"]

"""Compose derived site values into ordered, pre-formatted report blocks.

The blocks are layout-free: renderers decide wrapping and pagination. Sections whose
source data is missing are left out rather than rendered empty.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from config import SiteConfig
from models import ProteinLevel, ProteinPrediction, ReportBlock, SiteMetrics

UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-]+", flags=re.ASCII)


def protein_use_case(level: Optional[ProteinLevel]) -> Optional[str]:
    if level is None:
        return None
    return SiteConfig.PROTEIN_USE_CASES[ProteinLevel(level).value]


def resolve_location_label(*candidates: Optional[str]) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return SiteConfig.DEFAULT_LOCATION_LABEL


def sanitize_location_label(label: Optional[str]) -> str:
    safe = UNSAFE_FILENAME_CHARS.sub("_", label or "")
    return safe or SiteConfig.REPORT_FILENAME_FALLBACK


def report_filename(label: Optional[str], extension: str = "pdf") -> str:
    return f"{SiteConfig.REPORT_FILENAME_PREFIX}{sanitize_location_label(label)}.{extension}"


def environment_lines(metrics: SiteMetrics) -> List[str]:
    return [
        f"Average temperature: {metrics.temperature:.2f} °C",
        f"Solar radiation: {metrics.radiation:.2f} MJ/m²/day (ALLSKY_SFC_SW_DWN)",
        f"Alkalinity / pH: {metrics.ph:.2f}",
        f"Salinity: {metrics.salinity:.2f} %",
    ]


def protein_lines(prediction: ProteinPrediction) -> List[str]:
    lines = [
        f"Band: {prediction.level.value}",
        f"Band strength: {prediction.score:.1f}%",
    ]
    use_case = protein_use_case(prediction.level)
    if use_case:
        lines.append(f"Primary application: {use_case}")
    return lines


def assemble_report(
    location_label: Optional[str],
    metrics: Optional[SiteMetrics],
    protein: Optional[ProteinPrediction],
    key_points: Sequence[str],
) -> List[ReportBlock]:
    blocks = [
        ReportBlock(key="location", lines=[f"Location: {resolve_location_label(location_label)}"]),
    ]
    if metrics is not None:
        blocks.append(
            ReportBlock(key="environment", heading="Environmental snapshot", lines=environment_lines(metrics))
        )
    if protein is not None:
        blocks.append(ReportBlock(key="protein", heading="Protein content band", lines=protein_lines(protein)))
    if key_points:
        blocks.append(
            ReportBlock(
                key="recommendations",
                heading="Key technical recommendations",
                lines=[f"{SiteConfig.BULLET_GLYPH} {point}" for point in key_points],
            )
        )
    return blocks


__all__ = [
    "assemble_report",
    "protein_use_case",
    "report_filename",
    "resolve_location_label",
    "sanitize_location_label",
]

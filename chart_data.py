"""Chart-ready rows for the dashboard's radar, protein and growth views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from metrics import METRIC_KEYS, friendly_metric_label
from models import IDEAL_METRICS, GrowthPoint, ProteinLevel, ProteinPrediction, SiteMetrics


@dataclass(frozen=True)
class ProteinGrade:
    label: str
    description: str


PROTEIN_GRADES: Dict[ProteinLevel, ProteinGrade] = {
    ProteinLevel.LOW: ProteinGrade(
        label="Animal / Cow Feed Grade",
        description="Best channelled into cattle, poultry and aquaculture feed formulations.",
    ),
    ProteinLevel.MEDIUM: ProteinGrade(
        label="Food · Smoothies · Snacks",
        description="Balanced protein profile for spirulina biscuits, smoothies and daily nutrition foods.",
    ),
    ProteinLevel.HIGH: ProteinGrade(
        label="Medicinal / Pharma Grade",
        description="High potency biomass suitable for capsules, extracts and clinical-grade products.",
    ),
}


def environment_fit_rows(metrics: Optional[SiteMetrics]) -> List[Dict[str, Union[str, float]]]:
    """Site-vs-ideal rows; without site readings the ideal envelope is plotted against itself."""

    current = metrics or IDEAL_METRICS
    return [
        {
            "metric": friendly_metric_label(key),
            "site": getattr(current, key),
            "ideal": getattr(IDEAL_METRICS, key),
        }
        for key in METRIC_KEYS
    ]


def protein_index(prediction: Optional[ProteinPrediction]) -> int:
    if prediction is None:
        return 0
    return prediction.level.rank + 1


def protein_grade(level: Optional[ProteinLevel]) -> Optional[ProteinGrade]:
    if level is None:
        return None
    return PROTEIN_GRADES[ProteinLevel(level)]


def growth_chart_rows(series: Sequence[GrowthPoint]) -> List[Dict[str, Union[int, float]]]:
    return [{"day": point.day, "doublingTime": point.doubling_time} for point in series]

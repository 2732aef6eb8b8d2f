from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SiteMetrics(BaseModel):
    """Four canonical environmental readings for a cultivation site."""

    model_config = ConfigDict(frozen=True)

    temperature: float  # °C
    ph: float
    radiation: float  # MJ/m²/day
    salinity: float  # %

    @field_validator("temperature", "ph", "radiation", "salinity")
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Metric value must be finite (got {v})")
        return v


class ProteinLevel(str, Enum):
    """Predicted protein content band, ordered Low < Medium < High."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ProteinLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ProteinLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ProteinLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ProteinLevel):
            return NotImplemented
        return self.rank >= other.rank


_LEVEL_ORDER = [ProteinLevel.LOW, ProteinLevel.MEDIUM, ProteinLevel.HIGH]


class ProteinPrediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: ProteinLevel
    score: float = Field(ge=0.0, le=100.0, description="Band strength, not a probability")


class GrowthPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int = Field(ge=1, le=14)
    doubling_time: float = Field(gt=0.0, description="Days for biomass to double")


class ReportBlock(BaseModel):
    """One labeled group of pre-formatted report lines."""

    model_config = ConfigDict(frozen=True)

    key: str
    heading: Optional[str] = None
    lines: List[str] = Field(default_factory=list)


class ClassifierTier(str, Enum):
    CONFIDENCE_VECTOR = "confidence_vector"
    NUMERIC_BANDING = "numeric_banding"
    STATUS_PROXY = "status_proxy"
    NONE = "none"


class ClassificationDecision(BaseModel):
    """Records which classifier tier produced a prediction."""

    model_config = ConfigDict(frozen=True)

    tier: ClassifierTier
    prediction: Optional[ProteinPrediction] = None
    detail: str = ""


class SiteAnalysisResult(BaseModel):
    """Everything derived from one analysis response, handed to the rendering layer."""

    model_config = ConfigDict(frozen=True)

    location_label: str
    narrative: str = ""
    cleaned_narrative: str = ""
    metrics: Optional[SiteMetrics] = None
    protein: Optional[ProteinPrediction] = None
    growth_series: List[GrowthPoint]
    key_points: List[str] = Field(default_factory=list)
    report_blocks: List[ReportBlock] = Field(default_factory=list)
    decision: ClassificationDecision = ClassificationDecision(tier=ClassifierTier.NONE)

    @property
    def has_report(self) -> bool:
        return bool(self.cleaned_narrative or self.narrative)


IDEAL_METRICS = SiteMetrics(
    temperature=30.0,
    ph=9.0,
    radiation=16.0,  # MJ/m²/day
    salinity=3.0,
)

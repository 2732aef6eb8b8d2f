"""Deterministic 14-day doubling-time series for the growth chart."""

from __future__ import annotations

import math
from typing import List, Optional

from config import SiteConfig
from models import IDEAL_METRICS, GrowthPoint, SiteMetrics

BASE_DOUBLING_DAYS = 1.8
MIN_DOUBLING_DAYS = 1.2
MAX_DOUBLING_DAYS = 3.5
TEMPERATURE_PENALTY = 0.03
RADIATION_PENALTY = 0.02


def _default_series() -> List[GrowthPoint]:
    # Day 1 uses index 0, so the series starts exactly at 2.1 days.
    return [
        GrowthPoint(day=idx + 1, doubling_time=2.1 + math.sin(idx / 2) * 0.25)
        for idx in range(SiteConfig.GROWTH_SERIES_DAYS)
    ]


DEFAULT_GROWTH_SERIES: List[GrowthPoint] = _default_series()


def base_doubling_time(metrics: SiteMetrics) -> float:
    """Doubling time before the seasonal wobble; grows with distance from the ideal envelope."""

    temp_delta = abs(metrics.temperature - IDEAL_METRICS.temperature)
    rad_delta = abs(metrics.radiation - IDEAL_METRICS.radiation)
    penalty = temp_delta * TEMPERATURE_PENALTY + rad_delta * RADIATION_PENALTY
    return max(MIN_DOUBLING_DAYS, min(MAX_DOUBLING_DAYS, BASE_DOUBLING_DAYS + penalty))


def synthesize_growth_series(metrics: Optional[SiteMetrics]) -> List[GrowthPoint]:
    if metrics is None:
        return list(DEFAULT_GROWTH_SERIES)

    base = base_doubling_time(metrics)
    series: List[GrowthPoint] = []
    for day in range(1, SiteConfig.GROWTH_SERIES_DAYS + 1):
        seasonal = math.sin(day / 2.5) * 0.1
        series.append(GrowthPoint(day=day, doubling_time=round(base + seasonal, 2)))
    return series


__all__ = ["DEFAULT_GROWTH_SERIES", "base_doubling_time", "synthesize_growth_series"]

"""Tolerant decoding of environmental readings from analysis payloads.

Backend versions disagree on key names and on whether numbers arrive as numbers or
strings. Each canonical field has an ordered list of accessors; the first accessor that
finds a non-null value wins and that value must coerce to a finite float. A site gets a
``SiteMetrics`` only when all four fields coerce, never a partially filled record.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from models import SiteMetrics

logger = logging.getLogger(__name__)

Accessor = Callable[[Mapping[str, Any]], Any]


def _path(section: str, key: str) -> Accessor:
    def _get(inner: Mapping[str, Any]) -> Any:
        return as_mapping(inner.get(section)).get(key)

    _get.__name__ = f"{section}.{key}"
    return _get


METRIC_ACCESSORS: Dict[str, List[Accessor]] = {
    "temperature": [
        _path("climate", "temperature"),
        _path("climate", "avg_temperature"),
        _path("climate", "T2M"),
    ],
    "radiation": [
        _path("climate", "solar_radiation"),
        _path("climate", "radiation"),
        _path("climate", "ALLSKY_SFC_SW_DWN"),
    ],
    "ph": [
        _path("water_profile", "initial_pH"),
        _path("water_profile", "ph"),
        _path("water_profile", "pH"),
    ],
    "salinity": [
        _path("water_profile", "salinity"),
        _path("water_profile", "SALINITY"),
    ],
}


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def unwrap_analysis(payload: Any) -> Mapping[str, Any]:
    """Return the inner ``analysis`` object when present, else the payload itself."""

    root = as_mapping(payload)
    inner = root.get("analysis")
    if isinstance(inner, Mapping):
        return inner
    return root


def coerce_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings to a finite float, or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def first_defined(inner: Mapping[str, Any], accessors: List[Accessor]) -> Tuple[Optional[str], Any]:
    for accessor in accessors:
        value = accessor(inner)
        if value is not None:
            return accessor.__name__, value
    return None, None


def resolve_site_metrics(payload: Any) -> Optional[SiteMetrics]:
    """Extract the four canonical readings, or ``None`` if any of them is unusable."""

    if not isinstance(payload, Mapping):
        logger.debug("Metrics payload is not an object (%s); skipping.", type(payload).__name__)
        return None

    inner = unwrap_analysis(payload)
    resolved: Dict[str, float] = {}
    for field, accessors in METRIC_ACCESSORS.items():
        source, raw = first_defined(inner, accessors)
        number = coerce_number(raw)
        if number is None:
            if source is None:
                logger.debug("Metric '%s' missing from payload.", field)
            else:
                logger.debug("Metric '%s' at %s is not numeric: %r", field, source, raw)
            return None
        resolved[field] = number

    return SiteMetrics(**resolved)


__all__ = [
    "METRIC_ACCESSORS",
    "as_mapping",
    "coerce_number",
    "first_defined",
    "resolve_site_metrics",
    "unwrap_analysis",
]

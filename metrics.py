"""Shared helpers for labeling environmental metrics."""

from __future__ import annotations

from typing import Dict, List

METRIC_KEYS: List[str] = ["temperature", "ph", "radiation", "salinity"]

METRIC_LABELS: Dict[str, str] = {
    "temperature": "Temperature (°C)",
    "ph": "pH",
    "radiation": "Radiation (MJ/m²/day)",
    "salinity": "Salinity (%)",
}


def friendly_metric_label(key: str) -> str:
    normalized = (key or "").strip().lower()
    if not normalized:
        return "Metric"
    label = METRIC_LABELS.get(normalized)
    if label:
        return label
    friendly = normalized.replace("_", " ").strip()
    return friendly[:1].upper() + friendly[1:]


__all__ = ["METRIC_KEYS", "METRIC_LABELS", "friendly_metric_label"]

"""Three-tier protein band classification for analysis payloads.

Tiers are evaluated in order and the first applicable one wins:

1. ``biomass_prediction.confidence`` class vector (argmax over Low/Medium/High).
2. ``biomass_prediction.biomass_prediction`` numeric value banded at 30 and 70.
3. ``cultivation_status`` used as a coarse proxy.

Confidence semantics differ per tier: tier 1 reports the winning class strength, tier 2
always reports 70, tier 3 reports a fixed value per status.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from metrics_normalization import as_mapping, coerce_number, unwrap_analysis
from models import ClassificationDecision, ClassifierTier, ProteinLevel, ProteinPrediction

logger = logging.getLogger(__name__)

CONFIDENCE_BANDS: List[ProteinLevel] = [ProteinLevel.LOW, ProteinLevel.MEDIUM, ProteinLevel.HIGH]
MIN_CONFIDENCE_VECTOR = 3
LOW_BAND_CEILING = 30.0
MEDIUM_BAND_CEILING = 70.0
NUMERIC_BAND_SCORE = 70.0
STATUS_PREDICTIONS = {
    "INVALID": (ProteinLevel.LOW, 60.0),
    "MARGINAL": (ProteinLevel.MEDIUM, 65.0),
    "VALID": (ProteinLevel.HIGH, 80.0),
}

TierRule = Tuple[ClassifierTier, Callable[[Mapping[str, Any]], bool], Callable[[Mapping[str, Any]], ProteinPrediction]]


def _biomass(inner: Mapping[str, Any]) -> Mapping[str, Any]:
    return as_mapping(inner.get("biomass_prediction"))


def _confidence_vector(inner: Mapping[str, Any]) -> Optional[Sequence[Any]]:
    confidence = _biomass(inner).get("confidence")
    if isinstance(confidence, (list, tuple)) and len(confidence) >= MIN_CONFIDENCE_VECTOR:
        return confidence
    return None


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def band_for_value(value: float) -> ProteinLevel:
    if value < LOW_BAND_CEILING:
        return ProteinLevel.LOW
    if value < MEDIUM_BAND_CEILING:
        return ProteinLevel.MEDIUM
    return ProteinLevel.HIGH


def _has_confidence_vector(inner: Mapping[str, Any]) -> bool:
    return _confidence_vector(inner) is not None


def _from_confidence_vector(inner: Mapping[str, Any]) -> ProteinPrediction:
    vector = _confidence_vector(inner) or []
    max_idx = 0
    max_val = coerce_number(vector[0]) or 0.0
    for idx, raw in enumerate(vector):
        value = coerce_number(raw)
        # Strictly greater keeps the first occurrence on ties.
        if value is not None and value > max_val:
            max_val = value
            max_idx = idx
    level = CONFIDENCE_BANDS[min(max_idx, len(CONFIDENCE_BANDS) - 1)]
    return ProteinPrediction(level=level, score=_clamp_score(round(max_val * 100, 1)))


def _has_numeric_biomass(inner: Mapping[str, Any]) -> bool:
    return coerce_number(_biomass(inner).get("biomass_prediction")) is not None


def _from_numeric_biomass(inner: Mapping[str, Any]) -> ProteinPrediction:
    value = coerce_number(_biomass(inner).get("biomass_prediction"))
    return ProteinPrediction(level=band_for_value(value), score=NUMERIC_BAND_SCORE)


def _has_known_status(inner: Mapping[str, Any]) -> bool:
    status = inner.get("cultivation_status")
    return isinstance(status, str) and status in STATUS_PREDICTIONS


def _from_status(inner: Mapping[str, Any]) -> ProteinPrediction:
    level, score = STATUS_PREDICTIONS[inner["cultivation_status"]]
    return ProteinPrediction(level=level, score=score)


TIER_RULES: List[TierRule] = [
    (ClassifierTier.CONFIDENCE_VECTOR, _has_confidence_vector, _from_confidence_vector),
    (ClassifierTier.NUMERIC_BANDING, _has_numeric_biomass, _from_numeric_biomass),
    (ClassifierTier.STATUS_PROXY, _has_known_status, _from_status),
]


def classify_protein_with_decision(payload: Any) -> ClassificationDecision:
    """Run the tier rules in order and record which one fired."""

    if not isinstance(payload, Mapping):
        logger.debug("Protein payload is not an object (%s).", type(payload).__name__)
        return ClassificationDecision(tier=ClassifierTier.NONE, detail="payload is not an object")

    inner = unwrap_analysis(payload)
    for tier, applies, compute in TIER_RULES:
        if not applies(inner):
            continue
        prediction = compute(inner)
        logger.debug(
            "Protein tier %s -> %s (%.1f)", tier.value, prediction.level.value, prediction.score
        )
        return ClassificationDecision(tier=tier, prediction=prediction)

    logger.debug("No protein signal in payload.")
    return ClassificationDecision(tier=ClassifierTier.NONE, detail="no applicable tier")


def classify_protein(payload: Any) -> Optional[ProteinPrediction]:
    return classify_protein_with_decision(payload).prediction


__all__ = [
    "TIER_RULES",
    "band_for_value",
    "classify_protein",
    "classify_protein_with_decision",
]

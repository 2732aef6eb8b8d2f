"""Turn one analysis response into the immutable result bundle used by the UI and exports."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Optional, Tuple

from analysis_client import AnalysisRequestError
from config import SiteConfig
from growth import synthesize_growth_series
from key_points import extract_key_points
from markdown_utils import clean_markdown_bold
from metrics_normalization import as_mapping, resolve_site_metrics
from models import SiteAnalysisResult
from protein_classifier import classify_protein_with_decision
from report_assembler import assemble_report, resolve_location_label

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float]


def build_location_query(location_text: Optional[str], coordinates: Optional[Coordinates] = None) -> str:
    """Location string sent to the service; coordinates are appended when a map point is picked."""

    text = (location_text or "").strip()
    if not text and coordinates is None:
        raise ValueError(SiteConfig.MISSING_LOCATION_MESSAGE)
    if coordinates is None:
        return text
    lat, lng = coordinates
    return f"{text or SiteConfig.SELECTED_SITE_LABEL} ({lat:.3f}, {lng:.3f})"


def unwrap_response(body: Any) -> Mapping[str, Any]:
    root = as_mapping(body)
    for key in ("analysis", "data"):
        wrapped = root.get(key)
        if wrapped is not None:
            return as_mapping(wrapped)
    return root


def extract_narrative(wrapper: Mapping[str, Any]) -> str:
    block = as_mapping(wrapper.get("analysis")) or wrapper
    formatted = block.get("formatted_text")
    if isinstance(formatted, (list, tuple)):
        return "\n\n".join(str(part) for part in formatted if part is not None)
    summary = block.get("summary")
    if isinstance(summary, str):
        return summary
    return ""


def derive_site_analysis(body: Any, fallback_location: Optional[str] = None) -> SiteAnalysisResult:
    """Run every derivation stage over a response body. Never raises on malformed input."""

    wrapper = unwrap_response(body)
    if not wrapper:
        logger.debug("Analysis response carried no object; deriving defaults only.")

    narrative = extract_narrative(wrapper)
    cleaned = clean_markdown_bold(narrative)
    location_value = wrapper.get("location")
    location_label = resolve_location_label(
        location_value if isinstance(location_value, str) else None,
        fallback_location,
    )

    metrics = resolve_site_metrics(wrapper)
    decision = classify_protein_with_decision(wrapper)
    key_points = extract_key_points(cleaned)

    return SiteAnalysisResult(
        location_label=location_label,
        narrative=narrative,
        cleaned_narrative=cleaned,
        metrics=metrics,
        protein=decision.prediction,
        growth_series=synthesize_growth_series(metrics),
        key_points=key_points,
        report_blocks=assemble_report(location_label, metrics, decision.prediction, key_points),
        decision=decision,
    )


class AnalysisSession:
    """Generation bookkeeping so a superseded analysis never overwrites a newer one."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self.result: Optional[SiteAnalysisResult] = None
        self.error: Optional[str] = None

    def start(self) -> int:
        with self._lock:
            self._generation += 1
            self.error = None
            return self._generation

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._generation

    def apply(self, token: int, result: SiteAnalysisResult) -> bool:
        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale analysis result (token %s, current %s).", token, self._generation)
                return False
            self.result = result
            self.error = None
            return True

    def fail(self, token: int, message: str = SiteConfig.NETWORK_ERROR_MESSAGE) -> bool:
        with self._lock:
            if token != self._generation:
                return False
            self.error = message
            return True

    def run(self, client: Any, location_text: Optional[str], coordinates: Optional[Coordinates] = None) -> Optional[SiteAnalysisResult]:
        """Analyze a site end to end; returns ``None`` when the call failed or was superseded."""

        query = build_location_query(location_text, coordinates)
        token = self.start()
        try:
            body = client.analyze_site(query)
        except AnalysisRequestError as exc:
            logger.warning("Site analysis failed: %s", exc.detail)
            self.fail(token, exc.user_message)
            return None
        result = derive_site_analysis(body, query)
        if not self.apply(token, result):
            return None
        return result

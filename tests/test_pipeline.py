import pytest

from analysis_client import AnalysisRequestError
from models import ClassifierTier, ProteinLevel
from pipeline import AnalysisSession, build_location_query, derive_site_analysis, extract_narrative, unwrap_response


def _response_body():
    return {
        "analysis": {
            "location": "Lonar Lake",
            "analysis": {
                "climate": {"avg_temperature": 29.0, "radiation": "17.5"},
                "water_profile": {"ph": 9.6, "salinity": "2.8"},
                "biomass_prediction": {"confidence": [0.1, 0.2, 0.7], "biomass_prediction": 10},
                "cultivation_status": "VALID",
                "formatted_text": [
                    "**Verdict:** the site is suitable.",
                    "* **Maintain** pH above 9.5\n* Add shade nets during May",
                ],
            },
        }
    }


def test_derive_site_analysis_end_to_end():
    result = derive_site_analysis(_response_body(), "Lonar")
    assert result.location_label == "Lonar Lake"
    assert result.cleaned_narrative.startswith("Verdict: the site is suitable.")
    assert "**" not in result.cleaned_narrative
    assert result.metrics.temperature == 29.0
    assert result.metrics.radiation == 17.5
    assert result.protein.level is ProteinLevel.HIGH
    assert result.decision.tier is ClassifierTier.CONFIDENCE_VECTOR
    assert result.key_points == ["Maintain pH above 9.5", "Add shade nets during May"]
    assert len(result.growth_series) == 14
    assert [block.key for block in result.report_blocks] == [
        "location",
        "environment",
        "protein",
        "recommendations",
    ]


def test_data_wrapper_and_summary_narrative():
    body = {"data": {"summary": "Keep the culture agitated twice a day.", "cultivation_status": "MARGINAL"}}
    result = derive_site_analysis(body, "Sambhar Lake (26.900, 75.100)")
    assert result.location_label == "Sambhar Lake (26.900, 75.100)"
    assert result.metrics is None
    assert result.protein.level is ProteinLevel.MEDIUM
    assert result.growth_series[0].doubling_time == 2.1
    assert result.key_points == ["Keep the culture agitated twice a day."]


@pytest.mark.parametrize("body", [None, "oops", [], {}, {"analysis": None}])
def test_malformed_bodies_degrade_gracefully(body):
    result = derive_site_analysis(body, None)
    assert result.location_label == "Spirulina cultivation site"
    assert result.metrics is None
    assert result.protein is None
    assert result.key_points == []
    assert len(result.growth_series) == 14
    assert not result.has_report


def test_unwrap_response_priority():
    assert unwrap_response({"analysis": {"a": 1}, "data": {"b": 2}}) == {"a": 1}
    assert unwrap_response({"data": {"b": 2}}) == {"b": 2}
    assert unwrap_response({"c": 3}) == {"c": 3}


def test_extract_narrative_prefers_formatted_text():
    wrapper = {"formatted_text": ["One", "Two"], "summary": "Ignored"}
    assert extract_narrative(wrapper) == "One\n\nTwo"
    assert extract_narrative({"summary": 5}) == ""


def test_build_location_query():
    assert build_location_query("  Lonar Lake ") == "Lonar Lake"
    assert build_location_query("Lonar", (19.97612, 76.50821)) == "Lonar (19.976, 76.508)"
    assert build_location_query("", (1.0, 2.0)) == "Selected Site (1.000, 2.000)"
    with pytest.raises(ValueError):
        build_location_query("   ")


def test_results_are_immutable():
    result = derive_site_analysis(_response_body(), None)
    with pytest.raises(Exception):
        result.location_label = "elsewhere"


class _StubClient:
    def __init__(self, body=None, error=None):
        self.body = body
        self.error = error
        self.queries = []

    def analyze_site(self, location):
        self.queries.append(location)
        if self.error:
            raise self.error
        return self.body


def test_session_applies_latest_result():
    session = AnalysisSession()
    client = _StubClient(body=_response_body())
    result = session.run(client, "Lonar Lake")
    assert result is not None
    assert session.result is result
    assert session.error is None
    assert client.queries == ["Lonar Lake"]


def test_session_discards_superseded_result():
    session = AnalysisSession()
    stale = session.start()
    fresh = session.start()
    assert not session.is_current(stale)
    assert session.apply(stale, derive_site_analysis(_response_body(), None)) is False
    assert session.result is None
    assert session.apply(fresh, derive_site_analysis({}, "Sambhar")) is True
    assert session.result.location_label == "Sambhar"


def test_session_cancel_discards_in_flight_result():
    session = AnalysisSession()
    token = session.start()
    session.cancel()
    assert session.apply(token, derive_site_analysis({}, None)) is False


def test_session_network_failure_surfaces_generic_message():
    session = AnalysisSession()
    client = _StubClient(error=AnalysisRequestError("connection refused"))
    assert session.run(client, "Lonar Lake") is None
    assert session.result is None
    assert session.error == "Unable to analyze this site at the moment. Please try again."


def test_oversized_numbers_do_not_break_derivation():
    body = {
        "location": "Lonar Lake",
        "climate": {"temperature": 10**400, "solar_radiation": 18},
        "water_profile": {"initial_pH": 9.5, "salinity": 2},
        "biomass_prediction": {"biomass_prediction": 10**400},
        "summary": "- Keep the raceway shaded",
    }
    result = derive_site_analysis(body, None)
    assert result.metrics is None
    assert result.protein is None
    assert result.growth_series[0].doubling_time == 2.1
    assert result.key_points == ["Keep the raceway shaded"]

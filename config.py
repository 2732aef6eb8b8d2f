"""
Site Analysis Configuration

Minimal configuration surface for the spirulina site-analysis workflow.
Values are read once from the environment (and an optional .env file) so the
derivation code never has to touch os.environ itself.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class SiteConfig:
    """Site-analysis configuration used across the runtime."""

    # Remote analysis service
    API_BASE_URL = os.getenv("SITE_API_BASE_URL", "http://localhost:8000").rstrip("/")
    API_TOKEN = os.getenv("SITE_API_TOKEN") or None
    ANALYZE_SITE_PATH = "/analysis/analyze-site"
    HTTP_TIMEOUT_SECONDS = float(os.getenv("SITE_HTTP_TIMEOUT", "30"))
    NETWORK_ERROR_MESSAGE = "Unable to analyze this site at the moment. Please try again."
    MISSING_LOCATION_MESSAGE = "Please provide a location name or select a point on the map."

    # Derivation limits
    MAX_KEY_POINTS = 6
    MIN_KEY_POINT_LENGTH = 5
    GROWTH_SERIES_DAYS = 14

    # Presentation
    REPORT_TITLE = "Spirulina Site Analysis Report"
    DEFAULT_LOCATION_LABEL = "Spirulina cultivation site"
    SELECTED_SITE_LABEL = "Selected Site"
    REPORT_FILENAME_PREFIX = "spirulina_site_report_"
    REPORT_FILENAME_FALLBACK = "site"
    BULLET_GLYPH = "•"
    REPORT_DIR = os.getenv("SITE_REPORT_DIR", "site_reports")
    REPORT_RENDERERS: List[str] = [
        renderer.strip()
        for renderer in os.getenv(
            "SITE_REPORT_RENDERERS", "site_report_markdown,site_report_pdf"
        ).split(",")
        if renderer.strip()
    ]
    PDF_WRAP_WIDTH = int(os.getenv("SITE_PDF_WRAP_WIDTH", "90"))
    HTML_TEMPLATE = os.getenv(
        "SITE_HTML_TEMPLATE",
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "renderers", "templates", "site_report.html"),
    )

    PROTEIN_USE_CASES = {
        "Low": "Primarily suitable for animal / cow feed applications.",
        "Medium": "Well-suited for human food and nutraceutical products.",
        "High": "Suitable for high-value medicinal or pharmaceutical-grade formulations.",
    }

    @classmethod
    def analyze_site_url(cls) -> str:
        return f"{cls.API_BASE_URL}{cls.ANALYZE_SITE_PATH}"

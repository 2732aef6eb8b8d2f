"""HTTP client for the remote site-analysis service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from config import SiteConfig

logger = logging.getLogger(__name__)


class AnalysisRequestError(Exception):
    """The analysis call failed; carries the generic, retryable user-facing message."""

    def __init__(self, detail: str, user_message: str = SiteConfig.NETWORK_ERROR_MESSAGE):
        super().__init__(detail)
        self.detail = detail
        self.user_message = user_message


class SiteAnalysisClient:
    """Thin wrapper around ``POST /analysis/analyze-site``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or SiteConfig.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else SiteConfig.API_TOKEN
        self.timeout = timeout or SiteConfig.HTTP_TIMEOUT_SECONDS

    @property
    def analyze_url(self) -> str:
        return f"{self.base_url}{SiteConfig.ANALYZE_SITE_PATH}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def analyze_site(self, location: str) -> Any:
        """Return the decoded JSON body for ``location``; raise ``AnalysisRequestError`` on failure."""

        logger.info("Requesting site analysis for %s", location)
        try:
            resp = requests.post(
                self.analyze_url,
                json={"location": location},
                headers=self._headers(),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout as exc:
            raise AnalysisRequestError(f"Analysis request timed out after {self.timeout}s") from exc
        except requests.exceptions.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "unknown"
            raise AnalysisRequestError(f"Analysis service returned HTTP {status}") from exc
        except requests.exceptions.RequestException as exc:
            raise AnalysisRequestError(f"Analysis request failed: {exc}") from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise AnalysisRequestError("Analysis service returned a non-JSON body") from exc

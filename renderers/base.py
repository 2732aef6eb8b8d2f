"""Base classes for site report renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from models import SiteAnalysisResult


class BaseRenderer(ABC):
    """Shared interface for any report renderer."""

    name: str = "base"
    extension: str = ""

    @abstractmethod
    def render(self, result: SiteAnalysisResult, report_dir: str) -> List[str]:
        """Render the result into artifacts and return the written file paths."""

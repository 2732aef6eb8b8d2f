"""Pull a short list of recommendation bullets out of free narrative text."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from config import SiteConfig

logger = logging.getLogger(__name__)

BULLET_START_PATTERN = re.compile(r"^[0-9]+\.")
LEADING_MARKER_PATTERN = re.compile(r"^[*\-\d.)\s]+")


def _is_bullet(line: str) -> bool:
    return line.startswith("*") or line.startswith("-") or bool(BULLET_START_PATTERN.match(line))


def _strip_marker(line: str) -> str:
    return LEADING_MARKER_PATTERN.sub("", line).strip()


def _candidates(lines: List[str]) -> List[str]:
    stripped = (_strip_marker(line) for line in lines)
    return [line for line in stripped if len(line) >= SiteConfig.MIN_KEY_POINT_LENGTH]


def extract_key_points(text: Optional[str]) -> List[str]:
    """Return up to six recommendation strings, preferring explicit bullets.

    Bulleted lines (``*``, ``-`` or ``1.``) win when any survive marker stripping and the
    minimum-length filter; otherwise every non-empty line is considered. Source order is kept.
    """

    if not text:
        return []

    raw_lines = [line.strip() for line in str(text).split("\n")]
    raw_lines = [line for line in raw_lines if line]

    bullets = _candidates([line for line in raw_lines if _is_bullet(line)])
    if bullets:
        return bullets[: SiteConfig.MAX_KEY_POINTS]

    fallback = _candidates(raw_lines)
    if fallback:
        logger.debug("No bulleted recommendations found; using %d prose lines.", len(fallback))
    return fallback[: SiteConfig.MAX_KEY_POINTS]


__all__ = ["extract_key_points"]

"""Utilities for cleaning narrative Markdown before it is displayed or exported."""

from __future__ import annotations

import re
from typing import Optional

BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def clean_markdown_bold(text: Optional[str]) -> str:
    """Strip ``**bold**`` delimiters while keeping the enclosed text."""

    if not text:
        return ""
    return BOLD_PATTERN.sub(r"\1", str(text))


__all__ = ["clean_markdown_bold"]

"""Site report PDF renderer."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Any, Dict, List, Tuple

from config import SiteConfig
from models import SiteAnalysisResult
from report_assembler import report_filename

from .base import BaseRenderer
from .context import BODY, HEADING, TITLE, StyledLine, require_exportable, styled_lines

LOGGER = logging.getLogger(__name__)

PDF_ENCODING = "cp1252"
PAGE_TOP = 760
PAGE_BOTTOM = 60
LEFT_MARGIN = 50
BODY_INDENT = 58

# style -> (font resource, size, x, leading before, leading after)
LINE_STYLES: Dict[str, Tuple[str, int, int, int, int]] = {
    TITLE: ("F2", 14, LEFT_MARGIN, 0, 22),
    HEADING: ("F2", 11, LEFT_MARGIN, 6, 16),
    BODY: ("F1", 11, BODY_INDENT, 0, 14),
}


class SiteReportPDFRenderer(BaseRenderer):
    """Lay the assembled report blocks onto simple Helvetica pages."""

    name = "site_report_pdf"
    extension = "pdf"

    def render(self, result: SiteAnalysisResult, report_dir: str) -> List[str]:
        require_exportable(result)
        output_path = Path(report_dir) / report_filename(result.location_label, self.extension)
        lines = _wrap_lines(styled_lines(result), SiteConfig.PDF_WRAP_WIDTH)
        _write_simple_pdf(_paginate(lines), output_path)
        LOGGER.info("Wrote site report PDF to %s", output_path)
        return [str(output_path)]


def _sanitize_line(text: str) -> str:
    """Map text onto WinAnsiEncoding, substituting ``?`` for unsupported characters."""

    sanitized = text.encode(PDF_ENCODING, "replace").decode(PDF_ENCODING)
    if sanitized != text:
        LOGGER.warning("PDF font cannot encode some characters in %r; substituted '?'.", text)
    return sanitized


def _pdf_escape_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _wrap_lines(lines: List[StyledLine], width: int) -> List[StyledLine]:
    wrapped: List[StyledLine] = []
    for text, style in lines:
        cleaned = _sanitize_line(text.rstrip())
        chunks = textwrap.wrap(cleaned, width=width, subsequent_indent="  " if style == BODY else "")
        wrapped.extend((chunk, style) for chunk in (chunks or [cleaned]))
    return wrapped


def _paginate(lines: List[StyledLine]) -> List[List[Tuple[str, str, int]]]:
    pages: List[List[Tuple[str, str, int]]] = [[]]
    y = PAGE_TOP
    for text, style in lines:
        _, _, _, before, after = LINE_STYLES[style]
        if y - before < PAGE_BOTTOM:
            pages.append([])
            y = PAGE_TOP
        elif pages[-1]:
            y -= before
        pages[-1].append((text, style, y))
        y -= after
    return pages


def _build_page_stream(placed: List[Tuple[str, str, int]]) -> str:
    commands = ["BT"]
    for text, style, y in placed:
        font, size, x, _, _ = LINE_STYLES[style]
        commands.append(f"/{font} {size} Tf")
        commands.append(f"1 0 0 1 {x} {y} Tm ({_pdf_escape_text(text)}) Tj")
    commands.append("ET")
    return "\n".join(commands)


def _write_simple_pdf(pages: List[List[Tuple[str, str, int]]], output_path: Path) -> None:
    objects: List[Dict[str, Any]] = []

    def add_object(obj: Dict[str, Any]) -> int:
        objects.append(obj)
        obj["_id"] = len(objects)
        return obj["_id"]

    regular_id = add_object({"type": "font", "base": "Helvetica"})
    bold_id = add_object({"type": "font", "base": "Helvetica-Bold"})
    page_ids: List[int] = []
    for placed in pages or [[]]:
        content_id = add_object({"type": "stream", "data": _build_page_stream(placed)})
        page_ids.append(add_object({"type": "page", "content_id": content_id, "parent_id": None}))
    pages_id = add_object({"type": "pages", "kids": page_ids})
    for obj in objects:
        if obj.get("type") == "page":
            obj["parent_id"] = pages_id
    catalog_id = add_object({"type": "catalog", "pages_id": pages_id})

    xref_offsets: List[int] = []
    pieces: List[bytes] = []

    def append_piece(text: str) -> None:
        pieces.append(text.encode(PDF_ENCODING, errors="ignore"))

    append_piece("%PDF-1.4\n")
    for obj in objects:
        xref_offsets.append(sum(len(p) for p in pieces))
        obj_id = obj["_id"]
        body = ""
        if obj["type"] == "font":
            body = f"<< /Type /Font /Subtype /Type1 /BaseFont /{obj['base']} /Encoding /WinAnsiEncoding >>"
        elif obj["type"] == "stream":
            data = obj["data"]
            encoded = data.encode(PDF_ENCODING, errors="ignore")
            body = f"<< /Length {len(encoded)} >>\nstream\n{data}\nendstream"
        elif obj["type"] == "page":
            body = (
                f"<< /Type /Page /Parent {obj['parent_id']} 0 R "
                f"/Resources << /Font << /F1 {regular_id} 0 R /F2 {bold_id} 0 R >> >> "
                f"/MediaBox [0 0 612 792] /Contents {obj['content_id']} 0 R >>"
            )
        elif obj["type"] == "pages":
            kids = " ".join(f"{kid} 0 R" for kid in obj["kids"])
            body = f"<< /Type /Pages /Kids [{kids}] /Count {len(obj['kids'])} >>"
        elif obj["type"] == "catalog":
            body = f"<< /Type /Catalog /Pages {obj['pages_id']} 0 R >>"
        append_piece(f"{obj_id} 0 obj\n{body}\nendobj\n")

    xref_start = sum(len(p) for p in pieces)
    append_piece("xref\n0 {}\n".format(len(objects) + 1))
    append_piece("0000000000 65535 f \n")
    for offset in xref_offsets:
        append_piece(f"{offset:010} 00000 n \n")
    append_piece("trailer\n")
    append_piece(f"<< /Size {len(objects) + 1} /Root {catalog_id} 0 R >>\nstartxref\n{xref_start}\n%%EOF")

    output_path.write_bytes(b"".join(pieces))

import json
import logging
from pathlib import Path

import pytest

from file_utils import SiteReportFileManager
from pipeline import derive_site_analysis
from renderers import available_renderers, get_renderer
from renderers.context import report_markdown, styled_lines
from renderers.site_report_html import SiteReportHTMLRenderer


def _result(location="Lonar Lake (19.976, 76.508)"):
    body = {
        "location": location,
        "climate": {"temperature": 31, "solar_radiation": 18},
        "water_profile": {"initial_pH": 9.5, "salinity": 2},
        "cultivation_status": "VALID",
        "summary": "Overview of the site.\n- Improve aeration in the raceway\n- Increase pH buffering",
    }
    return derive_site_analysis(body, None)


def test_registry_resolves_known_names():
    for name in available_renderers():
        assert get_renderer(name).name == name
    with pytest.raises(ValueError):
        get_renderer("docx")


def test_styled_lines_start_with_title():
    lines = styled_lines(_result())
    assert lines[0] == ("Spirulina Site Analysis Report", "title")
    assert ("Environmental snapshot", "heading") in lines
    assert ("• Improve aeration in the raceway", "body") in lines


def test_report_markdown_lists_blocks():
    markdown = report_markdown(_result())
    assert markdown.startswith("# Spirulina Site Analysis Report\n")
    assert "## Key technical recommendations" in markdown
    assert "- Improve aeration in the raceway" in markdown
    assert "•" not in markdown


def test_pdf_renderer_writes_named_document(tmp_path):
    paths = get_renderer("site_report_pdf").render(_result(), str(tmp_path))
    assert paths == [str(tmp_path / "spirulina_site_report_Lonar_Lake_19_976_76_508_.pdf")]
    data = (tmp_path / "spirulina_site_report_Lonar_Lake_19_976_76_508_.pdf").read_bytes()
    assert data.startswith(b"%PDF-1.4")
    assert data.rstrip().endswith(b"%%EOF")
    assert b"(Spirulina Site Analysis Report) Tj" in data
    assert b"Location: Lonar Lake \\(19.976, 76.508\\)" in data
    assert b"\x95 Improve aeration in the raceway" in data
    assert b"/Helvetica-Bold" in data


def test_pdf_renderer_paginates_long_reports(tmp_path):
    result = _result()
    blocks = list(result.report_blocks) * 20
    long_result = result.model_copy(update={"report_blocks": blocks})
    get_renderer("pdf").render(long_result, str(tmp_path))
    data = next(tmp_path.glob("*.pdf")).read_bytes()
    assert data.count(b"/Type /Page ") > 1


def test_markdown_and_html_renderers(tmp_path):
    result = _result("Pune, India")
    md_paths = get_renderer("site_report_markdown").render(result, str(tmp_path))
    html_paths = get_renderer("site_report_html").render(result, str(tmp_path))
    assert md_paths == [str(tmp_path / "spirulina_site_report_Pune_India.md")]
    html = (tmp_path / "spirulina_site_report_Pune_India.html").read_text(encoding="utf-8")
    assert html_paths == [str(tmp_path / "spirulina_site_report_Pune_India.html")]
    assert "<h2>Protein content band</h2>" in html
    assert "<li>Increase pH buffering</li>" in html


def test_renderers_refuse_results_without_narrative(tmp_path):
    empty = derive_site_analysis({}, "Lonar")
    with pytest.raises(ValueError):
        get_renderer("site_report_pdf").render(empty, str(tmp_path))


def test_file_manager_saves_artifacts_and_metadata(tmp_path):
    manager = SiteReportFileManager(str(tmp_path))
    summary = manager.save_report(
        _result("Pune"), renderers=["site_report_pdf", "site_report_markdown", "docx"]
    )
    report_dir = summary["report_dir"]
    metadata = json.loads((Path(report_dir) / "metadata.json").read_text(encoding="utf-8"))
    assert metadata["report_file"] == "spirulina_site_report_Pune.pdf"
    assert metadata["classifier_tier"] == "status_proxy"
    assert metadata["renderer_failures"] == {"docx": "unknown renderer"}
    assert any(path.endswith("spirulina_site_report_Pune.pdf") for path in metadata["files"])
    saved = json.loads((Path(report_dir) / "site_analysis.json").read_text(encoding="utf-8"))
    assert saved["protein"] == {"level": "High", "score": 80.0}
    assert len(saved["growth_series"]) == 14


def test_file_manager_records_renderer_errors(tmp_path):
    manager = SiteReportFileManager(str(tmp_path))
    summary = manager.save_report(derive_site_analysis({}, "Lonar"), renderers=["site_report_pdf"])
    assert "site_report_pdf" in summary["renderer_failures"]


def test_html_renderer_escapes_markup_from_the_service(tmp_path):
    body = {
        "location": "<b>Lonar</b>",
        "cultivation_status": "VALID",
        "summary": "- <script>alert(2)</script> now\n- Increase pH buffering",
    }
    result = derive_site_analysis(body, None)
    get_renderer("html").render(result, str(tmp_path))
    page = next(tmp_path.glob("*.html")).read_text(encoding="utf-8")
    assert "<script>" not in page
    assert "<li>&lt;script&gt;alert(2)&lt;/script&gt; now</li>" in page
    assert "<title>Spirulina Site Analysis Report: &lt;b&gt;Lonar&lt;/b&gt;</title>" in page
    assert "<b>Lonar</b>" not in page


def test_html_renderer_requires_template(tmp_path):
    with pytest.raises(FileNotFoundError):
        SiteReportHTMLRenderer(template_path=str(tmp_path / "missing.html"))


def test_pdf_renderer_substitutes_unencodable_characters(tmp_path, caplog):
    result = _result("Lonar 湖")
    with caplog.at_level(logging.WARNING, logger="renderers.site_report_pdf"):
        get_renderer("site_report_pdf").render(result, str(tmp_path))
    data = next(tmp_path.glob("*.pdf")).read_bytes()
    assert b"(Location: Lonar ?) Tj" in data
    assert "substituted '?'" in caplog.text

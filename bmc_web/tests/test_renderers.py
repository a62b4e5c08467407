from __future__ import annotations

import sys
from datetime import timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from bmc_web.domain.errors import PdfRendererUnavailableError
from bmc_web.domain.models import AnalysisResult, SegmentAnalysis, Swot
from bmc_web.renderers.pdf_renderer import render_pdf
from bmc_web.renderers.report_view import build_report_view, format_history_time, format_score
from bmc_web.renderers.word_renderer import render_word_document, render_word_html


@pytest.mark.parametrize(
    "score, expected",
    [(8, "8"), (8.0, "8"), (6.5, "6.5"), (0, "0"), (10, "10"), (7.25, "7.25"),
     (7.123456789, "7.123456789"), (9.99999999, "9.99999999")],
)
def test_format_score(score, expected):
    assert format_score(score) == expected


def test_format_history_time_uses_bengali_digits_and_12_hour_clock():
    assert format_history_time("2024-05-01T14:05:09+00:00", tz=timezone.utc) == "০১/০৫/২০২৪, ২:০৫:০৯ PM"
    assert format_history_time("2024-05-01T00:30:00.000Z", tz=timezone.utc) == "০১/০৫/২০২৪, ১২:৩০:০০ AM"


def test_format_history_time_converts_to_requested_zone():
    dhaka = timezone(timedelta(hours=6))
    assert format_history_time("2024-05-01T20:00:00+00:00", tz=dhaka) == "০২/০৫/২০২৪, ২:০০:০০ AM"


def test_format_history_time_leaves_unparseable_values_alone():
    assert format_history_time("yesterday") == "yesterday"


# -----------------------------
# On-screen report
# -----------------------------
def test_report_view_exposes_exact_score_and_swot_counts(sample_result):
    view = build_report_view(sample_result)

    assert view.overall_score == 72
    assert view.gauge_percent == 72
    assert view.swot_card("strengths").count == 2
    assert view.swot_card("weaknesses").count == 1
    assert view.swot_card("opportunities").count == 3
    assert view.swot_card("threats").count == 0


def test_report_view_segment_rows(sample_result):
    view = build_report_view(sample_result)

    assert [r.score_label for r in view.segments] == ["8/10", "6.5/10", "7/10"]
    assert [r.bar_percent for r in view.segments] == [80, 65, 70]


def test_report_view_clamps_out_of_range_scores():
    result = AnalysisResult(
        overall_score=130,
        executive_summary="",
        swot=Swot(),
        segment_analysis=(SegmentAnalysis(segment="x", feedback="", score=-2),),
    )
    view = build_report_view(result)

    assert view.gauge_percent == 100
    assert view.segments[0].bar_percent == 0


# -----------------------------
# Word export
# -----------------------------
def test_word_document_contains_suggestions_and_segment_scores(sample_result):
    payload = render_word_document(sample_result)
    text = payload.decode("utf-8")

    for suggestion in sample_result.suggestions:
        assert suggestion in text
    for label in ("8/10", "6.5/10", "7/10"):
        assert f"<td>{label}</td>" in text
    assert "72/100" in text
    assert sample_result.executive_summary in text


def test_word_document_keeps_full_score_precision():
    result = AnalysisResult(
        overall_score=70,
        executive_summary="",
        swot=Swot(),
        segment_analysis=(SegmentAnalysis(segment="Market Fit", feedback="", score=7.123456789),),
    )
    text = render_word_document(result).decode("utf-8")

    assert "<td>7.123456789/10</td>" in text


def test_word_document_starts_with_bom_and_word_namespace(sample_result):
    payload = render_word_document(sample_result)

    assert payload.startswith("\ufeff".encode("utf-8"))
    assert b"urn:schemas-microsoft-com:office:word" in payload


def test_word_document_lists_every_swot_item(sample_result):
    html = render_word_html(sample_result)
    for items in (sample_result.swot.strengths, sample_result.swot.weaknesses,
                  sample_result.swot.opportunities, sample_result.swot.threats):
        for item in items:
            assert f"<li>{item}</li>" in html


def test_word_document_escapes_markup():
    result = AnalysisResult(
        overall_score=50,
        executive_summary="<script>alert(1)</script>",
        swot=Swot(),
        suggestions=("Tom & Jerry",),
    )
    html = render_word_html(result)

    assert "<script>" not in html
    assert "Tom &amp; Jerry" in html


# -----------------------------
# PDF export
# -----------------------------
def test_render_pdf_without_weasyprint_raises_unavailable():
    with patch.dict(sys.modules, {"weasyprint": None}):
        with pytest.raises(PdfRendererUnavailableError) as exc_info:
            render_pdf("<html></html>")
    assert "print" in str(exc_info.value)


def test_render_pdf_uses_weasyprint_when_available():
    fake_wp = MagicMock()
    fake_wp.HTML.return_value.write_pdf.side_effect = lambda target, **kw: target.write(b"%PDF-1.4 fake")

    with patch.dict(sys.modules, {"weasyprint": fake_wp}):
        pdf = render_pdf("<html><body>report</body></html>")

    assert pdf == b"%PDF-1.4 fake"
    fake_wp.HTML.assert_called_once_with(string="<html><body>report</body></html>", base_url=None)
    css_arg = fake_wp.CSS.call_args.kwargs["string"]
    assert "A4 portrait" in css_arg

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from bmc_web.domain.models import AnalysisResult
from bmc_web.renderers.report_view import build_report_view

WORD_FILENAME = "BMC_Report.doc"
WORD_MIMETYPE = "application/msword"

_env = Environment(
    loader=PackageLoader("bmc_web", "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_word_html(result: AnalysisResult) -> str:
    return _env.get_template("export/word_report.html").render(report=build_report_view(result))


def render_word_document(result: AnalysisResult) -> bytes:
    """
    Word opens HTML saved with a .doc name. The BOM makes it pick up UTF-8
    so Bengali text survives.
    """
    return ("\ufeff" + render_word_html(result)).encode("utf-8")

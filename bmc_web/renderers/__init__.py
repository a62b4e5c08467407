from .pdf_renderer import PDF_FILENAME, render_pdf
from .report_view import ReportView, build_report_view, format_history_time, format_score
from .word_renderer import WORD_FILENAME, WORD_MIMETYPE, render_word_document

__all__ = [
    "PDF_FILENAME",
    "ReportView",
    "WORD_FILENAME",
    "WORD_MIMETYPE",
    "build_report_view",
    "format_history_time",
    "format_score",
    "render_pdf",
    "render_word_document",
]

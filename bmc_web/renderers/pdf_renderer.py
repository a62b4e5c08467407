from __future__ import annotations

import io
import logging

from bmc_web.domain.errors import PdfRendererUnavailableError

log = logging.getLogger(__name__)

PDF_FILENAME = "BMC_Analysis_Report.pdf"
PDF_PAGE_CSS = "@page { size: A4 portrait; margin: 10mm; }"
PDF_UNAVAILABLE_MESSAGE = (
    "PDF library not available. Please use the print view instead "
    "(install with: pip install weasyprint)."
)


def render_pdf(html: str, *, base_url: str | None = None) -> bytes:
    # weasyprint is optional and needs native libraries (pango/cairo)
    try:
        from weasyprint import CSS, HTML
    except (ImportError, OSError) as e:
        log.warning("PDF export unavailable: %s", e)
        raise PdfRendererUnavailableError(PDF_UNAVAILABLE_MESSAGE) from e

    buf = io.BytesIO()
    HTML(string=html, base_url=base_url).write_pdf(buf, stylesheets=[CSS(string=PDF_PAGE_CSS)])
    return buf.getvalue()

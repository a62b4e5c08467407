## routes.py
from __future__ import annotations

import io
from pathlib import Path

from flask import (
    Blueprint,
    abort,
    current_app,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    url_for,
)

from bmc_web.domain.errors import PdfRendererUnavailableError
from bmc_web.domain.models import CANVAS_FIELDS, CANVAS_LABELS, is_submittable
from bmc_web.renderers.pdf_renderer import PDF_FILENAME, render_pdf
from bmc_web.renderers.report_view import build_report_view, format_history_time
from bmc_web.renderers.word_renderer import WORD_FILENAME, WORD_MIMETYPE, render_word_document
from bmc_web.services.analysis_service import AnalysisService, AppState

EMPTY_CANVAS_MESSAGE = "দয়া করে তথ্য পূরণ করুন"
BUSY_MESSAGE = "এনালাইসিস চলছে, অনুগ্রহ করে অপেক্ষা করুন।"
DRAFT_SAVED_MESSAGE = "ড্রাফট সংরক্ষণ করা হয়েছে।"
STORAGE_WARNING_MESSAGE = "ইতিহাস ডিস্কে সংরক্ষণ করা যায়নি; এটি শুধু এই সেশনে থাকবে।"


def create_blueprint(analysis_service: AnalysisService) -> Blueprint:
    bp = Blueprint("web", __name__)
    svc = analysis_service
    bp.add_app_template_filter(format_history_time, "history_time")

    def render_editor(code: int = 200, notice: str | None = None):
        storage_warning = STORAGE_WARNING_MESSAGE if svc.history_repo.last_write_error else None
        return render_template(
            "index.html",
            canvas=svc.canvas,
            labels=CANVAS_LABELS,
            history=svc.history,
            state=svc.state.value,
            error=svc.error,
            notice=notice,
            storage_warning=storage_warning,
            can_submit=is_submittable(svc.canvas),
        ), code

    def current_report():
        if svc.result is None:
            return None
        return build_report_view(svc.result)

    @bp.get("/")
    def index():
        if svc.state == AppState.RESULT and svc.result is not None:
            return redirect(url_for("web.report"))
        return render_editor()

    @bp.post("/canvas")
    def update_canvas():
        if svc.state == AppState.ANALYZING:
            return render_editor(409, notice=BUSY_MESSAGE)
        if svc.state == AppState.RESULT:
            # stale editor form posted while a report is showing
            svc.edit_back()

        svc.update_canvas({name: request.form.get(name, "") for name in CANVAS_FIELDS})
        action = (request.form.get("action") or "").strip()

        if action == "draft":
            if not svc.save_draft():
                return render_editor(400, notice=EMPTY_CANVAS_MESSAGE)
            current_app.logger.info("Draft saved, history size=%d", len(svc.history))
            return render_editor(notice=DRAFT_SAVED_MESSAGE)

        if action == "analyze":
            if not is_submittable(svc.canvas):
                return render_editor(400, notice=EMPTY_CANVAS_MESSAGE)
            if not svc.submit():
                return render_editor(409, notice=BUSY_MESSAGE)
            current_app.logger.info("Analysis finished state=%s", svc.state.value)
            if svc.state == AppState.RESULT:
                return redirect(url_for("web.report"))
            return render_editor(502)

        return render_editor()

    @bp.get("/report")
    def report():
        view = current_report()
        if view is None:
            return redirect(url_for("web.index"))
        return render_template("report.html", report=view, advisory=None, history=svc.history)

    @bp.get("/report/print")
    def report_print():
        view = current_report()
        if view is None:
            return redirect(url_for("web.index"))
        return render_template("report_print.html", report=view, auto_print=True)

    @bp.get("/report/export/doc")
    def export_doc():
        if svc.result is None:
            abort(404)
        payload = render_word_document(svc.result)
        return send_file(
            io.BytesIO(payload),
            mimetype=WORD_MIMETYPE,
            as_attachment=True,
            download_name=WORD_FILENAME,
        )

    @bp.get("/report/export/pdf")
    def export_pdf():
        view = current_report()
        if view is None:
            abort(404)

        # inline styles; the PDF renderer does not fetch from this server
        inline_css = (Path(current_app.static_folder) / "style.css").read_text(encoding="utf-8")
        html = render_template("report_print.html", report=view, auto_print=False, inline_css=inline_css)
        try:
            payload = render_pdf(html)
        except PdfRendererUnavailableError as e:
            current_app.logger.warning("PDF export unavailable: %s", e)
            return render_template("report.html", report=view, advisory=str(e), history=svc.history), 501

        return send_file(
            io.BytesIO(payload),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=PDF_FILENAME,
        )

    @bp.post("/reset")
    def reset():
        svc.reset()
        return redirect(url_for("web.index"))

    @bp.post("/edit")
    def edit_back():
        svc.edit_back()
        return redirect(url_for("web.index"))

    @bp.post("/new")
    def new_plan():
        svc.new_plan()
        return redirect(url_for("web.index"))

    @bp.post("/history/<item_id>/restore")
    def restore_history(item_id: str):
        if svc.state == AppState.ANALYZING:
            return render_editor(409, notice=BUSY_MESSAGE)
        if not svc.restore_from_history(item_id):
            abort(404)
        current_app.logger.info("Restored history item %s", item_id)
        return redirect(url_for("web.index"))

    @bp.post("/history/<item_id>/delete")
    def delete_history(item_id: str):
        svc.delete_history(item_id)
        return redirect(url_for("web.index"))

    @bp.get("/api/state")
    def api_state():
        return jsonify(
            state=svc.state.value,
            error=svc.error,
            can_submit=svc.can_submit,
            canvas=svc.canvas.to_dict(),
            history_count=len(svc.history),
            result=svc.result.to_dict() if svc.result else None,
        )

    return bp

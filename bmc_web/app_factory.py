from __future__ import annotations

from typing import Optional

from flask import Flask

from bmc_web.adapters.llm_gemini import GeminiAnalysisClient
from bmc_web.config.ini_config import AppSettings, IniConfig
from bmc_web.repositories.history_repository import HistoryRepository, JsonFileStorage, KeyValueStorage
from bmc_web.services.analysis_service import AnalysisClient, AnalysisService
from bmc_web.web.routes import create_blueprint


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    analysis_client: Optional[AnalysisClient] = None,
    storage: Optional[KeyValueStorage] = None,
) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    app = Flask(__name__)
    app.logger.setLevel(settings.log_level)

    history_repo = HistoryRepository(
        storage=storage or JsonFileStorage(base_dir=settings.history_dir),
        key=settings.storage_key,
        capacity=settings.history_capacity,
    )
    history_repo.load()
    app.logger.info("History loaded: %d item(s)", len(history_repo))

    if analysis_client is None:
        if not settings.api_key:
            # editing and history still work; only analysis will fail
            app.logger.warning("API key is missing. Please set %s in the environment.", settings.api_key_env)
        analysis_client = GeminiAnalysisClient(
            settings.api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.timeout_seconds,
        )

    analysis_service = AnalysisService(
        history_repo=history_repo,
        analysis_client=analysis_client,
    )

    app.register_blueprint(create_blueprint(analysis_service))
    app.extensions["bmc_analysis_service"] = analysis_service

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app

# Layout
#
#   app_factory.py          composition root (wiring)
#   config/ini_config.py    INI + env -> AppSettings
#   domain/                 canvas, history item, analysis result, errors
#   repositories/           history log over a key-value storage strategy
#   services/               state machine (AnalysisService) + prompt builder
#   adapters/               Gemini client + response schema validation
#   renderers/              report view model, Word (.doc) and PDF exporters
#   web/routes.py           Flask blueprint, no business logic
#   templates/              Jinja templates (editor, report, print, Word export)
#
# Request flow: POST /canvas (action=analyze) -> AnalysisService.submit()
#   -> HistoryRepository.save() -> GeminiAnalysisClient.analyze()
#   -> redirect /report or editor with error.

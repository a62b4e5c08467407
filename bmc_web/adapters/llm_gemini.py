from __future__ import annotations

import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import errors, types

from bmc_web.adapters.analysis_schema import RESPONSE_SCHEMA, parse_analysis_result
from bmc_web.domain.errors import AnalysisTransportError, MissingCredentialError
from bmc_web.domain.models import AnalysisResult, Canvas
from bmc_web.services.prompt_builder import build_prompt

log = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 120


class GeminiAnalysisClient:
    """
    Gemini adapter for the canvas analysis.

    The SDK client is created on first use so the app can start (and edit
    history) without an API key; only analyze() needs one.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = DEFAULT_MODEL,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        client: Any = None,
    ):
        self.api_key = (api_key or "").strip() or None
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def has_credentials(self) -> bool:
        return self._client is not None or self.api_key is not None

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise MissingCredentialError("API key is missing. Set it in the environment before analyzing.")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_seconds * 1000),
            )
        return self._client

    def analyze(self, canvas: Canvas) -> AnalysisResult:
        client = self._get_client()
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )

        started = time.monotonic()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=build_prompt(canvas),
                config=config,
            )
        except errors.APIError as e:
            raise AnalysisTransportError(f"Gemini API error {e.code}: {e.message}") from e
        except Exception as e:
            # httpx timeouts / connection errors surface here
            raise AnalysisTransportError(f"Failed to call Gemini: {e}") from e

        elapsed = time.monotonic() - started
        log.info("Gemini %s answered in %.1fs", self.model, elapsed)

        return parse_analysis_result(getattr(response, "text", None))

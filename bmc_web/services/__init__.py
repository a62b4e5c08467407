from .analysis_service import ANALYSIS_FAILED_MESSAGE, AnalysisService, AppState
from .prompt_builder import build_prompt

__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "AnalysisService",
    "AppState",
    "build_prompt",
]

from .analysis_schema import RESPONSE_SCHEMA, parse_analysis_result
from .llm_gemini import GeminiAnalysisClient

__all__ = [
    "GeminiAnalysisClient",
    "RESPONSE_SCHEMA",
    "parse_analysis_result",
]

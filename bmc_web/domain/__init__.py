from .models import (
    AnalysisResult,
    Canvas,
    HistoryItem,
    SegmentAnalysis,
    Swot,
    derive_preview,
    is_submittable,
    set_field,
)

__all__ = [
    "AnalysisResult",
    "Canvas",
    "HistoryItem",
    "SegmentAnalysis",
    "Swot",
    "derive_preview",
    "is_submittable",
    "set_field",
]

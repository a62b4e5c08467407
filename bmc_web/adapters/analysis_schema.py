"""
Response contract for the analysis call.

RESPONSE_SCHEMA is what we ask Gemini to produce; AnalysisPayload is what we
actually accept. The model output is untrusted, so it is validated here even
though the request already constrains it.
"""
from __future__ import annotations

from typing import Annotated, List

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from bmc_web.domain.errors import AnalysisFormatError
from bmc_web.domain.models import AnalysisResult, SegmentAnalysis, Swot

_STRING_LIST = types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "overallScore": types.Schema(type=types.Type.NUMBER),
        "executiveSummary": types.Schema(type=types.Type.STRING),
        "swot": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "strengths": _STRING_LIST,
                "weaknesses": _STRING_LIST,
                "opportunities": _STRING_LIST,
                "threats": _STRING_LIST,
            },
            required=["strengths", "weaknesses", "opportunities", "threats"],
        ),
        "suggestions": _STRING_LIST,
        "segmentAnalysis": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "segment": types.Schema(type=types.Type.STRING),
                    "feedback": types.Schema(type=types.Type.STRING),
                    "score": types.Schema(type=types.Type.NUMBER),
                },
                required=["segment", "feedback", "score"],
            ),
        ),
    },
    required=["overallScore", "executiveSummary", "swot", "suggestions", "segmentAnalysis"],
)

OverallScore = Annotated[float, Field(strict=True, ge=0, le=100, allow_inf_nan=False)]
SegmentScore = Annotated[float, Field(strict=True, ge=0, le=10, allow_inf_nan=False)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SwotPayload(_Payload):
    strengths: List[StrictStr]
    weaknesses: List[StrictStr]
    opportunities: List[StrictStr]
    threats: List[StrictStr]


class SegmentPayload(_Payload):
    segment: StrictStr
    feedback: StrictStr
    score: SegmentScore


class AnalysisPayload(_Payload):
    overall_score: OverallScore = Field(alias="overallScore")
    executive_summary: StrictStr = Field(alias="executiveSummary")
    swot: SwotPayload
    suggestions: List[StrictStr]
    segment_analysis: List[SegmentPayload] = Field(alias="segmentAnalysis")

    def to_domain(self) -> AnalysisResult:
        return AnalysisResult(
            overall_score=int(round(self.overall_score)),
            executive_summary=self.executive_summary,
            swot=Swot(
                strengths=tuple(self.swot.strengths),
                weaknesses=tuple(self.swot.weaknesses),
                opportunities=tuple(self.swot.opportunities),
                threats=tuple(self.swot.threats),
            ),
            suggestions=tuple(self.suggestions),
            segment_analysis=tuple(
                SegmentAnalysis(segment=s.segment, feedback=s.feedback, score=s.score)
                for s in self.segment_analysis
            ),
        )


def parse_analysis_result(text: str | None) -> AnalysisResult:
    if not (text or "").strip():
        raise AnalysisFormatError("No response text from AI.")
    try:
        payload = AnalysisPayload.model_validate_json(text)
    except ValidationError as e:
        raise AnalysisFormatError(f"Response does not match the analysis schema: {e}") from e
    return payload.to_domain()

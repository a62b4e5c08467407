######## models.py
########

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional, Tuple

# attribute name -> serialized (camelCase) key
CANVAS_FIELDS: dict[str, str] = {
    "key_partners": "keyPartners",
    "key_activities": "keyActivities",
    "key_resources": "keyResources",
    "value_propositions": "valuePropositions",
    "customer_relationships": "customerRelationships",
    "channels": "channels",
    "customer_segments": "customerSegments",
    "cost_structure": "costStructure",
    "revenue_streams": "revenueStreams",
}

CANVAS_LABELS: dict[str, str] = {
    "key_partners": "মূল অংশীদার (Key Partners)",
    "key_activities": "মূল কার্যক্রম (Key Activities)",
    "key_resources": "মূল সম্পদ (Key Resources)",
    "value_propositions": "ভ্যালু প্রপোজিশন (Value Propositions)",
    "customer_relationships": "গ্রাহক সম্পর্ক (Customer Relationships)",
    "channels": "চ্যানেল (Channels)",
    "customer_segments": "গ্রাহক সেগমেন্ট (Customer Segments)",
    "cost_structure": "খরচের কাঠামো (Cost Structure)",
    "revenue_streams": "আয়ের উৎস (Revenue Streams)",
}

PREVIEW_SOURCES = ("value_propositions", "key_activities", "customer_segments")
PREVIEW_PLACEHOLDER = "Untitled Plan"
PREVIEW_MAX_CHARS = 60


@dataclass(frozen=True)
class Canvas:
    key_partners: str = ""
    key_activities: str = ""
    key_resources: str = ""
    value_propositions: str = ""
    customer_relationships: str = ""
    channels: str = ""
    customer_segments: str = ""
    cost_structure: str = ""
    revenue_streams: str = ""

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, name) for name, key in CANVAS_FIELDS.items()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Canvas":
        """
        Builds a Canvas from the camelCase form used on disk.
        Unknown keys are ignored, missing keys stay empty.
        """
        values = {}
        for name, key in CANVAS_FIELDS.items():
            v = raw.get(key)
            if v is not None and not isinstance(v, str):
                raise ValueError(f"Canvas field {key!r} must be a string.")
            values[name] = v or ""
        return cls(**values)


def set_field(canvas: Canvas, field_name: str, value: Optional[str]) -> Canvas:
    if field_name not in CANVAS_FIELDS:
        raise ValueError(f"Unknown canvas field: {field_name}")
    return replace(canvas, **{field_name: "" if value is None else str(value)})


def is_submittable(canvas: Canvas) -> bool:
    return any(getattr(canvas, f.name).strip() for f in fields(canvas))


def derive_preview(canvas: Canvas) -> str:
    preview = PREVIEW_PLACEHOLDER
    for name in PREVIEW_SOURCES:
        value = getattr(canvas, name).strip()
        if value:
            preview = value
            break
    if len(preview) > PREVIEW_MAX_CHARS:
        return preview[:PREVIEW_MAX_CHARS] + "..."
    return preview


@dataclass(frozen=True)
class HistoryItem:
    id: str
    timestamp: str              # ISO-8601, UTC
    preview: str
    data: Canvas

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "preview": self.preview,
            "data": self.data.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "HistoryItem":
        item_id = raw.get("id")
        timestamp = raw.get("timestamp")
        data = raw.get("data")
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("History item is missing an id.")
        if not isinstance(timestamp, str):
            raise ValueError(f"History item {item_id} has no timestamp.")
        if not isinstance(data, Mapping):
            raise ValueError(f"History item {item_id} has no canvas data.")

        canvas = Canvas.from_dict(data)
        preview = raw.get("preview")
        if not isinstance(preview, str):
            preview = derive_preview(canvas)
        return cls(id=item_id, timestamp=timestamp, preview=preview, data=canvas)


@dataclass(frozen=True)
class Swot:
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    opportunities: Tuple[str, ...] = ()
    threats: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SegmentAnalysis:
    segment: str
    feedback: str
    score: float                # 0..10


@dataclass(frozen=True)
class AnalysisResult:
    overall_score: int          # 0..100
    executive_summary: str
    swot: Swot
    suggestions: Tuple[str, ...] = ()
    segment_analysis: Tuple[SegmentAnalysis, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "executiveSummary": self.executive_summary,
            "swot": {
                "strengths": list(self.swot.strengths),
                "weaknesses": list(self.swot.weaknesses),
                "opportunities": list(self.swot.opportunities),
                "threats": list(self.swot.threats),
            },
            "suggestions": list(self.suggestions),
            "segmentAnalysis": [
                {"segment": s.segment, "feedback": s.feedback, "score": s.score}
                for s in self.segment_analysis
            ],
        }

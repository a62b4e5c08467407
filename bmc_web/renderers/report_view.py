from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional, Tuple

from bmc_web.domain.models import AnalysisResult

SWOT_SECTIONS = (
    ("strengths", "শক্তিমত্তা (Strengths)"),
    ("weaknesses", "দুর্বলতা (Weaknesses)"),
    ("opportunities", "সুযোগ (Opportunities)"),
    ("threats", "ঝুঁকি (Threats)"),
)


def format_score(score: float) -> str:
    """8.0 -> '8', 6.5 -> '6.5'; fractional scores keep every digit."""
    score = float(score)
    if score.is_integer():
        return str(int(score))
    return repr(score)


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


_BENGALI_DIGITS = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")


def format_history_time(timestamp: str, tz: Optional[tzinfo] = None) -> str:
    """
    ISO-8601 history timestamp -> local 'dd/mm/yyyy, h:mm:ss AM' in Bengali digits.
    Unparseable values are returned unchanged.
    """
    raw = (timestamp or "").strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError:
        return timestamp
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(tz)

    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    text = f"{moment:%d/%m/%Y}, {hour}:{moment:%M:%S} {suffix}"
    return text.translate(_BENGALI_DIGITS)


@dataclass(frozen=True)
class SegmentRow:
    segment: str
    feedback: str
    score_label: str            # "<score>/10"
    bar_percent: float


@dataclass(frozen=True)
class SwotCard:
    key: str
    title: str
    items: Tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ReportView:
    overall_score: int
    gauge_percent: float
    executive_summary: str
    segments: Tuple[SegmentRow, ...]
    swot_cards: Tuple[SwotCard, ...]
    suggestions: Tuple[str, ...]

    def swot_card(self, key: str) -> SwotCard:
        return next(c for c in self.swot_cards if c.key == key)


def build_report_view(result: AnalysisResult) -> ReportView:
    segments = tuple(
        SegmentRow(
            segment=s.segment,
            feedback=s.feedback,
            score_label=f"{format_score(s.score)}/10",
            bar_percent=_clamp_percent(s.score * 10),
        )
        for s in result.segment_analysis
    )
    swot_cards = tuple(
        SwotCard(key=key, title=title, items=getattr(result.swot, key))
        for key, title in SWOT_SECTIONS
    )
    return ReportView(
        overall_score=result.overall_score,
        gauge_percent=_clamp_percent(result.overall_score),
        executive_summary=result.executive_summary,
        segments=segments,
        swot_cards=swot_cards,
        suggestions=result.suggestions,
    )

from __future__ import annotations

from typing import Callable, Optional

import pytest

from bmc_web.domain.errors import StorageWriteError
from bmc_web.domain.models import AnalysisResult, Canvas, SegmentAnalysis, Swot
from bmc_web.repositories.history_repository import HistoryRepository, KeyValueStorage


# -----------------------------
# Test doubles
# -----------------------------
class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[dict[str, str]] = None, fail_writes: bool = False):
        self.data: dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError("quota exceeded")
        self.writes += 1
        self.data[key] = value


class FakeAnalysisClient:
    """Returns a fixed result, raises a fixed error, or runs a hook."""

    def __init__(
        self,
        result: Optional[AnalysisResult] = None,
        error: Optional[Exception] = None,
        on_call: Optional[Callable[[Canvas], None]] = None,
    ):
        self.result = result
        self.error = error
        self.on_call = on_call
        self.calls: list[Canvas] = []

    def analyze(self, canvas: Canvas) -> AnalysisResult:
        self.calls.append(canvas)
        if self.on_call:
            self.on_call(canvas)
        if self.error:
            raise self.error
        return self.result


# -----------------------------
# Fixtures
# -----------------------------
@pytest.fixture
def sample_result() -> AnalysisResult:
    return AnalysisResult(
        overall_score=72,
        executive_summary="ভালো সম্ভাবনাময় ব্যবসা।",
        swot=Swot(
            strengths=("শক্তিশালী ব্র্যান্ড", "অভিজ্ঞ দল"),
            weaknesses=("সীমিত পুঁজি",),
            opportunities=("অনলাইন বাজার", "রপ্তানি", "সরকারি সহায়তা"),
            threats=(),
        ),
        suggestions=("মূল্য নির্ধারণ পুনর্বিবেচনা করুন", "ডিজিটাল মার্কেটিং বাড়ান"),
        segment_analysis=(
            SegmentAnalysis(segment="Value Proposition", feedback="স্পষ্ট", score=8),
            SegmentAnalysis(segment="Financial Viability", feedback="ঝুঁকিপূর্ণ", score=6.5),
            SegmentAnalysis(segment="Market Fit", feedback="ভালো", score=7.0),
        ),
    )


@pytest.fixture
def filled_canvas() -> Canvas:
    return Canvas(
        key_partners="স্থানীয় কৃষক",
        value_propositions="তাজা জৈব সবজি ঘরে পৌঁছে দেওয়া",
        customer_segments="শহরের পরিবার",
        revenue_streams="মাসিক সাবস্ক্রিপশন",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def history_repo(storage: MemoryStorage) -> HistoryRepository:
    repo = HistoryRepository(storage=storage)
    repo.load()
    return repo

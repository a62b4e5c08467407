from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Protocol

from bmc_web.domain.errors import AnalysisError
from bmc_web.domain.models import AnalysisResult, Canvas, HistoryItem, is_submittable, set_field
from bmc_web.repositories.history_repository import HistoryRepository

log = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "দুঃখিত, এনালাইসিস করতে সমস্যা হচ্ছে। অনুগ্রহ করে আবার চেষ্টা করুন।"


class AppState(str, Enum):
    EDITING = "editing"
    ANALYZING = "analyzing"
    RESULT = "result"


class AnalysisClient(Protocol):
    def analyze(self, canvas: Canvas) -> AnalysisResult: ...


@dataclass
class AnalysisService:
    """
    Service layer: owns the live canvas and the current result, and drives
    the editing -> analyzing -> result cycle. Keeps controllers/routes thin.

    Only one analysis can be in flight: submit() is a no-op unless the
    state is EDITING, and the state check itself runs under a lock.
    """
    history_repo: HistoryRepository
    analysis_client: AnalysisClient

    canvas: Canvas = field(default_factory=Canvas)
    state: AppState = AppState.EDITING
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def history(self) -> tuple[HistoryItem, ...]:
        return self.history_repo.items

    @property
    def can_submit(self) -> bool:
        return self.state == AppState.EDITING and is_submittable(self.canvas)

    # -----------------------------
    # Editing
    # -----------------------------
    def set_field(self, field_name: str, value: Optional[str]) -> bool:
        if self.state == AppState.ANALYZING:
            return False
        self.canvas = set_field(self.canvas, field_name, value)
        return True

    def update_canvas(self, values: Mapping[str, Optional[str]]) -> bool:
        if self.state == AppState.ANALYZING:
            return False
        canvas = self.canvas
        for name, value in values.items():
            canvas = set_field(canvas, name, value)
        self.canvas = canvas
        return True

    def save_draft(self) -> bool:
        if self.state == AppState.ANALYZING or not is_submittable(self.canvas):
            return False
        self.history_repo.save(self.canvas)
        return True

    # -----------------------------
    # Analysis
    # -----------------------------
    def submit(self) -> bool:
        """
        Runs one analysis of the current canvas. Returns False when the
        submission was blocked.
        """
        if not self._lock.acquire(blocking=False):
            return False
        try:
            if not self.can_submit:
                return False

            canvas = self.canvas
            self.history_repo.save(canvas)
            self.state = AppState.ANALYZING
            self.error = None
        finally:
            self._lock.release()

        try:
            result = self.analysis_client.analyze(canvas)
        except AnalysisError as e:
            log.error("Analysis failed (%s): %s", type(e).__name__, e)
            self.error = ANALYSIS_FAILED_MESSAGE
            self.state = AppState.EDITING
            return True
        except Exception:
            log.exception("Unexpected error during analysis")
            self.error = ANALYSIS_FAILED_MESSAGE
            self.state = AppState.EDITING
            return True

        self.result = result
        self.error = None
        self.state = AppState.RESULT
        return True

    # -----------------------------
    # Leaving the report
    # -----------------------------
    def reset(self) -> bool:
        if self.state != AppState.RESULT:
            return False
        self.result = None
        self.state = AppState.EDITING
        return True

    def edit_back(self) -> bool:
        # same transition as reset(); the report is not kept around
        return self.reset()

    def new_plan(self) -> bool:
        if self.state == AppState.ANALYZING:
            return False
        self.canvas = Canvas()
        self.result = None
        self.error = None
        self.state = AppState.EDITING
        return True

    # -----------------------------
    # History
    # -----------------------------
    def restore_from_history(self, item_id: str) -> bool:
        if self.state == AppState.ANALYZING:
            return False
        canvas = self.history_repo.restore(item_id)
        if canvas is None:
            return False
        self.canvas = canvas
        self.result = None
        self.error = None
        self.state = AppState.EDITING
        return True

    def delete_history(self, item_id: str) -> tuple[HistoryItem, ...]:
        return self.history_repo.delete(item_id)

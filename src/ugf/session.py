"""Per-user analysis sessions.

A session owns the single "current image" and "current result" slots.
Every transition builds a new SessionState and assigns it in one step, so
readers never observe a half-updated session.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Protocol

from ugf.classify.errors import ClassificationError
from ugf.classify.types import ClassificationResult
from ugf.ingest.errors import (
    FILE_READ_FAILURE,
    FILE_TOO_LARGE,
    PDF_CORRUPT,
    PDF_EMPTY,
    UNSUPPORTED_FILE_TYPE,
    NormalizationError,
)
from ugf.ingest.types import NormalizedImage, UploadedFile
from ugf.results.aggregate import AggregatedResult, aggregate

logger = logging.getLogger(__name__)

PDF_FAILED_MESSAGE = "Failed to render PDF. The file might be corrupted or unsupported."
FILE_FAILED_MESSAGE = "Failed to process the file. Please try another file."
ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze the image. The model may be unable to process this "
    "file. Please try another image."
)
ANALYSIS_CANCELLED_MESSAGE = "Analysis was cancelled."

NORMALIZATION_MESSAGES: dict[str, str] = {
    FILE_TOO_LARGE: "File is too large. Please upload a file under 10MB.",
    UNSUPPORTED_FILE_TYPE: (
        "Unsupported file type. Please upload a PDF, JPEG, PNG, or WEBP file."
    ),
    PDF_CORRUPT: PDF_FAILED_MESSAGE,
    PDF_EMPTY: PDF_FAILED_MESSAGE,
    FILE_READ_FAILURE: "Failed to read the file.",
}


class Normalizer(Protocol):
    async def normalize(self, upload: UploadedFile) -> NormalizedImage: ...


class Classifier(Protocol):
    async def classify(self, image: NormalizedImage) -> ClassificationResult: ...


class SessionError(Exception):
    """Action rejected in the session's current state."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class SessionBusyError(SessionError):
    def __init__(self) -> None:
        super().__init__("analysis_in_progress", "An analysis is already running")


class NoImageError(SessionError):
    def __init__(self) -> None:
        super().__init__("no_image", "No processed file is ready for analysis")


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of one session."""

    selection_id: str | None = None
    filename: str | None = None
    image: NormalizedImage | None = None
    is_processing_file: bool = False
    is_analyzing: bool = False
    result: AggregatedResult | None = None
    error: str | None = None


class AnalysisSession:
    """Runs file selection and analysis for one user.

    At most one classification is in flight. A normalization whose upload
    is no longer the current selection is discarded when it completes.
    """

    def __init__(
        self,
        *,
        normalizer: Normalizer,
        classifier: Classifier,
        session_id: str | None = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex
        self._normalizer = normalizer
        self._classifier = classifier
        self._state = SessionState()
        self._analysis_task: asyncio.Task[ClassificationResult] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def _is_current(self, selection_id: str | None) -> bool:
        return self._state.selection_id == selection_id

    async def select_file(self, upload: UploadedFile) -> SessionState:
        """Replace the current selection with ``upload`` and normalize it."""
        self._cancel_analysis_task()
        self._state = SessionState(
            selection_id=upload.upload_id,
            filename=upload.filename,
            is_processing_file=True,
        )
        started = time.monotonic()
        logger.info(
            "file_normalize_started",
            extra={"file.mime_type": upload.mime_type, "file.size": upload.size},
        )

        try:
            image = await self._normalizer.normalize(upload)
        except NormalizationError as e:
            error_message = NORMALIZATION_MESSAGES.get(e.code, FILE_FAILED_MESSAGE)
            log_extra = {"error.code": e.code, "error.message": str(e)}
            return self._finish_selection(upload.upload_id, None, error_message, log_extra)
        except Exception as e:
            logger.exception("file_normalize_error")
            log_extra = {"error.code": "unexpected", "error.message": str(e)}
            return self._finish_selection(
                upload.upload_id, None, FILE_FAILED_MESSAGE, log_extra
            )

        logger.info(
            "file_normalize_succeeded",
            extra={
                "image.mime_type": image.mime_type,
                "image.bytes": image.size,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return self._finish_selection(image.source_id, image, None, None)

    def _finish_selection(
        self,
        selection_id: str,
        image: NormalizedImage | None,
        error: str | None,
        log_extra: dict | None,
    ) -> SessionState:
        if not self._is_current(selection_id):
            logger.info(
                "file_normalize_stale_discarded",
                extra={"upload.id": selection_id},
            )
            return self._state
        if log_extra is not None:
            logger.warning("file_normalize_failed", extra=log_extra)
        self._state = replace(
            self._state, image=image, is_processing_file=False, error=error
        )
        return self._state

    async def analyze(self) -> SessionState:
        """Classify the current image, replacing any previous result.

        Raises:
            SessionBusyError: If an analysis is already running.
            NoImageError: If no normalized image is ready.
        """
        state = self._state
        if state.is_analyzing:
            raise SessionBusyError()
        if state.is_processing_file or state.image is None:
            raise NoImageError()

        selection_id = state.selection_id
        self._state = replace(state, is_analyzing=True, result=None, error=None)
        task = asyncio.create_task(self._classifier.classify(state.image))
        self._analysis_task = task
        started = time.monotonic()

        try:
            entries = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The caller itself is going away
                if self._analysis_task is task and self._is_current(selection_id):
                    self._state = replace(self._state, is_analyzing=False)
                raise
            # cancel_analysis() or a new selection already updated the state
            return self._state
        except ClassificationError as e:
            logger.warning(
                "classification_failed",
                extra={"error.code": e.code, "error.message": str(e)},
            )
            return self._finish_analysis(task, selection_id, None)
        except Exception as e:
            logger.exception(
                "classification_error", extra={"error.message": str(e)}
            )
            return self._finish_analysis(task, selection_id, None)
        finally:
            if self._analysis_task is task:
                self._analysis_task = None

        logger.info(
            "analysis_succeeded",
            extra={
                "entries.count": len(entries),
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return self._finish_analysis(task, selection_id, aggregate(entries))

    def _finish_analysis(
        self,
        task: asyncio.Task[ClassificationResult],
        selection_id: str | None,
        result: AggregatedResult | None,
    ) -> SessionState:
        if not self._is_current(selection_id):
            logger.info("analysis_stale_discarded")
            return self._state
        self._state = replace(
            self._state,
            is_analyzing=False,
            result=result,
            error=None if result is not None else ANALYSIS_FAILED_MESSAGE,
        )
        return self._state

    def cancel_analysis(self) -> bool:
        """Cancel the in-flight analysis, if any."""
        if not self._cancel_analysis_task():
            return False
        self._state = replace(
            self._state, is_analyzing=False, error=ANALYSIS_CANCELLED_MESSAGE
        )
        logger.info("analysis_cancelled")
        return True

    def _cancel_analysis_task(self) -> bool:
        task = self._analysis_task
        if task is None or task.done():
            return False
        task.cancel()
        self._analysis_task = None
        return True

    def close(self) -> None:
        self._cancel_analysis_task()


class SessionRegistry:
    """In-memory sessions keyed by id, oldest evicted beyond ``max_sessions``."""

    def __init__(
        self,
        *,
        normalizer: Normalizer,
        classifier: Classifier,
        max_sessions: int = 256,
    ) -> None:
        self._normalizer = normalizer
        self._classifier = classifier
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, AnalysisSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> AnalysisSession:
        session = AnalysisSession(
            normalizer=self._normalizer, classifier=self._classifier
        )
        self._sessions[session.id] = session
        while len(self._sessions) > self._max_sessions:
            _, evicted = self._sessions.popitem(last=False)
            evicted.close()
            logger.info("session_evicted", extra={"session.id": evicted.id})
        return session

    def get(self, session_id: str) -> AnalysisSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def remove(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close(self) -> None:
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()

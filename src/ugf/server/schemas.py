"""Response models for the session API."""

from __future__ import annotations

from pydantic import BaseModel

from ugf.results.presenter import ResultView, build_result_view
from ugf.session import AnalysisSession


class ImageInfo(BaseModel):
    mime_type: str
    size: int
    width: int | None = None
    height: int | None = None


class SessionCreated(BaseModel):
    session_id: str


class SessionSnapshot(BaseModel):
    """What a front-end needs to render one session."""

    session_id: str
    filename: str | None
    is_processing_file: bool
    is_analyzing: bool
    image: ImageInfo | None
    result: ResultView | None
    error: str | None


def snapshot(session: AnalysisSession) -> SessionSnapshot:
    state = session.state
    image = None
    if state.image is not None:
        image = ImageInfo(
            mime_type=state.image.mime_type,
            size=state.image.size,
            width=state.image.width,
            height=state.image.height,
        )
    return SessionSnapshot(
        session_id=session.id,
        filename=state.filename,
        is_processing_file=state.is_processing_file,
        is_analyzing=state.is_analyzing,
        image=image,
        result=build_result_view(state.result) if state.result is not None else None,
        error=state.error,
    )

"""Session routes: upload, preview, analyze."""

import logging
import os

from fastapi import APIRouter, File, HTTPException, Request, Response, UploadFile, status

from ugf.ingest.types import UploadedFile
from ugf.server.schemas import SessionCreated, SessionSnapshot, snapshot
from ugf.session import AnalysisSession, SessionError, SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


def _registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def _get_session(request: Request, session_id: str) -> AnalysisSession:
    session = _registry(request).get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _to_uploaded_file(upload: UploadFile) -> UploadedFile:
    size = upload.size
    if size is None:
        upload.file.seek(0, os.SEEK_END)
        size = upload.file.tell()
        upload.file.seek(0)
    return UploadedFile(
        filename=upload.filename or "upload",
        mime_type=upload.content_type or "",
        size=size,
        reader=upload.read,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(request: Request) -> SessionCreated:
    session = _registry(request).create()
    return SessionCreated(session_id=session.id)


@router.get("/{session_id}")
async def get_session(request: Request, session_id: str) -> SessionSnapshot:
    return snapshot(_get_session(request, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(request: Request, session_id: str) -> None:
    if not _registry(request).remove(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.put("/{session_id}/file")
async def upload_file(
    request: Request,
    session_id: str,
    file: UploadFile = File(...),
) -> SessionSnapshot:
    """Select a new masterplan for the session.

    Validation and rendering failures are reported in ``error``.
    """
    session = _get_session(request, session_id)
    try:
        await session.select_file(_to_uploaded_file(file))
    finally:
        await file.close()
    return snapshot(session)


@router.get("/{session_id}/preview")
async def get_preview(request: Request, session_id: str) -> Response:
    image = _get_session(request, session_id).state.image
    if image is None:
        raise HTTPException(status_code=404, detail="No processed file")
    return Response(content=image.data, media_type=image.mime_type)


@router.post("/{session_id}/analysis")
async def run_analysis(request: Request, session_id: str) -> SessionSnapshot:
    session = _get_session(request, session_id)
    try:
        await session.analyze()
    except SessionError as e:
        raise HTTPException(
            status_code=409, detail={"code": e.code, "message": str(e)}
        ) from e
    return snapshot(session)


@router.delete("/{session_id}/analysis")
async def cancel_analysis(request: Request, session_id: str) -> SessionSnapshot:
    session = _get_session(request, session_id)
    session.cancel_analysis()
    return snapshot(session)

"""API router exposing upload, status and export endpoints for study guides."""
from __future__ import annotations

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from studyguide.errors import (
    ConfigurationError,
    EmptyContentError,
    ExtractionError,
    GuideNotReadyError,
    InvalidFileTypeError,
    ServiceError,
    SessionBusyError,
)
from studyguide.ingest import SourceDocument
from studyguide.models import RenderedArtifact, StudyLanguage
from studyguide.orchestrator import GuideSession, GuideState, SessionSnapshot
from studyguide.services.guide import GuideService, get_guide_service

router = APIRouter(prefix="/sessions", tags=["guide"])

_ERROR_STATUS = (
    (InvalidFileTypeError, 415),
    (ExtractionError, 422),
    (EmptyContentError, 422),
    (ConfigurationError, 500),
    (ServiceError, 502),
)


class SessionResponse(BaseModel):
    """Session status returned by every endpoint of this router."""

    session_id: str
    state: str
    file_name: Optional[str] = None
    language: Optional[str] = None
    error: Optional[str] = None
    truncated: bool = False
    source_language: Optional[str] = None
    guide: Optional[str] = None


def _serialise(snapshot: SessionSnapshot) -> SessionResponse:
    return SessionResponse(
        session_id=snapshot.session_id,
        state=snapshot.state.value,
        file_name=snapshot.file_name,
        language=snapshot.language.value if snapshot.language else None,
        error=snapshot.error_message,
        truncated=snapshot.truncated,
        source_language=snapshot.source_language,
        guide=snapshot.guide,
    )


def _status_for(session: GuideSession) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(session.error, error_type):
            return status_code
    return 500


def _existing_session(service: GuideService, session_id: str) -> GuideSession:
    session = service.find_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def _attachment(artifact: RenderedArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.file_name}"'},
    )


@router.post("/{session_id}/guide", response_model=SessionResponse)
async def create_guide(
    session_id: str,
    file: UploadFile = File(...),
    language: str = Form(StudyLanguage.ENGLISH.value),
    service: GuideService = Depends(get_guide_service),
) -> SessionResponse:
    """Upload a course document and generate its study guide."""

    try:
        study_language = StudyLanguage.parse(language)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    session = service.session(session_id)
    document = SourceDocument(
        content=await file.read(),
        file_name=file.filename or "upload",
        mime_type=file.content_type,
    )
    try:
        snapshot = await session.process(document, study_language)
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    if snapshot.state is GuideState.ERROR:
        raise HTTPException(status_code=_status_for(session), detail=snapshot.error_message)
    return _serialise(snapshot)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, service: GuideService = Depends(get_guide_service)) -> SessionResponse:
    return _serialise(_existing_session(service, session_id).snapshot())


@router.post("/{session_id}/reset", response_model=SessionResponse)
def reset_session(session_id: str, service: GuideService = Depends(get_guide_service)) -> SessionResponse:
    """Discard the current guide, file name and error, then forget the session."""

    try:
        snapshot = _existing_session(service, session_id).reset()
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    service.discard(session_id)
    return _serialise(snapshot)


async def _render(session: GuideSession, kind: str) -> RenderedArtifact:
    renderers = {
        "docx": session.render_docx,
        "pdf": session.render_pdf,
        "preview": session.render_preview,
    }
    try:
        return await asyncio.to_thread(renderers[kind])
    except GuideNotReadyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.get("/{session_id}/export/docx")
async def export_docx(session_id: str, service: GuideService = Depends(get_guide_service)) -> Response:
    return _attachment(await _render(_existing_session(service, session_id), "docx"))


@router.get("/{session_id}/export/pdf")
async def export_pdf(session_id: str, service: GuideService = Depends(get_guide_service)) -> Response:
    return _attachment(await _render(_existing_session(service, session_id), "pdf"))


@router.get("/{session_id}/preview", response_class=HTMLResponse)
async def preview(session_id: str, service: GuideService = Depends(get_guide_service)) -> HTMLResponse:
    """Return the guide as HTML with math spans left for a client-side typesetter."""

    artifact = await _render(_existing_session(service, session_id), "preview")
    return HTMLResponse(content=artifact.text())

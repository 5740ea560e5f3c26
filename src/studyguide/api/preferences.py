"""API router for persisted user preferences."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from studyguide.preferences import DEFAULT_LOGO
from studyguide.services.guide import GuideService, get_guide_service

router = APIRouter(prefix="/preferences", tags=["preferences"])


class LogoResponse(BaseModel):
    logo: str
    is_default: bool


@router.get("/logo", response_model=LogoResponse)
def get_logo(service: GuideService = Depends(get_guide_service)) -> LogoResponse:
    """Return the stored logo, or the default icon when none can be read."""

    stored = service.preferences.get_logo()
    return LogoResponse(logo=stored or DEFAULT_LOGO, is_default=stored is None)


@router.put("/logo", response_model=LogoResponse)
async def put_logo(
    file: UploadFile = File(...),
    service: GuideService = Depends(get_guide_service),
) -> LogoResponse:
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Logo file is empty")
    try:
        data_uri = service.preferences.set_logo(content, file.content_type or "")
    except ValueError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except OSError as exc:
        raise HTTPException(status_code=500, detail="Failed to save logo") from exc
    return LogoResponse(logo=data_uri, is_default=False)

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from studyguide.api import guide_router, preferences_router
from studyguide.config import get_settings
from studyguide.ingest import DocumentFormatDetector
from studyguide.logging_config import configure_logging
from studyguide.services.guide import GuideService, get_guide_service

_settings = get_settings()
configure_logging(_settings.log_dir, _settings.log_level)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Study Guide API")
app.include_router(guide_router)
app.include_router(preferences_router)


@app.get("/", response_class=PlainTextResponse)
def read_root() -> str:
    """Healthcheck endpoint for the service."""
    return "ok"


@app.get("/healthz")
def healthcheck(service: GuideService = Depends(get_guide_service)) -> dict[str, object]:
    """Report whether the generation backend is configured."""

    ready, reason = service.backend_status()
    if not ready:
        raise HTTPException(status_code=503, detail=reason or "Generation backend is not configured")
    return {"status": "ok", "backend": service.settings.backend, "model": service.settings.model}


@app.get("/formats")
def supported_formats() -> dict[str, list[str]]:
    """List the MIME types accepted by the upload endpoint."""

    return {"mime_types": DocumentFormatDetector.allowed_mime_types()}

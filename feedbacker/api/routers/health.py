from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from ...settings import Settings, get_settings
from ..metrics import snapshot_metrics_json, snapshot_metrics_text
from ..models import VersionInfo

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz() -> dict[str, str]:
    return {"status": "ready"}


@router.get("/metricsz", response_class=JSONResponse, tags=["ops"])
async def metricsz() -> dict:
    return snapshot_metrics_json()


@router.get(
    "/metrics",
    response_class=PlainTextResponse,
    tags=["ops"],
    responses={200: {"content": {"text/plain": {}}}},
)
async def metrics() -> PlainTextResponse:
    """Prometheus-style text exposition format."""
    return PlainTextResponse(snapshot_metrics_text())


@router.get("/version", response_model=VersionInfo)
async def version(settings: Settings = Depends(get_settings)) -> VersionInfo:
    return VersionInfo(
        version=settings.VERSION, service=settings.SERVICE_NAME, env=settings.SERVICE_ENV
    )

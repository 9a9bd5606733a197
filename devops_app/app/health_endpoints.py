from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..availability import probe
from ..clock import now_iso, uptime
from ..config import Settings
from .deps import get_datastore, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")  # liveness, never touches the database
async def health():
    return {"status": "healthy", "timestamp": now_iso(), "uptime": uptime()}


@router.get("/status")  # dependency-aware
async def status(datastore=Depends(get_datastore), settings: Settings = Depends(get_settings)):
    report = await probe(datastore, settings.environment)
    return JSONResponse(report.body(), status_code=503 if report.degraded else 200)

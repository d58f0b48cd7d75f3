"""
HTTP control surface.

Endpoints:
  GET /         - Dashboard page
  GET /start    - Start the periodic leak
  GET /stop     - Stop the periodic leak
  GET /status   - Memory snapshot as JSON
  GET /clear    - Release every retained buffer
  GET /leak     - Retain one buffer of ?mb=<n> megabytes
  GET /health   - Liveness check

Handlers are plain functions so FastAPI runs them in its threadpool; the
allocations never block the event loop.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from ..service import LeakService
from .dashboard import DASHBOARD_HTML

router = APIRouter(tags=["leak"])


def get_leak_service(request: Request) -> LeakService:
    """Return the service instance created with the app."""
    return request.app.state.leak_service


@router.get("/", response_class=HTMLResponse)
def dashboard() -> str:
    return DASHBOARD_HTML


@router.get("/start", response_class=PlainTextResponse)
def start_leak(service: LeakService = Depends(get_leak_service)) -> str:
    return service.start_leak()


@router.get("/stop", response_class=PlainTextResponse)
def stop_leak(service: LeakService = Depends(get_leak_service)) -> str:
    return service.stop_leak()


@router.get("/status")
def status(service: LeakService = Depends(get_leak_service)) -> Dict[str, Any]:
    return service.status()


@router.get("/clear", response_class=PlainTextResponse)
def clear_memory(service: LeakService = Depends(get_leak_service)) -> str:
    return service.clear()


@router.get("/leak", response_class=PlainTextResponse)
def leak_once(mb: Optional[str] = None, service: LeakService = Depends(get_leak_service)) -> str:
    # Taken as text so a non-numeric value gets the same range message as 0 or 501.
    return service.leak_once(mb)


@router.get("/health")
def health_check() -> Dict[str, str]:
    return {"status": "healthy", "service": "leaklab"}

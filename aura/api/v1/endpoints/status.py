# Diagnostic endpoints: health, echo test, tool listing and favicon.
# Author: Aura Team
# Date: 2025-06-12
# Version: 0.1.0

from datetime import datetime, timezone
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, Response
from aura.api.deps import get_tool_registry
from aura.core.config import get_settings
from aura.core.tool_registry import ToolRegistry
from aura.models.api_models import EchoResponse, HealthEnv, HealthResponse
from aura.utils.logger import console

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Health Check")
def health():
    """Reports that the server is up and which credentials are configured."""
    settings = get_settings()
    return HealthResponse(
        status="online",
        timestamp=_now_iso(),
        env=HealthEnv(
            gemini_api_configured=bool(settings.GEMINI_API_KEY),
            openweather_api_configured=bool(settings.OPENWEATHER_API_KEY),
            mode=settings.APP_ENV,
        ),
    )


@router.post("/test", response_model=EchoResponse)
def echo_test(payload: Any = Body(default=None)):
    """Echoes the request body back to validate client/server communication."""
    console.info(f"Test request received: {payload}")
    return EchoResponse(
        success=True,
        message="Communication test succeeded.",
        received=payload,
        timestamp=_now_iso(),
    )


@router.get("/tools")
def list_tools(registry: ToolRegistry = Depends(get_tool_registry)) -> List[Dict[str, Any]]:
    return registry.get_declarations()


@router.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=204)

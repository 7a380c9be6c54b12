# The module provides the FastAPI application that serves the Aura chat backend.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from aura.core.config import load_settings
from aura.utils.logger import console

settings = load_settings()

from aura.api.deps import get_tool_registry
from aura.api.v1.api import api_router
from aura.core.exceptions import AuraError


@asynccontextmanager
async def lifespan(app: FastAPI):
    console.rule("Aura server starting")
    if not settings.OPENWEATHER_API_KEY:
        console.display_warning_panel(
            "OPENWEATHER_API_KEY missing",
            "The weather tool will answer every request with a 'service not configured' error.",
        )
    get_tool_registry()
    console.success(f"Aura server ready (mode: {settings.APP_ENV}, model: {settings.GEMINI_MODEL}).")
    yield
    console.info("Aura server shutting down.")


app = FastAPI(
    title="Aura Chat Server",
    version="0.2.0",
    description="Self-care assistant backend relaying chat and tool calls to Gemini.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(AuraError)
async def aura_error_handler(request: Request, exc: AuraError):
    console.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"erro": exc.message, "error": exc.message, "details": exc.details},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    console.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    message = "Invalid request body."
    return JSONResponse(
        status_code=400,
        content={"erro": message, "error": message, "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        console.info(f"Route not found - 404: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "message": f"The route {request.url.path} does not exist on this server",
                "status": 404,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail), "status": exc.status_code},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    console.exception(f"Unhandled error on {request.method} {request.url.path}")
    details = None if settings.is_production else "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    )
    return JSONResponse(
        status_code=500,
        content={
            "erro": "Internal server error",
            "error": "Internal server error",
            "message": str(exc) or "An unexpected error occurred",
            "details": details,
        },
    )


app.include_router(api_router)


def run():
    """Starts the server with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run("aura.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

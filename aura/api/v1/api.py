# The module is to define the API router for the application.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

from fastapi import APIRouter
from aura.api.v1.endpoints import session, chat, status

api_router = APIRouter()

# The browser client calls /chat, /health and /test at the root.
api_router.include_router(chat.router, tags=["Conversation"])
api_router.include_router(status.router, tags=["Status"])

# Include the session router with a '/session' prefix
api_router.include_router(session.router, prefix="/session", tags=["Session Management"])

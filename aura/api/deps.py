# Shared FastAPI dependencies. Tests swap them through app.dependency_overrides.
# Author: Aura Team
# Date: 2025-06-13
# Version: 0.1.0

from functools import lru_cache
from aura.core.tool_registry import ToolRegistry
from aura.services.llm_connector import ModelCaller, call_llm
from aura.services.session_manager import SessionManager, session_manager


@lru_cache
def get_tool_registry() -> ToolRegistry:
    """The registry is discovered once and shared read-only by all requests."""
    return ToolRegistry()


def get_model_caller() -> ModelCaller:
    return call_llm


def get_session_manager() -> SessionManager:
    return session_manager

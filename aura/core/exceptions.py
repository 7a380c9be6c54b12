# Domain errors raised across the server and shaped into JSON by the API layer.
# Author: Aura Team
# Date: 2025-06-12
# Version: 0.1.0

from typing import Optional


class AuraError(Exception):
    """
    Base class of every error the HTTP layer knows how to report.
    Attributes:
        message (str): Human readable message sent to the client.
        status_code (int): HTTP status the error maps to.
        details (Optional[str]): Extra diagnostic text, usually the provider's raw error.
    """
    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class MissingMessageError(AuraError):
    """The chat request carried no user message."""
    status_code = 400


class UpstreamCredentialError(AuraError):
    """The model provider rejected the configured API key."""
    status_code = 401


class UpstreamModelError(AuraError):
    """The configured model name is unknown to the provider."""
    status_code = 400


class UpstreamProviderError(AuraError):
    """Any other failure talking to the model provider."""
    status_code = 500


class ContentBlockedError(UpstreamProviderError):
    """The provider's safety filter blocked the response."""


class ToolNotFoundError(AuraError):
    """The model asked for a tool that is not registered. Never reaches HTTP."""
    status_code = 500

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' not found.")

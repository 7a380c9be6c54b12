# The module is to define the API models for the application.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from aura.models.common import Turn

class ChatRequest(BaseModel):
    """
    Defines the request body for the /chat endpoint.
    Both message field names are accepted for compatibility with older clients.
    Attributes:
        prompt (Optional[str]): The user's message.
        mensagem (Optional[str]): The user's message, legacy field name.
        historico (List[Turn]): Prior turns, when the client keeps the history.
        session_id (Optional[str]): Id of a server-side session, when the server keeps it.
    """
    prompt: Optional[str] = Field(default=None, description="The user's message.")
    mensagem: Optional[str] = Field(default=None, description="The user's message (legacy field name).")
    historico: List[Turn] = Field(default_factory=list, description="Conversation turns kept by the client.")
    session_id: Optional[str] = Field(default=None, description="Id of a server-side session.")

    @property
    def message(self) -> str:
        return (self.mensagem or self.prompt or "").strip()

class ChatResponse(BaseModel):
    """
    Defines the response body for the /chat endpoint.
    `resposta` and `result` carry the same text for the two client generations.
    """
    resposta: str
    result: str
    historico: List[Dict[str, Any]]
    session_id: Optional[str] = None

class NewSessionResponse(BaseModel):
    """
    Defines the response body for the /session/new endpoint.
    Attributes:
        session_id (str): The unique ID for the newly created conversation session.
        message (str): A message indicating the session has been created successfully.
    """
    session_id: str
    message: str

class HealthEnv(BaseModel):
    gemini_api_configured: bool
    openweather_api_configured: bool
    mode: str

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    env: HealthEnv

class EchoResponse(BaseModel):
    success: bool
    message: str
    received: Any = None
    timestamp: str

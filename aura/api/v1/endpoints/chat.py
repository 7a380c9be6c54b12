# The module is to define the API endpoint for chat interactions.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

from fastapi import APIRouter, Depends
from aura.api.deps import get_model_caller, get_session_manager, get_tool_registry
from aura.core.config import get_settings
from aura.core.exceptions import MissingMessageError
from aura.core.orchestrator import new_conversation, run_relay
from aura.core.tool_registry import ToolRegistry
from aura.models.api_models import ChatRequest, ChatResponse
from aura.models.common import Conversation
from aura.services.llm_connector import ModelCaller
from aura.services.session_manager import SessionManager
from aura.utils.logger import console

router = APIRouter()


async def _relay(conversation: Conversation, message: str, model: ModelCaller, registry: ToolRegistry) -> str:
    settings = get_settings()
    # Bound the client or session history before it reaches the model.
    conversation.truncate(settings.MAX_HISTORY_TURNS)
    outcome = await run_relay(conversation, message, model, registry, max_rounds=settings.MAX_TOOL_ROUNDS)
    conversation.truncate(settings.MAX_HISTORY_TURNS)
    return outcome.text


@router.post("/chat",
          response_model=ChatResponse,
          response_model_exclude_none=True)
async def chat_with_aura(
    request: ChatRequest,
    model: ModelCaller = Depends(get_model_caller),
    registry: ToolRegistry = Depends(get_tool_registry),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Handles a single turn in a conversation.

    Without `session_id` the history travels with the request and comes back in
    the response. With it, the history is kept server side and the exchange runs
    under that session's lock.
    """
    message = request.message
    if not message:
        raise MissingMessageError("The user message is required.")
    console.info(f"Received chat message ({len(message)} chars, {len(request.historico)} prior turns).")

    if request.session_id:
        session_id = request.session_id
        async with sessions.lock(session_id):
            stored = sessions.get_conversation(session_id)
            # Work on a copy so a failed exchange leaves the stored session untouched.
            conversation = stored.model_copy(deep=True) if stored else new_conversation(request.historico)
            text = await _relay(conversation, message, model, registry)
            sessions.save_conversation(session_id, conversation)
    else:
        session_id = None
        conversation = new_conversation(request.historico)
        text = await _relay(conversation, message, model, registry)

    console.success(f"Final answer: {text}")
    return ChatResponse(
        resposta=text,
        result=text,
        historico=[turn.to_wire() for turn in conversation.history()],
        session_id=session_id,
    )

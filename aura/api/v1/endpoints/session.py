# The module is to define the API endpoints for session management.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0


from fastapi import APIRouter, Depends
from aura.api.deps import get_session_manager
from aura.core.orchestrator import new_conversation
from aura.services.session_manager import SessionManager
from aura.utils.logger import console
from aura.models.api_models import NewSessionResponse

router = APIRouter()

@router.post("/new",
          response_model=NewSessionResponse)
def create_new_session(sessions: SessionManager = Depends(get_session_manager)):
    """
    Initializes a new server-side session and returns its unique ID.
    """
    session_id = sessions.new_session_id()
    sessions.save_conversation(session_id, new_conversation())
    console.info(f"New session created: {session_id}")
    return NewSessionResponse(
        session_id=session_id,
        message="New session created successfully."
    )

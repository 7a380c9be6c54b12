# aura/core/orchestrator.py
# Relay loop that forwards tool calls between the model and the local tools.
# Author: Aura Team
# Date: 2025-06-13
# Version: 4.0.0

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from aura.core.config import get_settings
from aura.core.exceptions import ToolNotFoundError
from aura.core.persona import (
    EMPTY_AFTER_TOOL_FALLBACK,
    EMPTY_RESPONSE_FALLBACK,
    TOOL_ROUNDS_EXHAUSTED_FALLBACK,
    build_preamble,
)
from aura.core.tool_registry import ToolRegistry
from aura.models.common import Conversation, FunctionCall, FunctionResponse, Turn
from aura.services.llm_connector import ModelCaller
from aura.utils.logger import console

NOT_IMPLEMENTED_ERROR = "not implemented"


class RelayState(str, Enum):
    AWAITING_MODEL = "AWAITING_MODEL"
    HAS_TOOL_REQUESTS = "HAS_TOOL_REQUESTS"
    TERMINAL = "TERMINAL"


@dataclass
class RelayOutcome:
    """
    Result of one chat exchange.
    Attributes:
        text: The answer shown to the user.
        rounds: Number of tool-call rounds that were resolved.
        tool_calls: Total tool invocations across all rounds.
        exhausted: True when the round cap stopped the loop.
    """
    text: str
    rounds: int = 0
    tool_calls: int = 0
    exhausted: bool = False


def new_conversation(history: Optional[List[Turn]] = None) -> Conversation:
    """Starts a conversation with the persona preamble, followed by any prior turns."""
    return Conversation.from_history(build_preamble(), history)


async def _resolve_call(call: FunctionCall, registry: ToolRegistry) -> FunctionResponse:
    console.tool_call(call.name, call.args)
    try:
        payload = await registry.execute(call.name, call.args)
    except ToolNotFoundError:
        console.error(f"Tool '{call.name}' requested by the model is not registered.")
        payload = {"error": NOT_IMPLEMENTED_ERROR}
    return FunctionResponse(name=call.name, response=payload, id=call.id)


def _final_text(response: Turn, used_tools: bool) -> str:
    text = response.text
    if text:
        return text
    if used_tools:
        console.warning("Final model response carried no text after a tool call.")
        return EMPTY_AFTER_TOOL_FALLBACK
    console.warning("Final model response carried no text.")
    return EMPTY_RESPONSE_FALLBACK


async def run_relay(
    conversation: Conversation,
    user_message: str,
    model: ModelCaller,
    registry: ToolRegistry,
    max_rounds: Optional[int] = None,
) -> RelayOutcome:
    """
    Runs one chat exchange to completion.

    The user message is appended to the conversation once and the model is
    called with the full snapshot. While the model answers with tool calls,
    every call of the answer is resolved and all results go back together in a
    single turn. At most `max_rounds` such rounds are resolved; after that a
    fallback text is returned. The final text is appended as a model turn.
    """
    if max_rounds is None:
        max_rounds = get_settings().MAX_TOOL_ROUNDS
    tools = registry.get_definitions()

    conversation.append(Turn.user_text(user_message))
    state = RelayState.AWAITING_MODEL
    outcome = RelayOutcome(text="")

    console.relay_round(0)
    response = await model(conversation.snapshot(), tools)

    while True:
        calls = response.function_calls
        if not calls:
            state = RelayState.TERMINAL
            outcome.text = _final_text(response, used_tools=outcome.tool_calls > 0)
            break
        if outcome.rounds >= max_rounds:
            console.warning(f"Model still requested tools after {max_rounds} rounds. Giving up.")
            outcome.exhausted = True
            outcome.text = TOOL_ROUNDS_EXHAUSTED_FALLBACK
            state = RelayState.TERMINAL
            break

        state = RelayState.HAS_TOOL_REQUESTS
        conversation.append(response)
        results = [await _resolve_call(call, registry) for call in calls]
        conversation.append(Turn.tool_results(results))
        outcome.rounds += 1
        outcome.tool_calls += len(calls)

        state = RelayState.AWAITING_MODEL
        console.relay_round(outcome.rounds)
        response = await model(conversation.snapshot(), tools)

    console.debug(f"Relay finished in state {state.value}")
    conversation.append(Turn.model_text(outcome.text))
    console.success(f"Relay finished after {outcome.rounds} tool round(s).")
    return outcome

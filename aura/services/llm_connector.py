# aura/services/llm_connector.py
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

import json
from functools import lru_cache
from typing import Any, Awaitable, Callable, Dict, List, Optional
from openai import (
    AsyncOpenAI,
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from aura.core.config import get_settings
from aura.core.exceptions import (
    ContentBlockedError,
    UpstreamCredentialError,
    UpstreamModelError,
    UpstreamProviderError,
)
from aura.models.common import FunctionCall, Part, Turn
from aura.utils.logger import console

# Signature shared by call_llm and the stub models used in tests.
ModelCaller = Callable[[List[Turn], Optional[List[Dict[str, Any]]]], Awaitable[Turn]]


@lru_cache
def get_llm_client() -> AsyncOpenAI:
    """
    Builds the client for Gemini's OpenAI-compatible endpoint once per process.
    Retries are disabled: a failed model call is reported to the HTTP caller.
    """
    settings = get_settings()
    return AsyncOpenAI(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.LLM_TIMEOUT,
        max_retries=0,
    )


def turns_to_messages(turns: List[Turn]) -> List[Dict[str, Any]]:
    """
    Converts conversation turns into OpenAI chat messages.

    Tool results without an id are paired by position with the calls of the
    preceding model turn, since client supplied histories may carry no ids.
    """
    messages: List[Dict[str, Any]] = []
    pending_ids: List[str] = []

    for index, turn in enumerate(turns):
        if turn.role == "model":
            pending_ids = []
            tool_calls = []
            for position, call in enumerate(turn.function_calls):
                call_id = call.id or f"call_{index}_{position}"
                pending_ids.append(call_id)
                tool_calls.append({
                    "id": call_id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": json.dumps(call.args, ensure_ascii=False)},
                })
            message: Dict[str, Any] = {"role": "assistant", "content": turn.text if turn.has_text else None}
            if tool_calls:
                message["tool_calls"] = tool_calls
            elif message["content"] is None:
                message["content"] = ""
            messages.append(message)
            continue

        for position, result in enumerate(turn.function_responses):
            if result.id:
                call_id = result.id
            elif position < len(pending_ids):
                call_id = pending_ids[position]
            else:
                call_id = f"call_{index}_{position}"
            messages.append({
                "role": "tool",
                "tool_call_id": call_id,
                "content": json.dumps(result.response, ensure_ascii=False),
            })
        if turn.has_text:
            messages.append({"role": "user", "content": turn.text})
        pending_ids = []

    return messages


def _decode_arguments(raw: Optional[str], tool_name: str) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        console.warning(f"Could not decode arguments for tool '{tool_name}': {raw!r}")
        return {}
    if not isinstance(decoded, dict):
        console.warning(f"Arguments for tool '{tool_name}' are not an object: {raw!r}")
        return {}
    return decoded


def message_to_turn(message: Any) -> Turn:
    """Converts an OpenAI assistant message into a model turn."""
    parts: List[Part] = []
    if message.content:
        parts.append(Part(text=message.content))
    for tool_call in message.tool_calls or []:
        name = tool_call.function.name
        parts.append(Part(function_call=FunctionCall(
            name=name,
            args=_decode_arguments(tool_call.function.arguments, name),
            id=tool_call.id or None,
        )))
    return Turn(role="model", parts=parts)


def _provider_message(e: APIError) -> str:
    body = e.body
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        body = body.get("error", body)
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return e.message or "Unknown API Error"


def _translate_api_error(e: APIError) -> Exception:
    message = _provider_message(e)
    lowered = message.lower()
    if isinstance(e, (AuthenticationError, PermissionDeniedError)) or "api key" in lowered:
        return UpstreamCredentialError("Invalid or missing Gemini API key.", details=message)
    if isinstance(e, NotFoundError) or (isinstance(e, BadRequestError) and "model" in lowered):
        return UpstreamModelError(f"Invalid Gemini model: {get_settings().GEMINI_MODEL}.", details=message)
    if isinstance(e, APITimeoutError):
        return UpstreamProviderError("Gemini API did not answer in time.", details=message)
    if isinstance(e, APIConnectionError):
        return UpstreamProviderError("Could not reach the Gemini API.", details=message)
    status = e.status_code if isinstance(e, APIStatusError) else "n/a"
    return UpstreamProviderError(f"Error from Gemini API: {message}", details=f"status={status}")


async def call_llm(turns: List[Turn], tools: Optional[List[Dict[str, Any]]] = None) -> Turn:
    """
    Sends the conversation to the model and returns its reply as a model turn.

    Raises:
        UpstreamCredentialError: The API key was rejected.
        UpstreamModelError: The configured model does not exist.
        ContentBlockedError: The safety filter blocked the reply.
        UpstreamProviderError: Any other provider or transport failure.
    """
    settings = get_settings()
    client = get_llm_client()

    request_params: Dict[str, Any] = {
        "model": settings.GEMINI_MODEL,
        "messages": turns_to_messages(turns),
        "temperature": settings.LLM_TEMPERATURE,
    }
    if tools:
        request_params["tools"] = tools
        request_params["tool_choice"] = "auto"

    try:
        response = await client.chat.completions.create(**request_params)
    except APIError as e:
        console.error(f"An API error occurred: {_provider_message(e)}")
        raise _translate_api_error(e) from e

    if not response.choices:
        raise UpstreamProviderError("Gemini API returned no candidates.")
    choice = response.choices[0]
    if choice.finish_reason == "content_filter":
        console.warning("Gemini blocked the response (content_filter).")
        raise ContentBlockedError("Gemini API blocked the response: SAFETY", details="finish_reason=content_filter")

    return message_to_turn(choice.message)

import asyncio
import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from aura.core.exceptions import (
    ContentBlockedError,
    UpstreamCredentialError,
    UpstreamModelError,
    UpstreamProviderError,
)
from aura.models.common import FunctionCall, FunctionResponse, Part, Turn
from aura.services import llm_connector
from aura.services.llm_connector import call_llm, message_to_turn, turns_to_messages

REQUEST = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")


def _status_error(cls, status, message):
    body = {"error": {"message": message}}
    return cls(message, response=httpx.Response(status, request=REQUEST, json=body), body=body["error"])


class FakeClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.kwargs = None
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.result


def _completion(content=None, tool_calls=None, finish_reason="stop"):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason=finish_reason)])


def _tool_call(name, arguments, call_id="call-1"):
    return SimpleNamespace(id=call_id, function=SimpleNamespace(name=name, arguments=arguments))


def test_turns_to_messages_pairs_results_without_ids():
    turns = [
        Turn.user_text("Weather in Curitiba"),
        Turn(role="model", parts=[Part(function_call=FunctionCall(name="getWeather", args={"location": "Curitiba"}))]),
        Turn.tool_results([FunctionResponse(name="getWeather", response={"error": "service not configured"})]),
    ]
    messages = turns_to_messages(turns)
    assert messages[0] == {"role": "user", "content": "Weather in Curitiba"}
    assistant = messages[1]
    assert assistant["role"] == "assistant"
    assert assistant["content"] is None
    call = assistant["tool_calls"][0]
    assert call["function"]["name"] == "getWeather"
    assert json.loads(call["function"]["arguments"]) == {"location": "Curitiba"}
    assert messages[2]["role"] == "tool"
    assert messages[2]["tool_call_id"] == call["id"]
    assert json.loads(messages[2]["content"]) == {"error": "service not configured"}


def test_turns_to_messages_keeps_provider_ids():
    turns = [
        Turn(role="model", parts=[Part(function_call=FunctionCall(name="getCurrentTime", id="abc"))]),
        Turn.tool_results([FunctionResponse(name="getCurrentTime", response={"currentTime": "x"}, id="abc")]),
    ]
    messages = turns_to_messages(turns)
    assert messages[0]["tool_calls"][0]["id"] == "abc"
    assert messages[1]["tool_call_id"] == "abc"


def test_message_to_turn_decodes_tool_calls():
    message = SimpleNamespace(content="", tool_calls=[
        _tool_call("getWeather", '{"location": "Curitiba"}'),
        _tool_call("getCurrentTime", "not json", call_id="call-2"),
    ])
    turn = message_to_turn(message)
    assert turn.role == "model"
    assert not turn.has_text
    assert [(c.name, c.args, c.id) for c in turn.function_calls] == [
        ("getWeather", {"location": "Curitiba"}, "call-1"),
        ("getCurrentTime", {}, "call-2"),
    ]


def test_call_llm_sends_tools_and_returns_text(monkeypatch):
    client = FakeClient(result=_completion(content="Olá!"))
    monkeypatch.setattr(llm_connector, "get_llm_client", lambda: client)
    tools = [{"type": "function", "function": {"name": "getCurrentTime"}}]
    turn = asyncio.run(call_llm([Turn.user_text("oi")], tools))
    assert turn.text == "Olá!"
    assert client.kwargs["tools"] == tools
    assert client.kwargs["tool_choice"] == "auto"
    assert client.kwargs["messages"] == [{"role": "user", "content": "oi"}]


def test_call_llm_content_filter_is_blocked(monkeypatch):
    client = FakeClient(result=_completion(finish_reason="content_filter"))
    monkeypatch.setattr(llm_connector, "get_llm_client", lambda: client)
    with pytest.raises(ContentBlockedError):
        asyncio.run(call_llm([Turn.user_text("oi")]))


@pytest.mark.parametrize("error, expected", [
    (_status_error(openai.AuthenticationError, 401, "Incorrect API key provided"), UpstreamCredentialError),
    (_status_error(openai.BadRequestError, 400, "API key not valid. Please pass a valid API key."), UpstreamCredentialError),
    (_status_error(openai.NotFoundError, 404, "models/gemini-0 is not found"), UpstreamModelError),
    (_status_error(openai.InternalServerError, 500, "internal"), UpstreamProviderError),
    (openai.APITimeoutError(request=REQUEST), UpstreamProviderError),
])
def test_call_llm_maps_provider_errors(monkeypatch, error, expected):
    monkeypatch.setattr(llm_connector, "get_llm_client", lambda: FakeClient(error=error))
    with pytest.raises(expected) as excinfo:
        asyncio.run(call_llm([Turn.user_text("oi")]))
    assert excinfo.value.status_code == expected.status_code

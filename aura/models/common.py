# The module is to define the common conversation model for the application.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0


from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional, Literal

# Tool-result turns are sent with the user role; some client SDKs label them "function".
Role = Literal["user", "model"]

_ROLE_ALIASES = {"function": "user", "assistant": "model"}


class FunctionCall(BaseModel):
    """
    A tool invocation requested by the model.
    Attributes:
        name (str): Name of the requested tool.
        args (dict): Arguments for the tool, as decoded from the model's JSON.
        id (Optional[str]): Provider id pairing the call with its result.
    """
    name: str = Field(..., description="Name of the requested tool.")
    args: Dict[str, Any] = Field(default_factory=dict, description="Arguments for the tool.")
    id: Optional[str] = Field(default=None, description="Provider id of the call.")


class FunctionResponse(BaseModel):
    """
    The canonical tool-result envelope. `response` is always a flat dict:
    either the tool's data or {"error": message}.
    """
    name: str = Field(..., description="Name of the tool that produced the result.")
    response: Dict[str, Any] = Field(default_factory=dict, description="The tool payload.")
    id: Optional[str] = Field(default=None, description="Id of the call this result answers.")


class Part(BaseModel):
    """
    One piece of a turn: plain text, a tool invocation or a tool result.
    Serialized with the camelCase keys the browser client exchanges.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    function_call: Optional[FunctionCall] = Field(default=None, alias="functionCall")
    function_response: Optional[FunctionResponse] = Field(default=None, alias="functionResponse")

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> "Part":
        kinds = [self.text is not None, self.function_call is not None, self.function_response is not None]
        if sum(kinds) != 1:
            raise ValueError("A part must hold exactly one of text, functionCall or functionResponse.")
        return self


class Turn(BaseModel):
    """
    Represents one message of the conversation, attributed to the user or the model.
    Attributes:
        role (Role): "user" or "model".
        parts (List[Part]): Ordered content of the turn.
    """
    role: Role = Field(..., description="The role of the message sender.")
    parts: List[Part] = Field(default_factory=list, description="Ordered content of the turn.")

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _ROLE_ALIASES.get(value.lower(), value.lower())
        return value

    @classmethod
    def user_text(cls, text: str) -> "Turn":
        return cls(role="user", parts=[Part(text=text)])

    @classmethod
    def model_text(cls, text: str) -> "Turn":
        return cls(role="model", parts=[Part(text=text)])

    @classmethod
    def tool_results(cls, results: List[FunctionResponse]) -> "Turn":
        return cls(role="user", parts=[Part(function_response=result) for result in results])

    @property
    def text(self) -> str:
        """Concatenation of the text parts, in order."""
        return "".join(part.text for part in self.parts if part.text is not None)

    @property
    def has_text(self) -> bool:
        return any(part.text is not None for part in self.parts)

    @property
    def function_calls(self) -> List[FunctionCall]:
        return [part.function_call for part in self.parts if part.function_call is not None]

    @property
    def function_responses(self) -> List[FunctionResponse]:
        return [part.function_response for part in self.parts if part.function_response is not None]

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Conversation(BaseModel):
    """
    The state of one chat: a fixed persona preamble followed by a truncatable tail.
    Only the tail is ever trimmed, so the persona framing survives any history limit.
    """
    preamble: List[Turn] = Field(default_factory=list, description="Persona turns, never truncated.")
    tail: List[Turn] = Field(default_factory=list, description="Real turns of the conversation.")

    @classmethod
    def from_history(cls, preamble: List[Turn], history: Optional[List[Turn]] = None) -> "Conversation":
        """
        Builds the state from a client supplied history. A history that echoes the
        preamble back keeps a single copy of it.
        """
        tail = list(history or [])
        if preamble and tail[:len(preamble)] == preamble:
            tail = tail[len(preamble):]
        return cls(preamble=list(preamble), tail=tail)

    def append(self, turn: Turn) -> None:
        self.tail.append(turn)

    def snapshot(self) -> List[Turn]:
        return [*self.preamble, *self.tail]

    def history(self) -> List[Turn]:
        return list(self.tail)

    def truncate(self, max_turns: int) -> None:
        """
        Keeps the preamble and about `max_turns` of the most recent tail turns.
        The kept tail always opens with a user text turn, so no tool result is
        left without the call that produced it. The cut moves forward to the
        next exchange when one starts inside the window; otherwise it moves back
        to the start of the latest exchange, which may keep more than `max_turns`.
        """
        if max_turns <= 0 or len(self.tail) <= max_turns:
            return
        cut = len(self.tail) - max_turns
        starts = [i for i, turn in enumerate(self.tail) if _opens_exchange(turn)]
        later = [i for i in starts if i >= cut]
        if later:
            cut = later[0]
        else:
            earlier = [i for i in starts if i < cut]
            cut = earlier[-1] if earlier else 0
        self.tail = self.tail[cut:]


def _opens_exchange(turn: Turn) -> bool:
    return turn.role == "user" and turn.has_text

import os

# Settings are cached on first use, so the environment must be fixed before aura is imported.
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ.pop("OPENWEATHER_API_KEY", None)
os.environ["APP_ENV"] = "test"

from datetime import datetime, timezone
from typing import List

import pytest

from aura.core.config import Settings
from aura.core.tool_registry import ToolRegistry
from aura.models.common import FunctionCall, Part, Turn
from aura.tools.time_tool import CurrentTimeTool
from aura.tools.weather_tool import WeatherTool

FIXED_NOW = datetime(2024, 6, 1, 17, 30, 5, tzinfo=timezone.utc)


def make_settings(**overrides) -> Settings:
    values = {"GEMINI_API_KEY": "test-gemini-key", "OPENWEATHER_API_KEY": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def text_turn(*texts: str) -> Turn:
    return Turn(role="model", parts=[Part(text=t) for t in texts])


def call_turn(*names: str, **args) -> Turn:
    return Turn(role="model", parts=[
        Part(function_call=FunctionCall(name=name, args=args, id=f"id-{i}")) for i, name in enumerate(names)
    ])


class ScriptedModel:
    """Replays canned model turns; the last one repeats once the script runs out."""

    def __init__(self, *responses: Turn):
        self.responses: List[Turn] = list(responses)
        self.calls: List[List[Turn]] = []
        self.tools = None

    async def __call__(self, turns, tools=None):
        self.calls.append([turn.model_copy(deep=True) for turn in turns])
        self.tools = tools
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def registry():
    return ToolRegistry([
        CurrentTimeTool(tz_name="America/Sao_Paulo", clock=lambda: FIXED_NOW),
        WeatherTool(settings=make_settings()),
    ])

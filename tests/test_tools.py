import asyncio
from datetime import datetime, timezone

import httpx

from conftest import FIXED_NOW, make_settings
from aura.tools.time_tool import CurrentTimeTool, format_pt_br
from aura.tools.weather_tool import WeatherTool

OWM_OK = {
    "name": "Curitiba",
    "main": {"temp": 22.4, "humidity": 61},
    "weather": [{"description": "céu limpo"}],
    "wind": {"speed": 3.1},
}


def _weather_tool(handler, **overrides):
    settings = make_settings(OPENWEATHER_API_KEY="owm-key", **overrides)
    return WeatherTool(settings=settings, transport=httpx.MockTransport(handler))


def _no_call(request):
    raise AssertionError(f"unexpected outbound call to {request.url}")


def test_current_time_is_deterministic_with_fixed_clock():
    tool = CurrentTimeTool(tz_name="America/Sao_Paulo", clock=lambda: FIXED_NOW)
    first = asyncio.run(tool.execute())
    second = asyncio.run(tool.execute())
    assert first == second
    assert first == {"currentTime": "sábado, 1 de junho de 2024 às 14:30:05", "timezone": "America/Sao_Paulo"}


def test_current_time_treats_naive_clock_as_utc():
    tool = CurrentTimeTool(tz_name="America/Sao_Paulo", clock=lambda: datetime(2024, 12, 25, 3, 0, 0))
    result = asyncio.run(tool.execute())
    assert result["currentTime"] == "quarta-feira, 25 de dezembro de 2024 às 00:00:00"


def test_format_pt_br_contains_day_and_time_fields():
    text = format_pt_br(datetime(2026, 10, 19, 9, 5, 7, tzinfo=timezone.utc))
    assert text == "segunda-feira, 19 de outubro de 2026 às 09:05:07"


def test_weather_not_configured_makes_no_call():
    tool = WeatherTool(settings=make_settings(), transport=httpx.MockTransport(_no_call))
    assert asyncio.run(tool.execute(location="Curitiba")) == {"error": "service not configured"}


def test_weather_empty_location_makes_no_call():
    tool = _weather_tool(_no_call)
    assert asyncio.run(tool.execute(location="")) == {"error": "location is required"}
    assert asyncio.run(tool.execute(location="   ")) == {"error": "location is required"}


def test_weather_success_is_normalized():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json=OWM_OK)

    result = asyncio.run(_weather_tool(handler).execute(location="Curitiba, BR"))
    assert result == {
        "location": "Curitiba",
        "temperature": 22.4,
        "description": "céu limpo",
        "humidity": 61,
        "windSpeed": 3.1,
    }
    assert seen["q"] == "Curitiba, BR"
    assert seen["appid"] == "owm-key"
    assert seen["units"] == "metric"
    assert seen["lang"] == "pt_br"
    assert seen["path"] == "/data/2.5/weather"


def test_weather_404_is_location_not_found():
    tool = _weather_tool(lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"}))
    result = asyncio.run(tool.execute(location="Nonexistent City XYZ"))
    assert result["error"] == "location not found"
    assert result["location"] == "Nonexistent City XYZ"


def test_weather_provider_failure_is_generic_error():
    tool = _weather_tool(lambda request: httpx.Response(500, text="boom"))
    assert asyncio.run(tool.execute(location="Curitiba")) == {"error": "weather service unavailable"}


def test_weather_timeout_is_domain_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    assert asyncio.run(_weather_tool(handler).execute(location="Curitiba")) == {"error": "weather service timed out"}


def test_weather_unexpected_payload_is_generic_error():
    tool = _weather_tool(lambda request: httpx.Response(200, json={"name": "Curitiba"}))
    assert asyncio.run(tool.execute(location="Curitiba")) == {"error": "weather service unavailable"}

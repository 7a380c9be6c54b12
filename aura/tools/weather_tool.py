# The module defines a tool that looks up the current weather of a city
# through the OpenWeatherMap API.
# Author: Aura Team
# Date: 2025-06-12
# Version: 0.1.0

import httpx
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, Type
from .base_tool import BaseTool
from aura.utils.logger import console
from aura.core.config import Settings, get_settings

NOT_CONFIGURED_ERROR = "service not configured"
LOCATION_REQUIRED_ERROR = "location is required"
LOCATION_NOT_FOUND_ERROR = "location not found"
TIMEOUT_ERROR = "weather service timed out"
UNAVAILABLE_ERROR = "weather service unavailable"


def _declare_location_required(schema: Dict[str, Any]) -> None:
    location = schema["properties"]["location"]
    location.pop("anyOf", None)
    location.pop("default", None)
    location["type"] = "string"
    schema["required"] = ["location"]


class WeatherInput(BaseModel):
    """
    Input model for the weather tool.
    Attributes:
        location (Optional[str]): The city, optionally followed by the country code.
            Declared to the model as a required string; a missing value is reported
            by the tool itself, after the credential check.
    """
    model_config = ConfigDict(json_schema_extra=_declare_location_required)

    location: Optional[str] = Field(default=None, description="A cidade e, opcionalmente, o país para o qual obter a previsão do tempo "
                                           "(ex: 'Curitiba, BR', 'Londres', 'Nova York, US').")


class WeatherTool(BaseTool):
    """
    This tool fetches the current weather of a location from OpenWeatherMap and
    normalizes it to {location, temperature, description, humidity, windSpeed}.
    Every failure comes back as an {"error": message} payload.
    """
    name: str = "getWeather"
    description: str = "Obtém a previsão do tempo atual para uma cidade específica. " \
    "Use quando o usuário perguntar sobre o clima ou tempo em uma localidade."
    args_schema: Type[BaseModel] = WeatherInput

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Reads the provider settings. A missing API key does not prevent the tool from
        registering: it then answers every call with a not-configured error.
        """
        super().__init__()
        settings = settings or get_settings()
        self._api_key = settings.OPENWEATHER_API_KEY
        self._service_url = f"{settings.OPENWEATHER_BASE_URL.rstrip('/')}/weather"
        self._units = settings.WEATHER_UNITS
        self._lang = settings.WEATHER_LANG
        self._timeout = settings.HTTP_TIMEOUT
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def execute(self, location: Optional[str] = None) -> Dict[str, Any]:
        console.info(f"Executing tool '{self.name}' for location: '{location}'")

        if not self.configured:
            console.error("OpenWeatherMap API key is not configured.")
            return {"error": NOT_CONFIGURED_ERROR}
        location = (location or "").strip()
        if not location:
            return {"error": LOCATION_REQUIRED_ERROR}

        params = {
            "q": location,
            "appid": self._api_key,
            "units": self._units,
            "lang": self._lang,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.get(self._service_url, params=params)
                response.raise_for_status()
                result = self._normalize(response.json())
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                console.warning(f"OpenWeatherMap has no data for '{location}'.")
                return {"error": LOCATION_NOT_FOUND_ERROR, "location": location}
            console.error(f"OpenWeatherMap answered with status {e.response.status_code}: {e.response.text}")
            return {"error": UNAVAILABLE_ERROR}
        except httpx.TimeoutException:
            console.error(f"OpenWeatherMap did not answer within {self._timeout}s.")
            return {"error": TIMEOUT_ERROR}
        except httpx.RequestError as e:
            console.exception(f"An HTTP error occurred while calling OpenWeatherMap: {e}")
            return {"error": UNAVAILABLE_ERROR}
        except (KeyError, IndexError, TypeError, ValueError) as e:
            console.exception(f"Unexpected OpenWeatherMap response shape: {e}")
            return {"error": UNAVAILABLE_ERROR}

        console.success(f"Tool '{self.name}' executed and parsed successfully.")
        return result

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "location": data["name"],
            "temperature": data["main"]["temp"],
            "description": data["weather"][0]["description"],
            "humidity": data["main"]["humidity"],
            "windSpeed": data["wind"]["speed"],
        }

# The module is to define the configuration settings for the application.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional
from aura.utils.logger import console

class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the application.
    It inherits from BaseSettings, which allows it to load environment variables
    and provides type validation for the settings.
    Attributes:
        GEMINI_API_KEY (str): API key for Gemini. Required, startup fails without it.
        GEMINI_MODEL (str): Model name for Gemini.
        GEMINI_BASE_URL (str): Base URL of Gemini's OpenAI-compatible API.
        LLM_TEMPERATURE (float): Sampling temperature sent with every model call.
        LLM_TIMEOUT (float): Timeout in seconds for one model call.
        OPENWEATHER_API_KEY (str): API key for OpenWeatherMap. Optional.
        OPENWEATHER_BASE_URL (str): Base URL of the OpenWeatherMap API.
        WEATHER_UNITS (str): Unit system requested from the weather provider.
        WEATHER_LANG (str): Language of the weather descriptions.
        HTTP_TIMEOUT (float): Timeout in seconds for one weather call.
        TIMEZONE (str): IANA timezone used by the current-time tool.
        MAX_TOOL_ROUNDS (int): Maximum tool-call rounds per chat request.
        MAX_HISTORY_TURNS (int): Turns kept after the persona preamble, 0 keeps all.
        SESSION_TTL_SECONDS (int): Idle lifetime of a server-side session.
        APP_ENV (str): Deployment mode; "production" hides tracebacks.
        HOST (str): Interface the server binds to.
        PORT (int): Port the server listens on.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Gemini
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    LLM_TEMPERATURE: float = 0.7
    LLM_TIMEOUT: float = 60.0

    # OPENWEATHER
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    WEATHER_UNITS: str = "metric"
    WEATHER_LANG: str = "pt_br"
    HTTP_TIMEOUT: float = 10.0

    # Tools and conversation
    TIMEZONE: str = "America/Sao_Paulo"
    MAX_TOOL_ROUNDS: int = 5
    MAX_HISTORY_TURNS: int = 40
    SESSION_TTL_SECONDS: int = 86400

    # Server
    APP_ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

# lru_cache to cache the settings instance.
@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_settings() -> Settings:
    """
    Loads the settings at startup, logging every invalid or missing variable
    before exiting. Missing GEMINI_API_KEY is fatal like any other error.
    """
    try:
        return get_settings()
    except ValidationError as e:
        for err in e.errors():
            name = ".".join(map(str, err["loc"])) or "settings"
            if err["type"] == "missing":
                console.error(f"CRITICAL: {name} is not set in the environment or .env file.")
            else:
                console.error(f"CRITICAL: invalid value for {name}: {err['msg']} (got {err.get('input')!r}).")
        raise SystemExit(1) from e

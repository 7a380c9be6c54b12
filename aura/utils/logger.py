# Console logging for the Aura chat server.
# Author: Aura Team
# date: 2025-06-11
# Version: 0.3.0

import logging
import os
from typing import Any, Dict, Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.theme import Theme

LOGGER_NAME = "Aura-Server"
SUCCESS = 25

logging.addLevelName(SUCCESS, "SUCCESS")

_THEME = Theme({
    "logging.level.success": "bold green",
    "aura.tool": "magenta",
})


def _level_from_env() -> int:
    # Read before Settings exist, so a broken .env is still logged.
    level = logging.getLevelName(os.getenv("AURA_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


class ConsoleManager:
    """
    Process-wide console for the server: a RichHandler on the "Aura-Server"
    logger plus helpers for relay rounds, tool calls and startup warnings.
    Records still propagate to the root logger.
    """
    def __init__(self, name: str = LOGGER_NAME, level: Optional[int] = None):
        self._console = Console(theme=_THEME)
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = RichHandler(
                console=self._console,
                rich_tracebacks=True,
                show_path=False,
                keywords=["SUCCESS", "getCurrentTime", "getWeather"],
            )
            handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
            self._logger.addHandler(handler)
        self._logger.setLevel(level if level is not None else _level_from_env())

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str):
        self._logger.debug(message)

    def info(self, message: str):
        self._logger.info(message)

    def success(self, message: str):
        self._logger.log(SUCCESS, message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str):
        self._logger.error(message)

    def exception(self, message: str):
        self._logger.exception(message)

    def rule(self, title: str, style: str = "cyan"):
        self._console.rule(f"[bold {style}]{title}[/bold {style}]", style=style)

    def relay_round(self, number: int):
        """Separates the model calls of one chat exchange on the console."""
        self.rule(f"Relay round {number}", style="blue" if number else "cyan")

    def tool_call(self, name: str, args: Dict[str, Any]):
        self._logger.info(f"Model requested tool '{name}' with args: {args}")

    def display_warning_panel(self, title: str, message: str):
        panel = Panel(message, title=f"[bold yellow]{title}[/bold yellow]", border_style="yellow")
        self._console.print(panel)


console = ConsoleManager()

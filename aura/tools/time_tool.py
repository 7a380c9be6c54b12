# A tool that tells the current date and time in Brazilian Portuguese.
# Author: Aura Team
# Date: 2025-06-12
# Version: 0.1.0

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Type
from zoneinfo import ZoneInfo
from pydantic import BaseModel
from .base_tool import BaseTool
from aura.utils.logger import console
from aura.core.config import get_settings

WEEKDAYS_PT = ["segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
               "sexta-feira", "sábado", "domingo"]

MONTHS_PT = ["janeiro", "fevereiro", "março", "abril", "maio", "junho", "julho",
             "agosto", "setembro", "outubro", "novembro", "dezembro"]


def format_pt_br(moment: datetime) -> str:
    """Formats a datetime like the pt-BR long form: 'sábado, 19 de outubro de 2026 às 14:30:05'."""
    weekday = WEEKDAYS_PT[moment.weekday()]
    month = MONTHS_PT[moment.month - 1]
    return f"{weekday}, {moment.day} de {month} de {moment.year} às {moment:%H:%M:%S}"


class CurrentTimeInput(BaseModel):
    """The current-time tool takes no arguments."""


class CurrentTimeTool(BaseTool):
    """
    Returns the current date and time in the configured timezone.
    """
    name: str = "getCurrentTime"
    description: str = "Obtém a data e hora atuais formatadas em português do Brasil. " \
    "Use quando o usuário perguntar sobre a hora, data, dia atual, etc."
    args_schema: Type[BaseModel] = CurrentTimeInput

    def __init__(self, tz_name: Optional[str] = None, clock: Optional[Callable[[], datetime]] = None):
        super().__init__()
        self._tz_name = tz_name or get_settings().TIMEZONE
        self._tz = ZoneInfo(self._tz_name)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self) -> Dict[str, Any]:
        console.info(f"Executing tool '{self.name}'")
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        local = now.astimezone(self._tz)
        result = {
            "currentTime": format_pt_br(local),
            "timezone": self._tz_name,
        }
        console.success(f"Tool '{self.name}' returned: {result['currentTime']}")
        return result

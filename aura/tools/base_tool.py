# The module is to define the base class for all tools in the application.
# Author: Aura Team
# Date: 2025-06-11
# Version: 0.2.0

from abc import ABC, abstractmethod
from pydantic import BaseModel
from typing import Dict, Any, Type


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (str): The name of the tool, as the model refers to it.
        description (str): A brief description of what the tool does, shown to the model.
        args_schema (Type[BaseModel]): A Pydantic model defining the arguments
            that the tool accepts, which will be validated before execution.
    """
    name: str
    description: str
    args_schema: Type[BaseModel]

    @abstractmethod
    async def execute(self, **kwargs) -> Dict[str, Any]:
        """
        The core logic of the tool. This method must be implemented by all subclasses.

        Args:
            **kwargs: The arguments for the tool, validated against args_schema.

        Returns:
            A flat payload dict. Failures are reported as {"error": message}
            instead of being raised, so the model can narrate them.
        """
        pass

    def get_parameters(self) -> Dict[str, Any]:
        schema = self.args_schema.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        schema.setdefault("required", [])
        return schema

    def get_declaration(self) -> Dict[str, Any]:
        """Returns the tool's name, description and parameter schema."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.get_parameters(),
        }

    def get_definition(self) -> Dict[str, Any]:
        """
        Returns the tool's definition in a format compliant with OpenAI's
        function-calling format, which Gemini's compatible endpoint accepts.
        """
        return {
            "type": "function",
            "function": self.get_declaration(),
        }

# Discovers and manages all available tools automatically.
# Version 2.0.0: Tools return payload dicts; registry is read-only after startup.

import pkgutil
import inspect
from importlib import import_module
from types import MappingProxyType
from typing import Dict, Iterable, List, Any, Mapping, Optional
from pydantic import ValidationError
from aura import tools as tools_package
from aura.tools.base_tool import BaseTool
from aura.core.exceptions import ToolNotFoundError
from aura.utils.logger import console

class ToolRegistry:
    """
    A class to discover, register and run the tools exposed to the model.
    The set of tools is fixed when the registry is built.
    """
    def __init__(self, tools: Optional[Iterable[BaseTool]] = None):
        found: Dict[str, BaseTool] = {}
        if tools is None:
            self._discover_tools(found)
        else:
            for tool in tools:
                found[tool.name] = tool
        self._tools: Mapping[str, BaseTool] = MappingProxyType(found)
        console.success(f"Tool registry ready. Found {len(self._tools)} tools: {list(self._tools.keys())}")

    @staticmethod
    def _discover_tools(found: Dict[str, BaseTool]):
        """
        Scans the aura.tools package, imports all modules, finds classes that
        inherit from BaseTool, and creates an instance of each to register.
        """
        for _, modname, _ in pkgutil.iter_modules(tools_package.__path__, f"{tools_package.__name__}."):
            if modname.endswith(".base_tool"):
                continue
            try:
                module = import_module(modname)
                for _, obj in inspect.getmembers(module, inspect.isclass):
                    if issubclass(obj, BaseTool) and obj is not BaseTool and obj.__module__ == module.__name__:
                        instance = obj()
                        found[instance.name] = instance
                        console.info(f"Successfully registered tool: '{instance.name}'")
            except Exception as e:
                console.error(f"Failed to load or register tool from module {modname}: {e}")

    @property
    def tools(self) -> Mapping[str, BaseTool]:
        return self._tools

    def lookup(self, tool_name: str) -> BaseTool:
        try:
            return self._tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(tool_name) from None

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Returns the list of all tool definitions for the LLM."""
        return [tool.get_definition() for tool in self._tools.values()]

    def get_declarations(self) -> List[Dict[str, Any]]:
        return [tool.get_declaration() for tool in self._tools.values()]

    async def execute(self, tool_name: str, args: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Validates the arguments and runs a tool by its name.

        Raises:
            ToolNotFoundError: If no tool is registered under that name.

        Returns:
            The tool's payload. Invalid arguments and unexpected tool crashes are
            reported as {"error": message} payloads.
        """
        tool = self.lookup(tool_name)
        try:
            validated = tool.args_schema.model_validate(args or {})
        except ValidationError as e:
            console.warning(f"Invalid arguments for tool '{tool_name}': {args}")
            problems = "; ".join(f"{'.'.join(map(str, err['loc'])) or 'args'}: {err['msg']}" for err in e.errors())
            return {"error": f"invalid arguments: {problems}"}
        try:
            return await tool.execute(**validated.model_dump())
        except Exception as e:
            console.exception(f"Error executing tool '{tool_name}'")
            return {"error": f"tool failed: {e}"}

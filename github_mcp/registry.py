"""
Tool Registry

Single Source of Truth (SSOT) for tool discovery and collection.
Automatically discovers and registers all tools from github_mcp/tools/.
"""

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import MCPTool, ToolDefinition

logger = logging.getLogger(__name__)

# Global registry
_tool_registry: Dict[str, ToolDefinition] = {}
_initialized: bool = False


def _discover_tools() -> None:
    """
    Discover and register all tools from github_mcp/tools/.
    This is the ONLY place where tools are collected.
    """
    global _tool_registry, _initialized

    if _initialized:
        return

    tools_package = f"{__package__}.tools"
    tools_path = Path(__file__).parent / "tools"

    if not tools_path.exists():
        logger.warning(f"Tools directory not found: {tools_path}")
        _initialized = True
        return

    for _, module_name, _ in pkgutil.iter_modules([str(tools_path)]):
        if module_name.startswith("_"):
            continue

        try:
            full_module_name = f"{tools_package}.{module_name}"
            module = importlib.import_module(full_module_name)
            logger.debug(f"Loaded tool module: {full_module_name}")

            # Concrete MCPTool subclasses defined in this module
            for name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, MCPTool)
                    and obj.__module__ == module.__name__
                    and not inspect.isabstract(obj)
                ):
                    try:
                        instance = obj()
                        definition = instance.to_definition()
                        _tool_registry[definition.name] = definition
                        logger.info(f"Registered tool: {definition.name} ({module_name})")
                    except Exception as e:
                        logger.error(f"Failed to instantiate tool {name}: {e}")

        except Exception as e:
            logger.error(f"Failed to load tool module {module_name}: {e}")

    _initialized = True
    logger.info(f"Tool discovery complete. Total tools: {len(_tool_registry)}")


def get_all_tools() -> Dict[str, ToolDefinition]:
    """
    Get all registered tools.
    This is the public API for accessing tools.
    """
    _discover_tools()
    return _tool_registry.copy()


def get_tool(name: str) -> Optional[ToolDefinition]:
    """
    Get a specific tool by name.
    Returns None if tool not found.
    """
    _discover_tools()
    return _tool_registry.get(name)


def get_tools_by_category(category: str) -> Dict[str, ToolDefinition]:
    """Get all tools in a specific category."""
    _discover_tools()
    return {
        name: tool
        for name, tool in _tool_registry.items()
        if tool.category == category
    }


def list_tool_names() -> List[str]:
    """Get list of all registered tool names."""
    _discover_tools()
    return list(_tool_registry.keys())


def get_openai_tools_schema() -> List[Dict]:
    """
    Get all tools in OpenAI function calling format.
    Used by the agent to configure its LLM.
    """
    _discover_tools()
    return [definition.to_openai_schema() for definition in _tool_registry.values()]


async def execute_tool(tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict:
    """
    Execute a tool by name with the given argument map.
    Returns standardized response format.

    Arguments travel as a dict so that tool parameters such as `name`
    never collide with this function's own parameters.
    """
    tool = get_tool(tool_name)

    if tool is None:
        return {
            "success": False,
            "tool": tool_name,
            "error": f"Tool not found: {tool_name}",
            "error_type": "not_found"
        }

    if tool.handler is None:
        return {
            "success": False,
            "tool": tool_name,
            "error": f"Tool has no handler: {tool_name}",
            "error_type": "no_handler"
        }

    return await tool.handler(**(arguments or {}))


def reset_registry() -> None:
    """Reset the registry (mainly for testing)."""
    global _tool_registry, _initialized
    _tool_registry = {}
    _initialized = False

"""
GitHub MCP Tools

Exposes the GitHub REST API as agent-callable tools.
All tools are auto-discovered via registry.py
"""

from .registry import execute_tool, get_all_tools, get_tool
from .base import MCPTool

__all__ = ["execute_tool", "get_all_tools", "get_tool", "MCPTool"]

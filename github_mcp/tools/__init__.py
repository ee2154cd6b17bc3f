"""
GitHub Tools Package

All tools in this directory are auto-discovered by registry.py
Each tool inherits from GitHubTool (an MCPTool) and implements the
required properties plus execute().
"""

# Tools are auto-discovered, no explicit imports needed

#!/usr/bin/env python3
"""
GitHub Tool Server Entrypoint

HTTP API server that exposes all registered GitHub tools.
Tools are automatically discovered via registry.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import config
from .registry import (
    execute_tool,
    get_all_tools,
    get_openai_tools_schema,
    list_tool_names,
)

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    tools = get_all_tools()
    logger.info(f"GitHub tool server starting with {len(tools)} tools")
    for name in tools:
        logger.info(f"  - {name}")
    if not config.GITHUB_TOKEN:
        logger.warning("No GitHub token configured; requests are unauthenticated")

    yield

    logger.info("GitHub tool server shutting down")


app = FastAPI(
    title="GitHub Tool Server",
    description="Model Context Protocol tools for the GitHub REST API",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolResponse(BaseModel):
    """Response from tool execution."""

    success: bool
    tool: str
    result: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    error_code: Optional[str] = None


def _describe_parameters(tool, with_defaults: bool = False):
    params = []
    for p in tool.parameters:
        info = {
            "name": p.name,
            "type": p.type,
            "description": p.description,
            "required": p.required,
        }
        if p.enum:
            info["enum"] = p.enum
        if with_defaults:
            info["default"] = p.default
        params.append(info)
    return params


# ============== API Endpoints ==============


@app.get("/")
async def root():
    return {
        "service": "GitHub Tool Server",
        "version": "1.0.0",
        "tools_count": len(list_tool_names()),
        "endpoints": {
            "list_tools": "/tools",
            "tool_schema": "/tools/schema",
            "execute": "/tools/{tool_name}/execute",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "tools_loaded": len(list_tool_names())}


@app.get("/tools")
async def list_tools():
    tools = get_all_tools()
    return {
        "total": len(tools),
        "tools": [
            {
                "name": name,
                "description": tool.description,
                "category": tool.category,
                "read_only": tool.read_only,
                "parameters": _describe_parameters(tool),
            }
            for name, tool in tools.items()
        ],
    }


@app.get("/tools/schema")
async def get_tools_schema():
    return {"tools": get_openai_tools_schema()}


@app.get("/tools/{tool_name}")
async def get_tool_info(tool_name: str):
    tools = get_all_tools()
    if tool_name not in tools:
        raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")

    tool = tools[tool_name]
    return {
        "name": tool.name,
        "description": tool.description,
        "category": tool.category,
        "read_only": tool.read_only,
        "parameters": _describe_parameters(tool, with_defaults=True),
    }


@app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
async def execute_tool_endpoint(tool_name: str, request: ToolRequest):
    result = await execute_tool(tool_name, request.arguments)
    return ToolResponse(**result)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
MCP Server Entrypoint

HTTP API server that exposes the registered GitHub tools and repository
resources. The tool catalog is built once, when the app is created.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .base import ExecutionError, ToolNotFoundError, ValidationError
from .client import GitHubClient
from .config import Settings, load_settings
from .registry import ToolRegistry
from .resources import ResourceError
from .translations import TranslationHelper

logger = logging.getLogger(__name__)


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


def _parameter_info(tool) -> List[Dict[str, Any]]:
    return [
        {
            "name": p.name,
            "type": p.type,
            "description": p.description,
            "required": p.required,
            "default": p.default,
        }
        for p in tool.parameters
    ]


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[GitHubClient] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    client = client or GitHubClient(token=settings.token, base_url=settings.api_url)
    translations = TranslationHelper.from_file(settings.translations_file)
    registry = ToolRegistry.build(client, settings.filter_config(), translations)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info(f"MCP Server starting with {len(registry)} tools")
        for name in registry.list_tool_names():
            logger.info(f"  - {name}")
        yield
        await client.aclose()
        logger.info("MCP Server shutting down")

    app = FastAPI(
        title="GitHub MCP Server",
        description="Model Context Protocol server for GitHub tools",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.registry = registry
    app.state.settings = settings

    # ============== API Endpoints ==============

    @app.get("/")
    async def root():
        return {
            "service": "GitHub MCP Server",
            "version": __version__,
            "read_only": settings.read_only,
            "tools_count": len(registry),
            "endpoints": {
                "list_tools": "/tools",
                "tool_schema": "/tools/schema",
                "execute": "/tools/{tool_name}/execute",
                "resource_templates": "/resources/templates",
                "read_resource": "/resources/read?uri=",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy", "tools_loaded": len(registry)}

    @app.get("/tools")
    async def list_tools():
        tools = registry.get_all_tools()
        return {
            "total": len(tools),
            "tools": [
                {
                    "name": name,
                    "description": tool.description,
                    "category": tool.category,
                    "mutating": tool.mutating,
                    "parameters": _parameter_info(tool),
                }
                for name, tool in tools.items()
            ],
        }

    @app.get("/tools/schema")
    async def get_tools_schema():
        return {"tools": registry.get_openai_tools_schema()}

    @app.get("/tools/{tool_name}")
    async def get_tool_info(tool_name: str):
        tool = registry.get_tool(tool_name)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")

        return {
            "name": tool.name,
            "description": tool.description,
            "category": tool.category,
            "mutating": tool.mutating,
            "parameters": _parameter_info(tool),
            "inputSchema": tool.input_schema(),
        }

    @app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
    async def execute_tool_endpoint(tool_name: str, request: ToolRequest):
        try:
            result = await registry.execute_tool(tool_name, request.arguments)
        except ToolNotFoundError as e:
            raise HTTPException(status_code=404, detail=e.message)

        # 500 for a fault of this server, 502 when the GitHub link failed
        if result.is_system_error:
            raise HTTPException(status_code=500 if result.unexpected else 502, detail=result.error)
        return ToolResponse(**result.to_dict(tool_name))

    @app.get("/resources/templates")
    async def list_resource_templates():
        return {"resourceTemplates": [t.to_dict() for t in registry.resource_templates]}

    @app.get("/resources/read")
    async def read_resource(uri: str = Query(..., description="Resource URI")):
        template = registry.find_resource_template(uri)
        if template is None:
            raise HTTPException(status_code=404, detail=f"No resource template matches: {uri}")
        try:
            contents = await template.read(client, uri)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=e.message)
        except ResourceError as e:
            raise HTTPException(status_code=404, detail=e.message)
        except ExecutionError as e:
            raise HTTPException(status_code=502, detail=e.message)
        return {"contents": [c.to_dict() for c in contents]}

    return app


# ============== Main ==============


def main(argv: Optional[List[str]] = None):
    """Run the MCP server."""
    import uvicorn

    settings = load_settings(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app(settings)
    logger.info(f"Starting MCP server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

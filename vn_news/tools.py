"""
Tool declarations and dispatch.

The two tools are declared with the exact names, descriptions and input
schemas existing MCP clients already expect.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData, Tool

from .core import NewsAggregator
from .formatting import format_digest, format_sources
from .sources import ALL_CATEGORIES, DEFAULT_REGISTRY, SOURCE_KEYS, SourceRegistry

logger = logging.getLogger(__name__)

GET_NEWS_TOOL = "get_vietnamese_news"
LIST_SOURCES_TOOL = "list_news_sources"

DEFAULT_CATEGORIES = ["home"]
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100

TOOLS = [
    Tool(
        name=GET_NEWS_TOOL,
        description=(
            "Lấy tin tức mới nhất từ các báo Việt Nam qua RSS. "
            "Hỗ trợ VnExpress, Tuổi Trẻ, Thanh Niên, Dân Trí, Zing News"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "sources": {
                    "type": "array",
                    "description": "Danh sách nguồn tin",
                    "items": {
                        "type": "string",
                        "enum": list(SOURCE_KEYS),
                    },
                    "default": list(SOURCE_KEYS),
                },
                "categories": {
                    "type": "array",
                    "description": "Danh mục tin",
                    "items": {
                        "type": "string",
                        "enum": list(ALL_CATEGORIES),
                    },
                    "default": list(DEFAULT_CATEGORIES),
                },
                "limit": {
                    "type": "number",
                    "description": "Số lượng tin tối đa",
                    "minimum": MIN_LIMIT,
                    "maximum": MAX_LIMIT,
                    "default": DEFAULT_LIMIT,
                },
            },
        },
    ),
    Tool(
        name=LIST_SOURCES_TOOL,
        description="Liệt kê tất cả nguồn tin và danh mục có sẵn",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
]


def clamp_limit(value: Any) -> int:
    """Coerce a requested limit into [1, 100]; non-numeric or missing means 20."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LIMIT
    if value != value:  # NaN
        return DEFAULT_LIMIT
    return int(min(max(value, MIN_LIMIT), MAX_LIMIT))


def _string_list(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    return list(default)


def list_news_sources(registry: Optional[SourceRegistry] = None) -> str:
    return format_sources(registry if registry is not None else DEFAULT_REGISTRY)


async def get_vietnamese_news(
    arguments: Optional[Mapping[str, Any]],
    aggregator: NewsAggregator,
) -> str:
    args = arguments or {}
    sources = _string_list(args.get("sources"), aggregator.registry.keys())
    categories = _string_list(args.get("categories"), DEFAULT_CATEGORIES)
    limit = clamp_limit(args.get("limit"))

    news = await aggregator.aggregate(sources, categories, limit)
    return format_digest(news)


async def call_tool(
    name: str,
    arguments: Optional[Mapping[str, Any]],
    *,
    aggregator: NewsAggregator,
) -> str:
    """
    Run a tool by name and return its text output.

    Raises McpError(METHOD_NOT_FOUND) for unknown tools. Any other failure is
    logged and re-raised as-is.
    """
    logger.info("CallTool: %s", name)
    try:
        if name == LIST_SOURCES_TOOL:
            return list_news_sources(aggregator.registry)
        if name == GET_NEWS_TOOL:
            return await get_vietnamese_news(arguments, aggregator)
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))
    except Exception:
        logger.exception("Error in tool execution")
        raise

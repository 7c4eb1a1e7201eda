from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from admin_display.queries.sources import QUERY_SOURCES

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint listing the admin resources and query sources."""
    return {
        "meta": {
            "title": "Admin Display API",
            "description": "Compose admin views of queries from pluggable display drivers.",
            "version": "0.1.0",
            "sources": sorted(QUERY_SOURCES),
        },
        "links": {
            "self": "/",
            "queries": "/admin/queries",
            "create": "/admin/queries/create?source={source}",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }

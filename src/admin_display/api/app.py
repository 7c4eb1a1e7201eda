from __future__ import annotations

from fastapi import FastAPI

from admin_display.api.lifespan import lifespan
from admin_display.api.routes.health import router as health_router
from admin_display.api.routes.queries import router as queries_router
from admin_display.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Admin Display API",
        description="Compose admin views of queries from pluggable display drivers.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(queries_router)

    return app

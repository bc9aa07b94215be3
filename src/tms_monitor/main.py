"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from .api.routes import dashboard, health
from .config import settings
from .services.dashboard import DashboardController


def create_app(controller: DashboardController | None = None, *, autostart: bool | None = None) -> FastAPI:
    controller = controller or DashboardController()
    autostart = settings.autostart_polling if autostart is None else autostart

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if autostart:
            controller.start()
        try:
            yield
        finally:
            # No background refresh may touch state once the app is gone.
            await run_in_threadpool(controller.stop)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.controller = controller
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "dashboard": f"{settings.api_prefix}/dashboard",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(dashboard.router, prefix=settings.api_prefix)
    return app


app = create_app()

"""FastAPI entrypoint for the Ops Dashboard backend."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ops_dashboard import __version__
from ops_dashboard.logging_config import setup_logging

from .config import get_settings
from .errors import register_error_handlers
from .middleware import APIKeyMiddleware
from .routers import auth, bookings, cars, dashboard, documents, explore, payouts, shops


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Ops Dashboard API", version=__version__)
    allow_origins = settings.cors_origins or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(APIKeyMiddleware)
    register_error_handlers(app)

    app.include_router(dashboard.router, prefix="/api")
    app.include_router(cars.router, prefix="/api")
    app.include_router(shops.router, prefix="/api")
    app.include_router(payouts.router, prefix="/api")
    app.include_router(explore.router, prefix="/api")
    app.include_router(bookings.router, prefix="/api")
    app.include_router(documents.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")

    @app.get("/", tags=["info"])
    def root() -> dict[str, str]:
        return {"message": "Ops Dashboard API", "version": __version__, "docs": "/docs"}

    @app.get("/health", tags=["health"])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

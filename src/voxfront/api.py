"""HTTP API for voxfront."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from voxfront import __version__
from voxfront.config import load_config
from voxfront.core import FrontendPipeline, run_frontend
from voxfront.logs import configure_logging
from voxfront.models import FrontendRequest, FrontendResponse, HealthResponse
from voxfront.resources import load


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="voxfront",
        version=__version__,
        description="Multilingual TTS text front-end service API.",
    )
    config = load_config()
    configure_logging(config.log_level)
    pipeline = FrontendPipeline(load(config.resolved_resources_path()), config)

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, env=config.env)

    @app.post("/v1/frontend", response_model=FrontendResponse, tags=["frontend"])
    def frontend(request: FrontendRequest) -> FrontendResponse:
        try:
            return run_frontend(request, pipeline)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    return app


app = create_app()

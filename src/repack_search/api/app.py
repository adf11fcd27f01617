"""
FastAPI application for Repack Search.

Provides REST API endpoints for indexed search, live search and sync.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import LOG_LEVEL
from ..models import ServiceResponse
from ..search import HybridSearchService

logging.basicConfig(level=LOG_LEVEL)


def _respond(response: ServiceResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status_code, content=response.model_dump(mode="json", by_alias=True))


def _service(request: Request) -> HybridSearchService:
    return request.app.state.search_service


def create_app(service: Optional[HybridSearchService] = None) -> FastAPI:
    """
    Build the API.

    Args:
        service: Search service to serve. Creates the default one if not provided.
    """
    app = FastAPI(
        title="Repack Search API",
        description="Hybrid search over indexed and live game repack listings",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.search_service = service or HybridSearchService()

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "repack-search"}

    @app.get("/games/search")
    async def search_games(request: Request, q: str = ""):
        """Search games in the Meilisearch index."""
        return _respond(await _service(request).search_indexed(q))

    @app.get("/games/search/google")
    async def search_games_from_google(request: Request, q: str = ""):
        """Search games live through Google."""
        return _respond(await _service(request).search_live(q))

    @app.post("/games/sync")
    async def sync_games(request: Request):
        """Sync the index with FitGirl and DODI."""
        return _respond(await _service(request).refresh())

    @app.get("/api/stats")
    async def stats(request: Request):
        """Number of listings in the index."""
        return _respond(await _service(request).stats())

    return app


app = create_app()

"""FastAPI application serving the workflow inventory and generated snippets."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.generator import GENERATOR_VERSION
from server.config import cors_origins, get_db_path, normalize_env
from server.db import init_all
from server.inventory_routes import load_generator_settings, router as inventory_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "0.3.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate generator settings and initialize database tables on startup."""
    try:
        load_generator_settings()
    except ValueError as exc:
        logger.error("invalid generator settings: %s", exc)
        raise
    envs = init_all()
    logger.info("inventory databases ready: %s, default env: %s", ", ".join(envs), normalize_env(None))
    yield


app = FastAPI(
    title="Workflow Inventory API",
    description="Read-only API over the n8n workflow inventory, with generated snippets",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(inventory_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": API_VERSION,
        "generator_version": GENERATOR_VERSION,
        "inventory_db": str(get_db_path()),
        "endpoints": {
            "health": "/api/health",
            "workflows": "/api/workflows",
            "snippets": "/api/workflows/{workflow_id}/snippets",
            "sync_runs": "/api/sync-runs",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .models import HealthResponse
from .routers import (
    auth_router,
    prompts_router,
    providers_router,
    repository_router,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info("Starting Prompt Gitter backend...")
    if not settings.github_id or not settings.github_secret:
        logger.warning("GITHUB_ID/GITHUB_SECRET not set; GitHub sign-in is disabled")
    logger.info(f"Prompts repository: <user>/{settings.prompts_repo_name}")

    yield

    logger.info("Shutting down Prompt Gitter backend...")


# Create FastAPI application
app = FastAPI(
    title="Prompt Gitter API",
    description="Store and manage AI prompts in your own GitHub repository",
    version="1.0.0",
    lifespan=lifespan,
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(repository_router)
app.include_router(prompts_router)
app.include_router(providers_router)


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy")


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Prompt Gitter Backend",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "prompt_gitter.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )

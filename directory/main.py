"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from directory import __version__
from directory.config import settings
from directory.routers import geocoding, places, preferences, search
from directory.services.preferences_store import preferences_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Directory API",
    description="Places search across Geoapify, HERE and Google",
    version=__version__,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(places.router, prefix="/api/v1")
app.include_router(geocoding.router, prefix="/api/v1")
app.include_router(preferences.router, prefix="/api/v1")
app.include_router(search.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Directory API",
        "version": __version__,
        "docs": "/docs" if settings.environment == "development" else "disabled",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/debug/config")
async def debug_config():
    """Debug endpoint to check configuration (development only)."""
    if settings.environment != "development":
        return {"error": "Not available in production"}

    def mask_key(key: str) -> str:
        """Mask API key showing only first/last 4 chars."""
        if not key:
            return "NOT_SET"
        if len(key) < 12:
            return f"{key[:4]}...{key[-4:]}"
        return f"{key[:8]}...{key[-8:]}"

    return {
        "status": "ok",
        "places_provider": settings.places_provider,
        "geoapify_api_key": mask_key(settings.geoapify_api_key),
        "here_api_key": mask_key(settings.here_api_key),
        "google_places_api_key": mask_key(settings.google_places_api_key),
        "nominatim_base_url": settings.nominatim_base_url,
        "redis_connected": await preferences_store.ping(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "directory.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )

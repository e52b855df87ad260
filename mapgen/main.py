"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mapgen import __version__
from mapgen.config import get_settings
from mapgen.middleware.error_handler import setup_error_handlers
from mapgen.api.routes import map_generation

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Map Generation Engine",
    description="Procedural houses, dungeons, forests and caves for tabletop battlemaps",
    version=__version__,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app, debug=settings.DEBUG)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "online", "service": "Map Generation Engine", "version": __version__}


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "debug_mode": settings.DEBUG,
        "max_map_dimension": settings.MAX_MAP_DIMENSION,
        "connectivity_threshold": settings.CONNECTIVITY_THRESHOLD,
    }


# Routes
app.include_router(map_generation.router, prefix="/api", tags=["map_generation"])

logger.info(f"Map generation service ready (debug={settings.DEBUG})")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mapgen.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

"""Label Catalog API - Main application entry point."""
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from catalog.api import api_router
from catalog import __version__
from catalog.bootstrap import MemoryFlagStore
from catalog.config import settings
from catalog.logging_config import setup_logging

# Initialize logging
setup_logging()

# StaticFiles checks the directory when mounted
Path(settings.artwork_dir).mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup: admin bootstrap flag lives as long as the process
    app.state.bootstrap_flags = MemoryFlagStore()
    yield


app = FastAPI(
    title="Label Catalog",
    description="Music label catalog - albums, tracks, artwork and releases",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
# In production, set CORS_ORIGINS env var to your domain(s)
cors_origins = settings.cors_origins.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")

# Uploaded artwork
app.mount("/artwork", StaticFiles(directory=settings.artwork_dir), name="artwork")


@app.get("/")
def root():
    """Root endpoint - API info."""
    return {
        "name": "Label Catalog",
        "version": __version__,
        "docs": "/docs",
    }

"""
Short-Form Video Linter - FastAPI Backend
Main application entry point with health check and API routing.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings, has_gemini_api_key, validate_security_settings
from database import engine, Base
import models  # noqa: F401
from routers import health, lint, preferences


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    print("🚀 Starting Video Linter API...")
    validate_security_settings()
    if settings.AUTO_CREATE_DB_SCHEMA:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            print("🗄️ Database schema verified.")
        except Exception as e:
            print(f"⚠️ Database bootstrap skipped: {e}")
    if not has_gemini_api_key():
        print("⚠️ GEMINI_API_KEY not configured: lint requests use the local mock analyzer.")
    yield
    # Shutdown
    await engine.dispose()
    print("👋 Shutting down API...")


app = FastAPI(
    title="Video Linter API",
    description="Lint short-form videos against format-specific rules and score them",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(lint.router, prefix="/lint", tags=["Lint"])
app.include_router(preferences.router, prefix="/preferences", tags=["Preferences"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Video Linter API",
        "version": "0.1.0",
        "status": "running"
    }

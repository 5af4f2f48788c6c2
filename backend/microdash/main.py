"""
MicroDash API
=============
FastAPI application entry point. Mount routers here.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microdash.config import get_settings
from microdash.routers import dashboard, recommendations, trends

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

app = FastAPI(
    title="MicroDash API",
    description="Microexpression trend analysis and treatment recommendations — API Backend",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trends.router)
app.include_router(recommendations.router)
app.include_router(dashboard.router)


@app.get("/api/v1/health")
async def health_check() -> dict:
    return {"status": "ok", "service": "microdash-api"}

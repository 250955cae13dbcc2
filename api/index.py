"""
Gamer's Paradise Storefront - Main FastAPI Application

Single entry point for the cart and catalog API used by the static site.
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.logging import get_logger
from storefront.routers import router as api_router

logger = get_logger(__name__)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Storefront API started")
    yield
    logger.info("Storefront API stopped")


app = FastAPI(
    title="Gamer's Paradise Storefront",
    description="Shopping cart and catalog search API for the static storefront",
    version="1.0.0",
    lifespan=lifespan
)

# The static pages are served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}

"""
Storefront Cart API - Main FastAPI Application

Single entry point for the cart endpoints consumed by the storefront UI.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.config import get_settings
from storefront.logging import get_logger
from storefront.routers import cart_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    settings = get_settings()
    logger.info(f"Storefront cart API starting ({settings.environment}, cart storage: {settings.cart_storage})")
    yield


app = FastAPI(
    title="Storefront Cart API",
    description="Shopping cart and checkout for the storefront",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cart_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront-cart"}

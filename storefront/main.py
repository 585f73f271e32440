"""
Storefront Application

Catalog, cart, pricing and checkout for a small shop, served as a JSON API.
The page that renders it calls these endpoints and performs the returned
checkout action (opening payment links or a mail composer) itself.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.session import Brand, SessionManager
from .database.storage import JsonFileStorage, MemoryStorage, Storage
from .routes import products_router, cart_router, checkout_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """File storage when a data directory is configured, memory otherwise"""
    if settings.data_dir:
        return JsonFileStorage(settings.data_dir)
    return MemoryStorage()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
) -> FastAPI:
    """Build the storefront app with its own session manager"""
    settings = settings or get_settings()
    storage = storage if storage is not None else build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info(f"{settings.app_name} starting up...")
        logger.info(f"Persistence: {settings.data_dir or 'in-memory'}")
        yield
        logger.info(f"{settings.app_name} shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description=f"Cart, pricing and checkout for {settings.brand_name}",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.sessions = SessionManager(
        brand=Brand(
            name=settings.brand_name,
            email=settings.brand_email,
            tagline=settings.brand_tagline,
        ),
        default_destination=settings.default_destination(),
        storage=storage,
        max_session_age_hours=settings.session_max_age_hours,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)

    @app.get("/")
    async def home(request: Request):
        """Storefront brand and endpoint index"""
        settings = request.app.state.settings
        return {
            "brand": {
                "name": settings.brand_name,
                "tagline": settings.brand_tagline,
                "email": settings.brand_email,
                "social": settings.social_links,
            },
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "cart": "/api/cart",
                "checkout": "/api/checkout",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


app = create_app()


def run() -> None:
    """Console entry point"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()

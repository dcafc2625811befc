from datetime import timedelta
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from storefront.config import Settings, get_settings
from storefront.database import Database
from storefront.security import TokenService
from storefront.seed import seed_demo_products
from storefront.api import auth, products, orders, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    database: Database = app.state.database
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting up application...")

    # Create database tables
    logger.info("Creating database tables...")
    database.create_tables()
    logger.info("Database tables created successfully")

    if settings.SEED_DEMO_PRODUCTS:
        with database.session() as db:
            seed_demo_products(db)

    yield

    # Shutdown
    logger.info("Shutting down application...")
    database.dispose()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are client errors (400)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Invalid request data.",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (defaults to environment-driven settings)
        database: Store handle to use (defaults to one built from settings)
    """
    settings = settings or get_settings()
    database = database or Database(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=settings.DB_ECHO,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
        Backend API for a small online store:

        - **Auth**: registration and login with bcrypt-hashed passwords and
          one-hour bearer tokens
        - **Products**: read-only catalog
        - **Orders**: atomic checkout with stock and price validation, and
          per-user order history

        ## Stock Management & Race Condition Handling
        Checkout locks the cart's product rows with `SELECT FOR UPDATE` and
        decrements stock in the same transaction, so concurrent buyers can
        never oversell a product.
        """,
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = database
    app.state.tokens = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routers
    app.include_router(health.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(products.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": "1.0.0",
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/api/health"
        }

    return app


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = create_app(settings)

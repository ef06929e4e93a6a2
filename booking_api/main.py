from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import time
import logging

from .api.routes.appointments import router as appointment_router
from .api.routes.users import router as user_router
from .core.config import Settings, get_settings
from .core.database import Database
from .core.exceptions import ServerError
from .core.security import SessionIssuer

logger = logging.getLogger(__name__)

def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release connections on shutdown."""
    settings = app.state.settings
    database = app.state.database
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Using {database.backend} database")

    try:
        database.init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    logger.info("Application startup complete")
    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    database.dispose()

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Appointment booking with role-based access for patients, doctors and admins",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.session_issuer = SessionIssuer(settings)

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        content = {"message": exc.detail}
        if isinstance(exc, ServerError) and exc.error:
            content["error"] = exc.error
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": _validation_message(exc)}
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Internal server error",
                "error": str(exc)
            }
        )

    # Include routers
    app.include_router(user_router)
    app.include_router(appointment_router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.VERSION
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.VERSION,
            "endpoints": {
                "users": "/user",
                "appointments": "/appointment",
                "docs": "/docs",
                "health": "/health"
            }
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "booking_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

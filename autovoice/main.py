"""
FastAPI Application Entry Point
===============================
Main application with lifecycle management, middleware, and route mounting.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autovoice.config import Settings, get_settings
from autovoice.core.exceptions import AutoVoiceException, InternalException
from autovoice.core.orchestrator import RequestOrchestrator
from autovoice.api.routes import assistant, cars, health
from autovoice.db.repositories.cars import CarRepository, InMemoryCarRepository
from autovoice.db.seed import sample_vehicles
from autovoice.logging.agent_logger import AgentLogger
from autovoice.services.gateway import AssistantGateway, OpenAIAssistantGateway

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[AssistantGateway] = None,
    repository: Optional[CarRepository] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings; defaults to the environment
        gateway: Assistant gateway to use instead of the OpenAI one
        repository: Car repository to use instead of the seeded in-memory one
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Handles startup and shutdown events.
        """
        logger.info("=" * 60)
        logger.info("Starting AutoVoice Backend")
        logger.info("=" * 60)

        # ==================
        # STARTUP
        # ==================

        app.state.agent_logger = AgentLogger(
            str(settings.AGENT_LOG_PATH),
            enabled=settings.AGENT_LOG_ENABLED
        )
        await app.state.agent_logger.log_system_event("Application starting", {
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        })

        logger.info("Loading inventory...")
        app.state.car_repository = repository if repository is not None else InMemoryCarRepository(sample_vehicles())

        assistant_gateway = gateway
        if assistant_gateway is None and settings.openai_configured:
            logger.info("Initializing assistant gateway...")
            assistant_gateway = OpenAIAssistantGateway(settings)
        elif assistant_gateway is None:
            logger.warning("OPENAI_API_KEY not set; assistant endpoints will return 503")
        app.state.gateway = assistant_gateway

        app.state.orchestrator = RequestOrchestrator(
            repository=app.state.car_repository,
            gateway=assistant_gateway,
            configured=settings.openai_configured,
            agent_logger=app.state.agent_logger
        )

        logger.info("=" * 60)
        logger.info("AutoVoice Backend Ready!")
        logger.info(f"Server: http://{settings.HOST}:{settings.PORT}")
        logger.info(f"Assistant configured: {app.state.orchestrator.configured}")
        logger.info("=" * 60)

        await app.state.agent_logger.log_system_event("Application started successfully", {
            "host": settings.HOST,
            "port": settings.PORT,
            "assistant_configured": app.state.orchestrator.configured
        })

        yield  # Application runs here

        # ==================
        # SHUTDOWN
        # ==================

        logger.info("Shutting down AutoVoice Backend...")

        await app.state.agent_logger.log_system_event("Application shutting down", {})

        if app.state.gateway is not None:
            await app.state.gateway.close()
        await app.state.agent_logger.close()

        logger.info("Shutdown complete.")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
    ## AutoVoice AI - Voice-Driven Car Sales Assistant

    ### Features:
    - 🎤 Speech-to-text for customer questions
    - 🚗 Replies grounded in the current inventory
    - 🔊 Spoken replies
    - 🔎 Inventory browsing and search

    ### Pipeline:
    ```
    Audio → STT (Whisper) → LLM (Chat Completions) → TTS → Audio
    ```
    """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # ==================
    # MIDDLEWARE
    # ==================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        """Add request timing information to response headers."""
        start_time = datetime.now()
        response = await call_next(request)
        process_time = (datetime.now() - start_time).total_seconds() * 1000
        response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log incoming requests."""
        logger.debug(f"{request.method} {request.url.path}")
        return await call_next(request)

    # ==================
    # EXCEPTION HANDLERS
    # ==================

    @app.exception_handler(AutoVoiceException)
    async def autovoice_exception_handler(request: Request, exc: AutoVoiceException):
        """Handle custom AutoVoice exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message} {exc.details}")

        agent_logger = getattr(request.app.state, "agent_logger", None)
        if exc.status_code >= 500 and agent_logger is not None:
            await agent_logger.log_error(request.url.path, exc.message, exc.details)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details if settings.DEBUG else None
            }
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Render request validation failures as bad input."""
        logger.warning(f"{request.method} {request.url.path} -> 400 validation: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "BAD_INPUT",
                "message": "Invalid request",
                "details": {"errors": jsonable_encoder(exc.errors())} if settings.DEBUG else None
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
        error = InternalException(details={"error": str(exc)})
        return JSONResponse(
            status_code=error.status_code,
            content={
                "error": error.error_code,
                "message": error.message,
                "details": error.details if settings.DEBUG else None
            }
        )

    # ==================
    # ROUTES
    # ==================

    app.include_router(health.router, tags=["Health"])
    app.include_router(cars.router, prefix="/api/cars", tags=["Cars"])
    app.include_router(assistant.router, prefix="/api", tags=["Assistant"])

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/health"
        }

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("autovoice.main:app", host=settings.HOST, port=settings.PORT)

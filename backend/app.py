"""
Main FastAPI application
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from dotenv import load_dotenv

load_dotenv()

from core.config import API_CONFIG, DATABASE_CONFIG, INFERENCE_CONFIG, SERVER_CONFIG
from core.errors import LocationRequiredError
from core.utils import get_logger
from database.factory import open_log_storage
from models import HealthResponse, MessageResponse
from routers import lookups
from services.inference_service import AnthropicCompletionBackend
from services.lookup_service import LookupService

import uvicorn


# Initialize logger
logger = get_logger("main")


def build_lookup_service() -> LookupService:
    """Construct the inference client and log store from configuration"""
    backend = AnthropicCompletionBackend(
        api_key=INFERENCE_CONFIG["api_key"],
        model=INFERENCE_CONFIG["model"],
        max_tokens=INFERENCE_CONFIG["max_tokens"],
        timeout=INFERENCE_CONFIG["timeout"]
    )
    storage = open_log_storage(DATABASE_CONFIG["url"], table=DATABASE_CONFIG["logs_table"])
    logger.info("Log store opened", extra={"database": DATABASE_CONFIG["database_name"]})
    return LookupService(
        backend=backend,
        storage=storage,
        system_instruction=INFERENCE_CONFIG["system_instruction"],
        write_attempts=DATABASE_CONFIG["write_attempts"],
        write_retry_delay=DATABASE_CONFIG["write_retry_delay"]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned = getattr(app.state, "lookup_service", None) is None
    if owned:
        app.state.lookup_service = build_lookup_service()
    try:
        yield
    finally:
        if owned:
            service = app.state.lookup_service
            service.storage.close()
            close_backend = getattr(service.backend, "close", None)
            if close_backend is not None:
                await close_backend()
            del app.state.lookup_service
            logger.info("Log store closed")


def create_app(lookup_service: Optional[LookupService] = None) -> FastAPI:
    """Build the application; tests pass a service wired to fakes"""
    app = FastAPI(
        title=API_CONFIG["title"],
        version=API_CONFIG["version"],
        description=API_CONFIG["description"],
        lifespan=lifespan
    )
    if lookup_service is not None:
        app.state.lookup_service = lookup_service

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=SERVER_CONFIG["cors_origins"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # A body that does not parse is treated as a missing location
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request body: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=MessageResponse(message=str(LocationRequiredError())).model_dump()
        )

    app.include_router(lookups.router, tags=["lookups"])

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Root endpoint - liveness"""
        return "Backend is running"

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now().isoformat()
        )

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Starting dawn2dusk API server", extra={
        "host": SERVER_CONFIG["host"],
        "port": SERVER_CONFIG["port"]
    })
    uvicorn.run(
        app,
        host=SERVER_CONFIG["host"],
        port=SERVER_CONFIG["port"],
        reload=False
    )

"""Tuition Ledger - FastAPI Application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.database import async_session_maker, create_tables
from app.core.exceptions import LedgerError, StorageError
from app.core.logging import configure_logging, get_logger
from app.services import reference as reference_service

configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed reference data on startup."""
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        async with async_session_maker() as db:
            await reference_service.seed_reference_data(
                db, settings.SEED_SUBJECTS, settings.SEED_GRADES
            )
    logger.info("Application started", app=settings.APP_NAME, database=settings.DATABASE_URL.split("://")[0])
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Map service errors to their HTTP status."""
    if isinstance(exc, StorageError):
        logger.error("Storage error", path=request.url.path, error=exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Unexpected engine failures surface as a 500 without driver details."""
    logger.error("Unhandled database error", path=request.url.path, exc_info=exc)
    error = StorageError("Internal storage error")
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}

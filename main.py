from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from core.logging import RequestIdMiddleware, setup_logging
from core.storage import StorageError
from core.validation import FieldError, MalformedIdentifierError, ValidationFailed
from db import Database
from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.cases.views import router as cases_router
from api.dashboard.views import router as dashboard_router
from api.notes.views import router as notes_router
from api.projects.views import router as projects_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    database.connect()
    app.state.db = database
    logger.info("database_connected", app_env=settings.APP_ENV)
    try:
        yield
    finally:
        await database.dispose()
        logger.info("database_disposed")


app = FastAPI(
    title="Asset Registry API",
    description="API for managing assets, their projects, legal cases and notes",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)


# ---------- Error mapping ----------

@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": [e.as_dict() for e in exc.errors],
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Query parameters such as page/limit share the payload error shape
    errors = [
        FieldError(
            path=".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "body", "path")) or "__root__",
            message=err.get("msg", "Invalid value"),
        )
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": [e.as_dict() for e in errors]},
    )


@app.exception_handler(MalformedIdentifierError)
async def malformed_identifier_handler(request: Request, exc: MalformedIdentifierError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Invalid {exc.field_name} format"},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # Already logged with its traceback by unit_of_work
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage operation failed"},
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    # Read paths run outside unit_of_work
    logger.exception("storage_read_failed", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage operation failed"},
    )


# ---------- Routers ----------

app.include_router(auth_router, prefix="/api/v1")

# Statistics must precede the assets router (/assets/stats vs /assets/{asset_id})
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(assets_router, prefix="/api/v1")
app.include_router(projects_router, prefix="/api/v1")
app.include_router(cases_router, prefix="/api/v1")
app.include_router(notes_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}

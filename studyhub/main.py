import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from studyhub.cache import cache
from studyhub.config import settings
from studyhub.database import init_models
from studyhub.middleware import TimingMiddleware
from studyhub.responses import envelope
from studyhub.routers import metrics, resources, study_list, tags, users
from studyhub.services.outcomes import Status

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.CREATE_SCHEMA:
        await init_models()
    await cache.connect()
    yield
    # Shutdown
    await cache.disconnect()

app = FastAPI(
    title="StudyHub API",
    description="Shared study-resource catalog with tags, comments, votes and study lists",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(resources.router)
app.include_router(tags.router)
app.include_router(study_list.router)
app.include_router(users.router)
app.include_router(metrics.router)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return envelope(Status.FAIL, "Invalid request", jsonable_encoder(exc.errors()), 422)

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # A uniqueness constraint caught what the service pre-check missed.
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return envelope(Status.FAIL, "Request conflicts with existing data", status_code=409)

@app.exception_handler(SQLAlchemyError)
async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Persistence failure on %s %s", request.method, request.url.path, exc_info=exc)
    return envelope(Status.ERROR, "Persistence failure", status_code=500)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}

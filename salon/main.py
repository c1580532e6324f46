import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so they're registered with SQLAlchemy Base
from . import models  # noqa: F401
from .cache import build_settings_cache
from .config import FRONTEND_URL, REDIS_URL, SETTINGS_CACHE_TTL
from .database import Base, engine
from .domain.appointments.router import router as appointments_router
from .domain.catalog.router import categories_router, products_router, services_router
from .domain.clients.router import router as clients_router
from .domain.scheduling.router import router as scheduling_router
from .domain.settings.router import router as settings_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Salon API", version="1.0.0", lifespan=lifespan)

# One settings cache per process, shared through Redis when configured
app.state.settings_cache = build_settings_cache(SETTINGS_CACHE_TTL, REDIS_URL)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# CORS Configuration
ALLOWED_ORIGINS = [origin.strip() for origin in FRONTEND_URL.split(",") if origin.strip()]
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
# Scheduling first so /citas/disponibilidad and /citas/ocupacion win over /citas/{id}
app.include_router(scheduling_router)
app.include_router(appointments_router)
app.include_router(clients_router)
app.include_router(categories_router)
app.include_router(services_router)
app.include_router(products_router)
app.include_router(settings_router)


@app.get("/health")
def health():
    return {"status": "healthy"}

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from office_service.api.api import api_router
from office_service.core.config import settings
from office_service.core.db import close_client, get_db, init_db
from office_service.core.errors import register_exception_handlers

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Office Service")
    await init_db(get_db())

    yield

    logger.info("Shutting down Office Service")
    close_client()


app = FastAPI(
    title="Office Service",
    version="0.1.0",
    description="Employee / leave management service (REST + MongoDB)",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "office-service",
    }


@app.get("/")
async def root():
    return {
        "message": "Office Service is running",
        "docs": "/docs",
    }


app.include_router(api_router, prefix="/api/v1")

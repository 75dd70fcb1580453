"""Module: main."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vetcare.api.v1.api import api_router
from vetcare.core.config import settings
from vetcare.core.logging import configure_logging
from vetcare.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    if settings.auto_create_tables:
        init_db()
    logger.info("VetCare API started")
    yield


app = FastAPI(title="VetCare API", version="0.1.0", lifespan=lifespan)

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def main() -> None:
    uvicorn.run("vetcare.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()

"""
Todo API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as todo_router
from auth.routes import router as user_router
from config.settings import Settings, config
from database.mongo import create_client, ensure_indexes, get_database

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("pymongo", "motor", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[AsyncIOMotorDatabase] = None,
) -> FastAPI:
    """
    Build the application.

    ``db`` lets callers hand in an already-connected database; otherwise a
    Motor client is opened on startup and closed on shutdown.
    """
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.db is None:
            client = create_client(settings)
            app.state.db = get_database(client, settings)
            logger.info("Connected to MongoDB database %s", app.state.db.name)
        await ensure_indexes(app.state.db)
        logger.info("Application ready to accept requests.")
        yield
        if client is not None:
            client.close()
            app.state.db = None

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        description="Todo items and user accounts backed by MongoDB.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-auth"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    app.include_router(todo_router)
    app.include_router(user_router)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Started on port %d", config.port)
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )

"""
chess-mcp-server: FastAPI application and process entrypoint.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from chess_mcp.api.errors import register_error_handlers
from chess_mcp.api.routes import SERVER_NAME, SERVER_VERSION, router
from chess_mcp.core.config import get_settings
from chess_mcp.db.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    logger.info("%s %s ready", SERVER_NAME, SERVER_VERSION)
    yield


app = FastAPI(title=SERVER_NAME, version=SERVER_VERSION, lifespan=lifespan)
app.include_router(router)
register_error_handlers(app)


def run() -> None:
    logger.info("%s listening on %s:%d", SERVER_NAME, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

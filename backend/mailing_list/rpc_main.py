"""Mailing List JSON-RPC API: FastAPI application for the remote-procedure front-end.

Invariants:
    - Exposes POST /rpc and the health endpoints; nothing else
    - Shares the process-wide session manager with the REST app

Design Decisions:
    - Separate FastAPI app on its own listener: either front-end can fail to bind
      without the other's app object being involved
    - Same error handlers as REST: only non-RPC failures (e.g. health) reach them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mailing_list.api.error_handlers import register_error_handlers
from mailing_list.api.routes import health, rpc

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info("JSON-RPC API started", extra={"listener": "rpc"})
    yield
    logger.info("JSON-RPC API shutting down", extra={"listener": "rpc"})


app = FastAPI(
    title="Mailing List JSON-RPC API", version="1.0.0", lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(rpc.router)

register_error_handlers(app)

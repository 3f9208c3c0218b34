"""Mailing List REST API: FastAPI application for the JSON front-end.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MailingListError → structured JSON responses
    - The database is initialized by the process runner, not here: this app and
      the JSON-RPC app share one session manager

Design Decisions:
    - Lifespan only logs: engine ownership belongs to server.py so two apps
      never create two engines
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mailing_list.api.error_handlers import register_error_handlers
from mailing_list.api.routes import health, subscribers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info("JSON API started", extra={"listener": "json"})
    yield
    logger.info("JSON API shutting down", extra={"listener": "json"})


app = FastAPI(
    title="Mailing List API", version="1.0.0", lifespan=lifespan,
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(subscribers.router)

register_error_handlers(app)

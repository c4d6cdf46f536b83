from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meeting_agent import __version__
from meeting_agent.api.v1.chat import router as chat_router
from meeting_agent.api.v1.health import router as health_router
from meeting_agent.api.v1.meetings import router as meetings_router
from meeting_agent.config import settings

# Configure basic logging
logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

description = "Voice-first meeting assistant: natural-language turns in, speakable replies out."
tags_metadata = [
    {"name": "chat", "description": "Conversational turn endpoint."},
    {"name": "meetings", "description": "Direct CRUD over stored meetings."},
    {"name": "Health", "description": "Liveness and dependency checks."},
]

app = FastAPI(
    title="Meeting Agent API",
    description=description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)
app.include_router(meetings_router)
app.include_router(health_router)

log.info("\U0001F331 FastAPI application configured. Environment: %s", settings.ENVIRONMENT)


@app.on_event("startup")
async def startup_event() -> None:
    # Outside prod the schema is created on the fly; prod runs alembic migrations.
    if settings.MEETING_STORE == "sql" and settings.ENVIRONMENT != "prod":
        from meeting_agent.db.base import create_db_and_tables

        await create_db_and_tables()
    log.info("\U0001F680 FastAPI application startup complete. Store=%s LLM=%s",
             settings.MEETING_STORE, settings.LLM_PROVIDER)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    log.info("\U0001F44B FastAPI application shutdown.")

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .logging_config import setup_logging
from .routers import chat, export, health
from .settings import settings
from .store import AssessmentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	setup_logging(settings.log_level)
	store = AssessmentStore(settings.database_location()).open()
	app.state.store = store
	logger.info("API key configured: %s", "yes" if settings.anthropic_api_key else "no")
	try:
		yield
	finally:
		store.close()


app = FastAPI(title="Readiness Quiz API", lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.allowed_origins(),
	allow_methods=["GET", "POST", "OPTIONS"],
	allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(export.router)


def run() -> None:
	import uvicorn

	uvicorn.run("readiness_quiz.main:app", host=settings.host, port=settings.port)

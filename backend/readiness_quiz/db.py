from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

if TYPE_CHECKING:
	from .store import AssessmentStore

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
	connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
	return create_engine(database_url, connect_args=connect_args, future=True)


def make_sessionmaker(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def get_store(request: Request) -> "AssessmentStore":
	# Owned by the app lifespan; tests swap it via dependency_overrides
	return request.app.state.store

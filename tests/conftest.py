"""
Shared fixtures: in-memory SQLite store and Azure Functions request helpers
"""

import json

import pytest
import azure.functions as func
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import init_db


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine, monkeypatch):
    """Point every service at the SQLite engine instead of DATABASE_URL"""
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    monkeypatch.setattr("services.conversation_service.SessionLocal", factory)
    monkeypatch.setattr("services.crisis_contact_service.SessionLocal", factory)
    return factory


@pytest.fixture
def bootstrapped(engine, session_factory):
    init_db(engine)
    return session_factory


_BUILT = {}


def handler(builder):
    """Return the plain Python function behind a decorated Functions trigger"""
    key = id(builder)
    if key not in _BUILT:
        _BUILT[key] = builder.build().get_user_function()
    return _BUILT[key]


def make_request(method, url, body=None, params=None):
    payload = b"" if body is None else (body if isinstance(body, bytes) else json.dumps(body).encode())
    return func.HttpRequest(
        method=method,
        url=url,
        headers={"Content-Type": "application/json"},
        params=params or {},
        body=payload,
    )


def json_of(response):
    return json.loads(response.get_body())

"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Session cookies
- Sample job and bid documents
"""

import os

# Point the app at in-memory SQLite before anything imports the settings
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import Base, SessionLocal, engine, get_db
from app.core.security import create_access_token
from app.models import Bid, Job  # noqa: F401  Register models on Base.metadata
from main import app


BUYER_EMAIL = "buyer@example.com"
BIDDER_EMAIL = "bidder@example.com"


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def session_for():
    """Return a helper that signs a session token for an email."""
    def make_token(email: str, **claims) -> str:
        return create_access_token({"email": email, **claims})
    return make_token


@pytest.fixture
def buyer_client(client, session_for):
    """Test client carrying the buyer's session cookie."""
    client.cookies.set(settings.SESSION_COOKIE_NAME, session_for(BUYER_EMAIL))
    return client


@pytest.fixture
def sample_job_data():
    """Sample job document as the marketplace frontend posts it"""
    return {
        "job_title": "Logo Design for a Fintech Startup",
        "category": "Graphics Design",
        "deadline": "2026-11-30T00:00:00.000Z",
        "description": "Design a modern, minimal logo and a small brand kit.",
        "min_price": 150,
        "max_price": 400,
        "bid_count": 0,
        "buyer": {
            "email": BUYER_EMAIL,
            "name": "Jane Buyer",
            "photo": "https://example.com/jane.png"
        }
    }


@pytest.fixture
def sample_bid_data():
    """Sample bid document; jobId is filled in by the test"""
    return {
        "email": BIDDER_EMAIL,
        "price": 250,
        "comment": "I can deliver three concepts within a week.",
        "deadline": "2026-11-20T00:00:00.000Z",
        "job_title": "Logo Design for a Fintech Startup",
        "category": "Graphics Design",
        "status": "Pending",
        "buyer": {
            "email": BUYER_EMAIL,
            "name": "Jane Buyer"
        }
    }

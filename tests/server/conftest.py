"""Pytest fixtures for FastAPI server tests.

This module provides test fixtures for database sessions, test clients,
and other common test utilities.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from wheeltracker.server.config import Settings
from wheeltracker.server.database.session import Database, get_db
from wheeltracker.server.main import create_app


@pytest.fixture(scope="function")
def test_database() -> Generator[Database, None, None]:
    """Create a migrated in-memory database.

    Runs every migration against a fresh in-memory SQLite database that
    is discarded after each test function completes.

    Yields:
        Initialized Database handle
    """
    database = Database("sqlite://").init()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture(scope="function")
def test_db(test_database: Database) -> Generator[Session, None, None]:
    """Create a test database session.

    Yields:
        SQLAlchemy session for testing

    Example:
        >>> def test_something(test_db):
        >>>     result = test_db.query(Model).all()
        >>>     assert len(result) == 0
    """
    db = test_database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def app() -> FastAPI:
    """Application built with in-memory settings."""
    return create_app(Settings(database_path=":memory:"))


@pytest.fixture(scope="function")
def client(app: FastAPI, test_db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with test database.

    Creates a FastAPI TestClient that uses the test database
    instead of the application's own database.

    Example:
        >>> def test_endpoint(client):
        >>>     response = client.get("/health")
        >>>     assert response.status_code == 200
    """

    def override_get_db():
        """Override database dependency with test database."""
        # Return the same session for all requests in a test
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    test_db.rollback()
    app.dependency_overrides.clear()


@pytest.fixture
def trade_payload() -> dict:
    """Request body for a one-contract AAPL cash-secured put."""
    return {
        "ticker": "aapl",
        "option_type": "PUT",
        "strike": 150.0,
        "expiration": "2026-03-20",
        "premium": 2.50,
        "quantity": 1,
    }


@pytest.fixture
def position_payload() -> dict:
    """Request body for 100 AAPL shares from an assigned put."""
    return {
        "ticker": "AAPL",
        "shares": 100,
        "cost_basis": 15000.0,
        "acquired_date": "2026-01-16",
        "acquisition_type": "ASSIGNED_PUT",
    }

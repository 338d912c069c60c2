# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.access import Principal
from core.permissions import build_permission_set
from dependencies.auth import get_optional_principal
from models.enums import CanonicalRole


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def as_principal(app):
    """Pretend the profile fetch resolved to the given principal (or None)."""
    def _override(principal):
        app.dependency_overrides[get_optional_principal] = lambda: principal
    yield _override
    app.dependency_overrides = {}


@pytest.fixture
def admin_principal():
    return Principal(
        role=CanonicalRole.administrator,
        permissions=build_permission_set([]),
        user_id="admin-1",
        email="admin@example.com",
        display_name="Ana Admin",
    )


@pytest.fixture
def agent_principal():
    return Principal(
        role=CanonicalRole.agent,
        permissions=build_permission_set(["rentas.ver"]),
        user_id="agent-1",
        email="agent@example.com",
        display_name="Luis Agente",
        office="Sucursal Centro",
    )


@pytest.fixture
def empty_principal():
    return Principal(role=CanonicalRole.agent, permissions=build_permission_set([]))

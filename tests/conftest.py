"""
Zap Manager Test Suite — Shared Fixtures

Runs the real app in-process against a throwaway SQLite database. The
Evolution gateway is replaced with FakeGateway through FastAPI dependency
overrides, so no network calls leave the test process.

Two-role auth model:
  - admin_token     : the seeded administrator
  - operator_token  : an operator registered by the administrator

Usage:
    pytest tests/ -v --tb=short
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

# ---------------------------------------------------------------------------
# Configuration (must happen before any backend import reads settings)
# ---------------------------------------------------------------------------

_TMP_DIR = tempfile.mkdtemp(prefix="zap-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-the-suite"
os.environ["ENCRYPTION_KEY"] = Fernet.generate_key().decode()
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["QR_FETCH_DELAY"] = "0"
os.environ["EVOLUTION_API_URL"] = "http://gateway.test"
os.environ["EVOLUTION_API_KEY"] = "test-gateway-key"
os.environ["DEFAULT_ADMIN_USERNAME"] = "admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"

BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from fastapi.testclient import TestClient  # noqa: E402

from core.app import create_app  # noqa: E402
from core.db import SessionLocal  # noqa: E402
from core.dependencies import get_gateway  # noqa: E402
from core.models import AuditLog  # noqa: E402
from helpers import FakeGateway, login, auth_headers  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
OPERATOR_USERNAME = "operator1"
OPERATOR_PASSWORD = "OperatorPass1"


# ---------------------------------------------------------------------------
# App and client
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    return create_app()


@pytest.fixture(scope="session")
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def gateway(app):
    """A fresh FakeGateway wired in as the app's gateway client."""
    fake = FakeGateway()
    app.dependency_overrides[get_gateway] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture()
def db(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def _clean_tables(client):
    """Every test starts with only the seeded administrator."""
    yield
    from modules.instances.models import Instance
    from modules.llms.models import LlmConfig
    from modules.organizations.models import User

    session = SessionLocal()
    try:
        session.query(Instance).delete()
        session.query(LlmConfig).delete()
        session.query(AuditLog).delete()
        session.query(User).filter(User.username != ADMIN_USERNAME).delete()
        session.commit()
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@pytest.fixture()
def admin_token(client):
    token = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert token, "Failed to login as the seeded administrator"
    return token


@pytest.fixture()
def admin_headers(admin_token):
    return auth_headers(admin_token)


@pytest.fixture()
def operator_token(client, admin_headers):
    resp = client.post("/api/auth/register", json={
        "username": OPERATOR_USERNAME,
        "password": OPERATOR_PASSWORD,
        "role": "operator",
    }, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    token = login(client, OPERATOR_USERNAME, OPERATOR_PASSWORD)
    assert token, "Failed to login as operator"
    return token


@pytest.fixture()
def operator_headers(operator_token):
    return auth_headers(operator_token)

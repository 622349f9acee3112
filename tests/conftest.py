import httpx
import os
import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from school_registry.config.settings import Settings
from school_registry.database import Base
from school_registry.main import create_app
from school_registry import models  # noqa: F401

# Load environment variables from .env file in the tests/ directory
load_dotenv()

# Set to run the e2e tests against a deployed backend
BACKEND_API_URL = os.getenv("BACKEND_API_URL")


def make_sqlite_engine(url: str = "sqlite://"):
    return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)


def valid_school_form(**overrides):
    form = {
        "name": "Greenwood High",
        "email": "office@greenwood.edu.in",
        "phone": "+91 98765-43210",
        "address": "12 MG Road, Koregaon Park",
        "city": "Pune",
        "state": "MH",
        "pincode": "411001",
    }
    form.update(overrides)
    return form


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "schoolImages"


@pytest.fixture()
def app_settings(upload_dir):
    return Settings(
        APP_ENV="test",
        UPLOAD_DIR=str(upload_dir),
        IMAGE_URL_PREFIX="/schoolImages",
    )


@pytest.fixture()
def engine():
    """In-memory SQLite engine with the schools table created."""
    engine = make_sqlite_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def empty_engine():
    """In-memory SQLite engine where the schools table was never created."""
    engine = make_sqlite_engine()
    yield engine
    engine.dispose()


@pytest.fixture()
def api_client(engine, app_settings):
    app = create_app(engine=engine, config=app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def uninitialised_api_client(empty_engine, app_settings):
    app = create_app(engine=empty_engine, config=app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def live_client():
    """
    Provides an httpx client for a running backend.
    """
    if not BACKEND_API_URL:
        pytest.skip("BACKEND_API_URL not set in .env file")

    with httpx.Client(base_url=BACKEND_API_URL, timeout=10) as client_instance:
        yield client_instance

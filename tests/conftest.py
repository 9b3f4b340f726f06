"""Pytest configuration and fixtures"""
import os

import pytest
from sqlalchemy.pool import StaticPool

# Set test environment variables before any app module reads them
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")

import db  # noqa: E402
import models  # noqa: E402,F401
from core.config import config  # noqa: E402


class ImmediateTimer:
    """Stands in for threading.Timer and fires as soon as it is started."""

    def __init__(self, interval, function, args=()):
        self.interval = interval
        self.function = function
        self.args = args
        self.daemon = False

    def start(self):
        self.function(*self.args)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test"""
    eng = db.init_engine(
        "sqlite+pysqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.Base.metadata.create_all(eng)
    yield eng
    db.Base.metadata.drop_all(eng)


@pytest.fixture
def app(engine):
    from app import create_app

    application = create_app()
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {config.security.token_header: config.security.admin_token}


@pytest.fixture
def sample_items():
    """Checkout transfer items for two lattes and a croissant"""
    return [
        {"name": "Latte", "unitPrice": 4.5, "quantity": 2, "imageUrl": "img/latte.jpg"},
        {"name": "Croissant", "unitPrice": 3.0, "quantity": 1, "imageUrl": "img/croissant.jpg"},
    ]

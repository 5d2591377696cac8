"""Shared fixtures: an isolated in-memory database per test and an API client
that can act as any user."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from vroommart.auth.models import TokenData
from vroommart.auth.service import get_current_user
from vroommart.core.rate_limiter import limiter
from vroommart.database.core import Base, get_db
from vroommart.database.models import User
from vroommart.products.service import ProductService
from vroommart.schemas.product import ProductCreate


@pytest.fixture
def db_session():
    """Fresh schema on a private in-memory SQLite engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        # the test owns the session; closing it here would detach test objects
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def act_as():
    """Authenticate subsequent requests as the given user id."""
    def _act_as(user_id: str):
        app.dependency_overrides[get_current_user] = lambda: TokenData(user_id=user_id, session_id="test-session")
    return _act_as


@pytest.fixture
def make_user(db_session):
    def _make_user(user_id: str, **fields) -> User:
        fields.setdefault("email", f"{user_id}@example.com")
        fields.setdefault("first_name", user_id.capitalize())
        user = User(id=user_id, **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_product(db_session):
    def _make_product(user_id: str, title: str = "Red sneakers", **fields):
        fields.setdefault("description", f"{title} in great condition")
        fields.setdefault("price", Decimal("25.00"))
        return ProductService.create_product(db_session, user_id, ProductCreate(title=title, **fields))
    return _make_product


@pytest.fixture
def alice(make_user):
    return make_user("alice", username="alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob", username="bob")


@pytest.fixture
def carol(make_user):
    return make_user("carol", username="carol")

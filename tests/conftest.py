import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from litle_plugin.main import app as fastapi_app
from litle_plugin.database import Base, get_db
import litle_plugin.auth

# Setup test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_temp.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={
                       "check_same_thread": False})
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


def override_get_db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def unauthenticated_client():
    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(unauthenticated_client):
    # Bypass auth verification
    fastapi_app.dependency_overrides[litle_plugin.auth.verify_token] = lambda: True
    yield unauthenticated_client


@pytest.fixture
def create_payment_method(db):
    from litle_plugin.payment_methods import PaymentMethodStore

    store = PaymentMethodStore(db)

    def _create(**overrides):
        attributes = {
            "kb_account_id": "11-22-33-44",
            "kb_payment_method_id": "55-66-77-88",
            "litle_token": "38102343",
            "cc_first_name": "ccFirstName",
            "cc_last_name": "ccLastName",
            "cc_type": "ccType",
            "cc_exp_month": 10,
            "cc_exp_year": 11,
            "cc_last_4": 1234,
            "address1": "address1",
            "address2": "address2",
            "city": "city",
            "state": "state",
            "zip": "zip",
            "country": "country",
        }
        attributes.update(overrides)
        return store.create(**attributes)

    return _create

import os
import tempfile
from datetime import date, timedelta

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="coworks-logs-")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_key"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp_test_secret"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from razorpay.errors import SignatureVerificationError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coworks.main import app
from coworks.core.dependencies import get_db
from coworks.core.security import hash_password
from coworks.db.session import Base
from coworks.models.admin import Admin
from coworks.models.location import Location
from coworks.models.space import Space
from coworks.services import lifecycle

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

VALID_SIGNATURE = "sig_valid"
ADMIN_EMAIL = "ops@aztechcoworks.in"
ADMIN_PASSWORD = "admin-pass"


# ---------------- FAKE GATEWAY ----------------
class FakeOrders:
    def __init__(self):
        self.created = []
        self.fail_with = None

    def create(self, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.created.append(data)
        return {"id": f"order_test{len(self.created)}", "amount": data["amount"], "status": "created"}


class FakeUtility:
    def verify_payment_signature(self, params):
        if params["razorpay_signature"] != VALID_SIGNATURE:
            raise SignatureVerificationError("Razorpay Signature Verification Failed")
        return True


class FakeRazorpay:
    def __init__(self):
        self.order = FakeOrders()
        self.utility = FakeUtility()


# ---------------- FIXTURES ----------------
@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def gateway(monkeypatch):
    fake = FakeRazorpay()
    monkeypatch.setattr(lifecycle, "razorpay_client", fake)
    return fake


@pytest.fixture
def admin(db):
    admin = Admin(name="Ops", email=ADMIN_EMAIL, password_hash=hash_password(ADMIN_PASSWORD))
    db.add(admin)
    db.commit()
    return admin


@pytest.fixture
def admin_headers(client, admin):
    res = client.post(
        "/functions/v1/admin-auth",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "action": "login"},
    )
    assert res.status_code == 200
    # rely on the header only, not the login cookie
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['token']}"}


def sign_up(client, email, phone, full_name="Test User", password="secret123"):
    res = client.post("/auth/signup", json={
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "password": password,
        "confirm_password": password,
    })
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def user_headers(client):
    return sign_up(client, "alice@startup.in", "9800000001", full_name="Alice Rao")


def make_location(db, **overrides):
    data = {
        "name": "Indiranagar Hub",
        "city": "Bengaluru",
        "address": "100 Feet Road",
        "is_active": True,
    }
    data.update(overrides)
    location = Location(**data)
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


def make_space(db, location, **overrides):
    data = {
        "location_id": location.id,
        "name": "Desk Row A",
        "type": "hotdesk",
        "capacity": 1,
        "price_per_month": 15000.0,
        "amenities": ["wifi", "coffee"],
        "is_active": True,
    }
    data.update(overrides)
    space = Space(**data)
    db.add(space)
    db.commit()
    db.refresh(space)
    return space


@pytest.fixture
def space(db):
    return make_space(db, make_location(db))


def next_week():
    return (date.today() + timedelta(days=7)).isoformat()


def book(client, headers, space_id, duration=3, start_hour=9):
    res = client.post("/bookings/", json={
        "space_id": space_id,
        "booking_date": next_week(),
        "start_hour": start_hour,
        "duration": duration,
        "notes": "Near the window please",
    }, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()

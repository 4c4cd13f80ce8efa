"""
Shared fixtures: in-memory SQLite database, API client and fake external collaborators.
"""

import os

# 앱 모듈 import 전에 설정 (settings 는 import 시점에 읽음)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.orm import Session

from app import app
from config.dependencies import get_payment_gateway, get_session_provider
from database import Base, SessionLocal, engine, init_db
from gateways.payment import PaymentGateway, PaymentRequest, PaymentResult
from gateways.video import HostedSessionProvider
from models.consultant_profile import ConsultantProfile
from models.enums import CategoryEnum, UserRole
from models.user import User


class FakePaymentGateway(PaymentGateway):
    """Deterministic gateway: outcome controlled by the test."""

    def __init__(self):
        self.charge_succeeds = True
        self.verify_succeeds = True
        self.refund_succeeds = True
        self.error = None
        self.charges: list[PaymentRequest] = []
        self.refunds: list[tuple[str, int]] = []

    async def process_payment(self, request: PaymentRequest) -> PaymentResult:
        self.charges.append(request)
        if self.error is not None:
            raise self.error
        if self.charge_succeeds:
            return PaymentResult(success=True, transaction_id=f"TXNTEST{len(self.charges)}")
        return PaymentResult(success=False, error="Card declined")

    async def verify_payment(self, transaction_id: str) -> bool:
        return self.verify_succeeds

    async def process_refund(self, transaction_id: str, amount: int) -> PaymentResult:
        self.refunds.append((transaction_id, amount))
        if self.refund_succeeds:
            return PaymentResult(success=True, transaction_id=f"REFTEST{len(self.refunds)}")
        return PaymentResult(success=False, error="Refund rejected")


@pytest.fixture(autouse=True)
def _reset_database():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_session_provider] = lambda: HostedSessionProvider("https://video.test")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db() -> Session:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.CLIENT, **fields) -> User:
        counter["n"] += 1
        user = User(
            email=fields.pop("email", f"{role.value.lower()}{counter['n']}@example.com"),
            hashed_password="not-a-real-hash",
            name=fields.pop("name", f"{role.value.title()} {counter['n']}"),
            role=role,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_consultant(db, make_user):
    def _make(
        *,
        approved: bool = True,
        first_session_price: int = 99,
        regular_session_price: int = 299,
        category: CategoryEnum = CategoryEnum.CAREER,
        is_online: bool = True,
        bio: str = "Career coach",
        skills: list | None = None,
        **user_fields,
    ) -> User:
        user = make_user(UserRole.CONSULTANT, **user_fields)
        db.add(
            ConsultantProfile(
                user_id=user.id,
                bio=bio,
                qualifications=[],
                skills=skills or [],
                category=category,
                first_session_price=first_session_price,
                regular_session_price=regular_session_price,
                is_approved=approved,
                is_online=is_online,
                profile_completed=True,
            )
        )
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def client_user(make_user) -> User:
    return make_user(UserRole.CLIENT, name="Asha Client")


@pytest.fixture
def consultant_user(make_consultant) -> User:
    return make_consultant(name="Dr. Priya Sharma", first_session_price=99, regular_session_price=299)


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(UserRole.ADMIN, name="Admin User")


@pytest.fixture
def create_booking(client, client_user, consultant_user):
    def _create(**overrides) -> dict:
        payload = {
            "clientId": client_user.id,
            "consultantId": consultant_user.id,
            "isFirstSession": True,
        }
        payload.update(overrides)
        response = client.post("/api/bookings", json=payload)
        assert response.status_code == 201, response.json()
        return response.json()["booking"]

    return _create


@pytest.fixture
def paid_booking(client, create_booking) -> dict:
    booking = create_booking()
    response = client.post(
        "/api/payments",
        json={
            "bookingId": booking["id"],
            "amount": booking["price"],
            "paymentMethod": "upi",
            "paymentDetails": {"upiId": "asha@upi"},
        },
    )
    assert response.status_code == 200, response.json()
    return response.json()["booking"]


@pytest.fixture
def active_session(client, paid_booking) -> dict:
    response = client.post(
        "/api/sessions",
        json={
            "bookingId": paid_booking["id"],
            "clientId": paid_booking["clientId"],
            "consultantId": paid_booking["consultantId"],
        },
    )
    assert response.status_code == 201, response.json()
    session = response.json()["session"]
    response = client.put(
        "/api/sessions",
        json={"sessionId": session["sessionId"], "userId": paid_booking["clientId"], "role": "client"},
    )
    assert response.status_code == 200, response.json()
    return response.json()["session"]


@pytest.fixture
def completed_booking(client, active_session) -> dict:
    response = client.post(
        f"/api/sessions/{active_session['sessionId']}/end",
        json={"userId": active_session["consultantId"], "role": "consultant"},
    )
    assert response.status_code == 200, response.json()
    return client.get(f"/api/bookings/{active_session['bookingId']}").json()["booking"]


@pytest.fixture
def fetch(db):
    """Fresh read of a row written by the API."""

    def _fetch(model, pk):
        db.expire_all()
        return db.get(model, pk)

    return _fetch


@pytest.fixture
def commit_before_flush(db):
    """Commit a competing row from another session right before the next API flush."""
    state = {"fired": False, "make_row": None}

    def _insert(session, flush_context, instances):
        if state["fired"] or session is db:
            return
        state["fired"] = True
        db.add(state["make_row"]())
        db.commit()

    def _arm(make_row):
        state["make_row"] = make_row
        event.listen(SessionLocal, "before_flush", _insert)

    yield _arm
    if event.contains(SessionLocal, "before_flush", _insert):
        event.remove(SessionLocal, "before_flush", _insert)

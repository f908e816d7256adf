"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from obligation_reminders.api.main import create_app
from obligation_reminders.api.dependencies import get_push_client, get_today
from obligation_reminders.config import Settings, get_settings
from obligation_reminders.infrastructure.clients.push import PushClient
from obligation_reminders.infrastructure.database.models import Base, CreditCard, FixedPayment, Installment, Loan
from obligation_reminders.infrastructure.database.session import get_db
from obligation_reminders.domain.models import Obligation, ObligationKind


TODAY = date(2024, 3, 10)
CRON_SECRET = "test-cron-secret"

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url=TEST_DATABASE_URL, cron_auth_secret=CRON_SECRET, push_gateway_url="")


@pytest.fixture
def app(db: Session, test_settings: Settings):
    """FastAPI app wired to the test database, a fixed date and no push gateway"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_push_client] = lambda: PushClient(gateway_url="")
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {CRON_SECRET}"}


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """
    Obligations as of 2024-03-10:
    - 4 should be reminded (card in 5 days, rent in 2, phone installment in 2, overdue loan)
    - the rest are settled, completed, inactive or outside their window
    """
    db.add_all(
        [
            CreditCard(
                user_id="user_1", name="Gold", bank_name="Acme Bank", last_four_digits="4242",
                balance=Decimal("12500.00"), minimum_payment=Decimal("2500.00"), currency="TRY", due_date=15,
            ),
            CreditCard(
                user_id="user_1", name="Platinum", bank_name="Acme Bank", last_four_digits="1111",
                balance=Decimal("0"), minimum_payment=Decimal("0"), currency="TRY", due_date=12,
            ),
            FixedPayment(
                user_id="user_1", name="Rent", category="housing", amount=Decimal("15000.00"),
                currency="TRY", payment_day=12, is_active=True,
            ),
            FixedPayment(
                user_id="user_1", name="Gym", category="health", amount=Decimal("900.00"),
                currency="TRY", payment_day=5, is_active=True,
            ),
            FixedPayment(
                user_id="user_1", name="Old Subscription", category="media", amount=Decimal("99.00"),
                currency="TRY", payment_day=11, is_active=False,
            ),
            Installment(
                user_id="user_1", name="Phone", category="electronics", total_amount=Decimal("30000.00"),
                monthly_amount=Decimal("5000.00"), currency="TRY", start_date=date(2024, 1, 12),
                total_months=6, paid_months=2, is_active=True,
            ),
            Installment(
                user_id="user_1", name="Laptop", category="electronics", total_amount=Decimal("24000.00"),
                monthly_amount=Decimal("2000.00"), currency="TRY", start_date=date(2023, 1, 12),
                total_months=12, paid_months=12, is_active=True,
            ),
            Loan(
                user_id="user_2", name="Car Loan", loan_type="vehicle", bank_name="Acme Bank",
                total_amount=Decimal("360000.00"), remaining_amount=Decimal("340000.00"),
                monthly_payment=Decimal("10000.00"), currency="TRY", payment_day=5,
                start_date=date(2024, 1, 5), total_months=36, paid_months=2, is_active=True,
            ),
        ]
    )
    db.commit()
    return db


@pytest.fixture
def make_obligation():
    """Factory for domain obligations with sensible defaults per kind"""

    def _make(kind: ObligationKind, **overrides) -> Obligation:
        fields = dict(
            id=f"{kind.value}-1",
            user_id="user_1",
            kind=kind,
            name=f"Test {kind.value}",
            amount_due=Decimal("100.00"),
            currency="TRY",
        )
        if kind in (ObligationKind.INSTALLMENT, ObligationKind.LOAN):
            fields.update(start_date=date(2024, 1, 12), paid_periods=2, total_periods=12)
        else:
            fields.update(anchor_day=12)
        fields.update(overrides)
        return Obligation(**fields)

    return _make

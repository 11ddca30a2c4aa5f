"""
Pytest configuration and fixtures
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.database import create_db_engine, get_db, init_db
from app.exceptions import NotificationError
from app.main import app
from app.models import Booking, BookingStatus, Customer, Service, Stylist
from app.services.booking_lifecycle import BookingLifecycleManager, utcnow
from app.services.email_service import get_email_service


class FakeEmailService:
    """Records outgoing emails instead of talking to SMTP"""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send_email(self, to_email: str, subject: str, body: str) -> dict:
        if self.fail:
            raise NotificationError(f"Error sending email to {to_email}: connection refused")
        self.sent.append({"to": to_email, "subject": subject, "body": body})
        return {"status": "success", "to": to_email, "subject": subject}


@pytest.fixture
def test_engine(tmp_path):
    """Create a file-backed SQLite engine so separate sessions see each other's commits"""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db_session(session_factory):
    """Create test database session"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_email():
    return FakeEmailService()


@pytest.fixture
def manager(test_db_session, fake_email):
    return BookingLifecycleManager(test_db_session, fake_email)


@pytest.fixture
def client(session_factory, fake_email):
    """Create test client wired to the test database and fake mailer"""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: fake_email
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_customer(test_db_session):
    customer = Customer(id=1, full_name="Jane Doe", email="jane@example.com")
    test_db_session.add(customer)
    test_db_session.commit()
    test_db_session.refresh(customer)
    return customer


@pytest.fixture
def sample_stylist(test_db_session):
    stylist = Stylist(id=2, name="Alex Kim", specialty="Coloring")
    test_db_session.add(stylist)
    test_db_session.commit()
    test_db_session.refresh(stylist)
    return stylist


@pytest.fixture
def sample_service(test_db_session):
    service = Service(id=3, name="Haircut", price=Decimal("45.00"))
    test_db_session.add(service)
    test_db_session.commit()
    test_db_session.refresh(service)
    return service


@pytest.fixture
def sample_booking(test_db_session, sample_customer, sample_stylist, sample_service):
    """Create sample booking"""
    now = utcnow()
    booking = Booking(
        customer_id=sample_customer.id,
        stylist_id=sample_stylist.id,
        service_id=sample_service.id,
        date_time=datetime(2025, 6, 1, 10, 0) + timedelta(days=1),
        status=BookingStatus.PENDING,
        created_date=now,
        last_modified_date=now,
        notes="Test booking",
    )
    test_db_session.add(booking)
    test_db_session.commit()
    test_db_session.refresh(booking)
    return booking


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")

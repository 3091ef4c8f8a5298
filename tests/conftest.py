"""
Pytest configuration and shared fixtures for the booking API tests.
"""

import os

# Point settings at SQLite before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["LOGFIRE_TOKEN"] = ""

from datetime import datetime, timedelta

import httpx
import logfire
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.auth import CallerContext, create_access_token, hash_password
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models import (
    Appointment,
    AppointmentStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Professional,
    ServiceType,
    User,
    UserRole,
)

logfire.configure(send_to_logfire=False, console=False)

# Hash once, bcrypt is deliberately slow
PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    fastapi_app.dependency_overrides.clear()


def future(days: int = 7, hour: int = 14, minute: int = 0) -> datetime:
    """A whole-minute instant ``days`` from now."""
    return (datetime.utcnow() + timedelta(days=days)).replace(
        hour=hour, minute=minute, second=0, microsecond=0
    )


def ctx(user: User) -> CallerContext:
    return CallerContext(user_id=user.id, role=user.role)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


async def make_user(
    db: AsyncSession,
    email: str,
    role: UserRole = UserRole.USER,
    name: str | None = None,
) -> User:
    user = User(
        name=name or email.split("@")[0].title(),
        email=email,
        hashed_password=PASSWORD_HASH,
        role=role,
        phone="555-0100",
    )
    db.add(user)
    await db.flush()
    return user


async def make_professional(db: AsyncSession, user: User, **overrides) -> Professional:
    fields = {
        "service_type": ServiceType.DOCTOR,
        "specialization": "General Practice",
        "location": "Mumbai",
        "working_hours": {"start": "09:00", "end": "18:00", "days": ["Monday", "Tuesday"]},
        "is_active": True,
    }
    fields.update(overrides)
    professional = Professional(user_id=user.id, **fields)
    db.add(professional)
    await db.flush()
    return professional


async def make_appointment(
    db: AsyncSession,
    customer: User,
    professional: Professional,
    date_time: datetime,
    status: AppointmentStatus = AppointmentStatus.PENDING,
    duration: int = 60,
    notes: str | None = None,
) -> Appointment:
    appointment = Appointment(
        customer_id=customer.id,
        professional_id=professional.id,
        service_type="Consultation",
        date_time=date_time,
        duration=duration,
        status=status,
        notes=notes,
    )
    db.add(appointment)
    await db.flush()
    return appointment


async def make_payment(
    db: AsyncSession,
    appointment: Appointment,
    status: PaymentStatus = PaymentStatus.PAID,
    amount: float = 500.0,
) -> Payment:
    payment = Payment(
        appointment_id=appointment.id,
        amount=amount,
        status=status,
        method=PaymentMethod.UPI,
    )
    db.add(payment)
    await db.flush()
    return payment


@pytest.fixture
async def customer(db_session):
    return await make_user(db_session, "customer@example.com", name="Asha Customer")


@pytest.fixture
async def other_customer(db_session):
    return await make_user(db_session, "other@example.com", name="Other Customer")


@pytest.fixture
async def admin(db_session):
    return await make_user(db_session, "admin@example.com", UserRole.ADMIN, name="Site Admin")


@pytest.fixture
async def pro_user(db_session):
    return await make_user(db_session, "doctor@example.com", UserRole.PROFESSIONAL, name="Dr. Rao")


@pytest.fixture
async def professional(db_session, pro_user):
    return await make_professional(db_session, pro_user)


@pytest.fixture
async def seeded(db_session, customer, other_customer, admin, pro_user, professional):
    """Commit the standard cast so API requests in other sessions can see it."""
    await db_session.commit()
    return {
        "customer": customer,
        "other_customer": other_customer,
        "admin": admin,
        "pro_user": pro_user,
        "professional": professional,
    }

# tests/conftest.py
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from employee_api.database import Database
from employee_api.main import create_app


@pytest_asyncio.fixture
async def database():
    # One shared connection so every session sees the same in-memory database.
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def employee_payload():
    def make(**overrides):
        payload = {
            "employeeId": "E-100",
            "firstName": "John",
            "lastName": "Smith",
            "email": "john.smith@example.com",
            "phoneNumber": "555-0100",
            "dateOfBirth": "1988-04-12",
            "department": "Engineering",
            "position": "Developer",
            "dateOfJoining": "2024-02-15",
            "salary": 72000,
        }
        payload.update(overrides)
        return payload
    return make

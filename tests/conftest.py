import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.session import Base, get_db
from app.core.security import get_password_hash
from decimal import Decimal
from app.models.user import User, UserRole
from app.models.work_entry import WorkEntry, WorkEntryStatus, WorkType

# In-memory database shared by every connection of a test
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    """Fresh schema for each test"""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a database session for each test"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session):
    """Create test client with database override"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db_session, employee_id, first_name, last_name, role, password, department="Engineering"):
    user = User(
        employee_id=employee_id,
        username=f"{first_name.lower()}.{last_name.lower()}",
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}.{last_name.lower()}@company.com",
        designation=role.value.title(),
        department=department,
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def login(client, username, password):
    response = client.post("/auth/login", json={"username": username, "password": password})
    return response.json()["access_token"]


@pytest.fixture
def manager_user(db_session):
    """Create manager user for testing"""
    return make_user(db_session, "MGR001", "Maria", "Manager", UserRole.MANAGER, "manager123", "Management")


@pytest.fixture
def hr_user(db_session):
    """Create HR user for testing"""
    return make_user(db_session, "HR001", "Harper", "Hr", UserRole.HR, "hr123456", "Human Resources")


@pytest.fixture
def employee_user(db_session):
    """Create employee user for testing"""
    return make_user(db_session, "EMP001", "John", "Doe", UserRole.EMPLOYEE, "employee123")


@pytest.fixture
def other_employee(db_session):
    """Second employee in a different department"""
    return make_user(db_session, "EMP002", "Jane", "Roe", UserRole.EMPLOYEE, "employee456", "Design")


@pytest.fixture
def manager_token(client, manager_user):
    """Get manager auth token"""
    return login(client, "maria.manager", "manager123")


@pytest.fixture
def hr_token(client, hr_user):
    """Get HR auth token"""
    return login(client, "harper.hr", "hr123456")


@pytest.fixture
def employee_token(client, employee_user):
    """Get employee auth token"""
    return login(client, "john.doe", "employee123")


@pytest.fixture
def other_employee_token(client, other_employee):
    return login(client, "jane.roe", "employee456")


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def add_entry(db_session, user, entry_date, hours="8", entry_status=WorkEntryStatus.PENDING, work_type=WorkType.TASK):
    entry = WorkEntry(
        user_id=user.id,
        date=entry_date,
        work_type=work_type,
        description="Seeded work",
        time_spent=Decimal(hours),
        status=entry_status,
    )
    db_session.add(entry)
    db_session.commit()
    db_session.refresh(entry)
    return entry

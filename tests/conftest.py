"""
Test configuration and fixtures.

Provides:
- A fresh in-memory SQLite database per test
- Bearer token minting per role for authenticated tests
- HTTPX AsyncClient with the database and token service overridden
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Callable, Generator

# Must be set before the app (and its settings) are imported
os.environ["TESTING"] = "1"
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "False"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from greenworld.main import app
from greenworld.core.deps import get_db, get_token_service
from greenworld.core.security import TokenService, hash_password
from greenworld.db.enums import ImpactType, ProjectStatus, Role
from greenworld.db.models import Milestone, Project, User
from greenworld.db.session import enable_sqlite_foreign_keys, init_db


TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "password123"
# Hashed once; bcrypt is deliberately slow
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """
    One in-memory database per test.

    StaticPool keeps a single connection so every session (including the
    ones used from FastAPI's threadpool) sees the same data.
    """
    test_engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(test_engine)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    """Session shared by the test body and the app under test."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(scope="function")
def token_secret() -> str:
    return TEST_SECRET


@pytest.fixture(scope="function")
def user_password() -> str:
    """Plain-text password of every user made by make_user."""
    return TEST_PASSWORD


@pytest.fixture(scope="function")
def tokens(token_secret: str) -> TokenService:
    return TokenService(token_secret, expires_days=7)


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    """Create a user with TEST_PASSWORD."""

    def _make_user(
        role: Role = Role.VOLUNTEER,
        email: str | None = None,
        name: str | None = None,
        organization_name: str | None = None,
    ) -> User:
        user = User(
            email=email or f"{role.value}-{uuid.uuid4().hex[:8]}@example.com",
            password_hash=TEST_PASSWORD_HASH,
            name=name or f"{role.value.title()} User",
            role=role.value,
            organization_name=organization_name,
        )
        db.add(user)
        db.flush()
        return user

    return _make_user


@pytest.fixture(scope="function")
def make_project(db: Session) -> Callable[..., Project]:
    """Create a project owned by the given NGO user."""

    def _make_project(owner: User, milestones: list[str] | None = None, **fields) -> Project:
        values = {
            "title": "Urban Forest Initiative",
            "description": "Planting native trees across the city",
            "location": "Mumbai, India",
            "funding_goal": 50000,
            "funding_received": 0,
            "status": ProjectStatus.ACTIVE.value,
            "impact_type": ImpactType.TREES.value,
        }
        values.update(fields)
        project = Project(ngo_id=owner.id, **values)
        for index, name in enumerate(milestones or []):
            project.milestones.append(Milestone(name=name, order_index=index))
        db.add(project)
        db.flush()
        return project

    return _make_project


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class AuthContext:
    """Test authentication context."""
    user: User
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(scope="function")
def login_as(make_user, tokens: TokenService) -> Callable[..., AuthContext]:
    """Create a user of the given role and mint a bearer token for it."""

    def _login_as(role: Role, **kwargs) -> AuthContext:
        user = make_user(role, **kwargs)
        return AuthContext(user=user, token=tokens.issue(user))

    return _login_as


@pytest.fixture(scope="function")
def ngo(login_as) -> AuthContext:
    return login_as(Role.NGO, organization_name="Green Earth Society")


@pytest.fixture(scope="function")
def volunteer(login_as) -> AuthContext:
    return login_as(Role.VOLUNTEER, name="Jane Volunteer")


@pytest.fixture(scope="function")
def corporate(login_as) -> AuthContext:
    return login_as(Role.CORPORATE, organization_name="TechCorp Inc.")


@pytest.fixture(scope="function")
def admin(login_as) -> AuthContext:
    return login_as(Role.ADMIN)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session, tokens: TokenService) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient bound to the test database.

    Authenticated calls pass `headers=auth.headers` per request.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: tokens

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()

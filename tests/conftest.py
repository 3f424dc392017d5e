import itertools
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import security
from app.core.enums import Role, UserStatus
from app.db import models, session
from app.main import app

PASSWORD = "secret123"
_phones = itertools.count(1000000000)


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    models.Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[session.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, name, *, role=Role.EMPLOYEE, department="Engineering", manager=None,
              status=UserStatus.ACTIVE, email=None, phone=None, password=PASSWORD):
    user = models.User(
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        phone=phone or str(next(_phones)),
        hashed_password=security.get_password_hash(password),
        role=role,
        department=None if role == Role.SUPER_ADMIN else department,
        designation=None if role == Role.SUPER_ADMIN else "Engineer",
        manager_id=manager.id if manager else None,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {security.create_access_token(user.id)}"}


@pytest.fixture
def admin(db):
    return make_user(db, "Super Admin", role=Role.SUPER_ADMIN)


@pytest.fixture
def hr_manager(db):
    return make_user(db, "Hannah Reyes", role=Role.HR_MANAGER, department="People")


@pytest.fixture
def employee(db, hr_manager):
    return make_user(db, "Evan Stone", manager=hr_manager)


@pytest.fixture
def other_employee(db, hr_manager):
    return make_user(db, "Olive Park", department="Sales", manager=hr_manager)

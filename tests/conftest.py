import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from journaling.database import Base, get_db
from journaling.main import app
from journaling.models.user import User
from journaling.models.work_package import WorkPackage
from journaling.models.custom_field import CustomField

TEST_DB_URL = "sqlite:///./test_journaling.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "alice": User(login="alice", name="Alice", email="alice@example.com"),
        "bob": User(login="bob", name="Bob", email="bob@example.com"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def custom_fields(db):
    fields = [
        CustomField(name="Customer", field_format="string"),
        CustomField(name="Acceptance criteria", field_format="text"),
    ]
    for f in fields:
        db.add(f)
    db.commit()
    for f in fields:
        db.refresh(f)
    return fields


@pytest.fixture
def work_package(db, seed_users):
    wp = WorkPackage(subject="Write docs", description="Hello", author_id=seed_users["alice"].user_id)
    db.add(wp)
    db.commit()
    db.refresh(wp)
    return wp


def get_token(client, login: str) -> str:
    resp = client.post("/api/auth/login", json={"login": login})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, login: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, login)}"}

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cookmate.database import Base, get_db
from cookmate.main import app
from cookmate.models import Recipe, User
from cookmate.services.email import EmailDeliveryError, get_email_client
from cookmate.utils.auth import create_access_token, hash_password

# --- Test Database Setup ---

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeEmailClient:
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to_email, subject, html_body, text_body):
        if self.fail:
            raise EmailDeliveryError("SMTP unavailable")
        self.sent.append({"to": to_email, "subject": subject, "text": text_body})


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    return FakeEmailClient()


@pytest.fixture
def client(mailer):
    """Test client with DB and mail overrides."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_client] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


def make_user(db, email="cook@example.com", password="secret1", full_name="Test Cook", verified=True):
    user = User(
        full_name=full_name,
        email=email,
        username=email.split("@")[0],
        password_hash=hash_password(password),
        email_verified=verified,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_recipe(db, title="Omelette", ingredients=(("egg", "2"), ("milk", "50 ml")), **fields):
    recipe = Recipe(title=title, steps=fields.pop("steps", ["Cook it"]), **fields)
    recipe.set_ingredients([{"name": n, "quantity": q} for n, q in ingredients])
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def user(db_session):
    return make_user(db_session)


@pytest.fixture
def headers(user):
    return auth_headers(user)

import os

# Cheap password hashing for the test run; must be set before settings are first read
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")
os.environ.pop("TOKEN_TTL_MINUTES", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from storekeeper.api.main import app
from storekeeper.db import models
from storekeeper.db.database import SessionLocal, engine
from storekeeper.services.token_service import TokenService
from storekeeper.utils.passwords import hash_password
from storekeeper.utils.realms import Realm

DEFAULT_PASSWORD = "secret-pass"


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory resets per process)."""
    try:
        models.Base.metadata.create_all(bind=engine)
    except OperationalError as e:
        pytest.exit(f"Failed to create test schema: {e}")
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Truncate all tables between tests without dropping metadata (faster)."""
    with engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_factory(db_session: Session):
    def _create(email: str = "admin@example.com", name: str = "Admin", password: str = DEFAULT_PASSWORD):
        admin = models.Admin(name=name, email=email, password_hash=hash_password(password))
        db_session.add(admin)
        db_session.commit()
        db_session.refresh(admin)
        return admin
    return _create


@pytest.fixture
def user_factory(db_session: Session):
    def _create(email: str = "user@example.com", name: str = "User", password: str = DEFAULT_PASSWORD):
        user = models.User(name=name, email=email, password_hash=hash_password(password))
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def storage_factory(db_session: Session):
    def _create(user):
        storage = models.Storage(user_id=user.id)
        db_session.add(storage)
        db_session.commit()
        db_session.refresh(storage)
        return storage
    return _create


@pytest.fixture
def item_factory(db_session: Session):
    def _create(storage, name: str = "Hammer", description: str = "A claw hammer"):
        item = models.Item(storage_id=storage.id, name=name, description=description)
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item
    return _create


@pytest.fixture
def auth_headers(db_session: Session):
    """Issue a fresh token for (realm, principal) and return the request headers."""
    def _headers(realm: Realm, principal) -> dict:
        token = TokenService(db_session).issue(realm, principal.id)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_headers(admin_factory, auth_headers):
    return auth_headers(Realm.ADMIN, admin_factory())


@pytest.fixture
def user_account(user_factory):
    return user_factory()


@pytest.fixture
def user_headers(user_account, auth_headers):
    return auth_headers(Realm.USER, user_account)

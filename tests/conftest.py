import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_roomivo.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@test.example.com"
os.environ["FIRST_ADMIN_PASSWORD"] = "AdminTest123!"
os.environ["CLOUDINARY_FOLDER"] = "roomivo-test/properties"
os.environ["SMTP_HOST"] = ""

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from roomivo.api.deps import get_db, get_session_factory
from roomivo.core.config import settings
from roomivo.core.security import create_access_token, get_password_hash
from roomivo.db.models.property import Property as PropertyModel
from roomivo.db.models.role import Role as RoleModel
from roomivo.db.models.user import User as UserModel
from roomivo.main import app
from roomivo.services.chat_relay import ChatRelay


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,
    )

    # WAL mode reduces locking between the test thread and the app thread
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    # Run Alembic migrations to set up the schema and seed data
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    try:
        yield engine
    finally:
        engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db_session, session_factory):
    """Create a test client with database dependency overrides and a fresh relay."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.state.chat_relay = ChatRelay()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_user(db: Session, email: str, password: str, role_name: str, **profile) -> UserModel:
    """Insert a user with the given role directly, bypassing registration."""
    role = db.query(RoleModel).filter(RoleModel.name == role_name).first()
    if not role:
        raise RuntimeError(f"Role {role_name} not found")

    user = UserModel(
        email=email,
        password_hash=get_password_hash(password),
        role_id=role.id,
        preferred_locations=profile.pop("preferred_locations", []),
        amenities_required=profile.pop("amenities_required", []),
        **profile,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_listing(db: Session, landlord_id: int, **fields) -> PropertyModel:
    """Insert a verified listing directly."""
    values = {
        "title": "Listing",
        "price": 500.0,
        "city": "Nantes",
        "amenities": [],
        "rooms": 2,
        "verified": True,
        "legal_compliance_score": 95,
    }
    values.update(fields)
    listing = PropertyModel(landlord_id=landlord_id, **values)
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


def _user_dict(user: UserModel, password: str) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "password": password,
        "role_id": user.role_id,
    }


@pytest.fixture(scope="function")
def admin_user(db: Session) -> dict:
    """The admin seeded by migration 002."""
    from roomivo.repositories.user import get_user_by_email

    user = get_user_by_email(db, settings.first_admin_email)
    if not user:
        raise RuntimeError("Admin user not found. Check migration 002.")
    return _user_dict(user, settings.first_admin_password)


@pytest.fixture(scope="function")
def admin_token(admin_user: dict) -> str:
    return create_access_token(admin_user["id"], admin_user["email"])


@pytest.fixture(scope="function")
def tenant_user_dict(db: Session) -> dict:
    password = "TenantPass123!"
    user = create_user(db, "tenant@example.com", password, "tenant")
    return _user_dict(user, password)


@pytest.fixture(scope="function")
def tenant_token(tenant_user_dict: dict) -> str:
    return create_access_token(tenant_user_dict["id"], tenant_user_dict["email"])


@pytest.fixture(scope="function")
def another_tenant_user_dict(db: Session) -> dict:
    password = "OtherTenant123!"
    user = create_user(db, "another.tenant@example.com", password, "tenant")
    return _user_dict(user, password)


@pytest.fixture(scope="function")
def another_tenant_token(another_tenant_user_dict: dict) -> str:
    return create_access_token(another_tenant_user_dict["id"], another_tenant_user_dict["email"])


@pytest.fixture(scope="function")
def landlord_user_dict(db: Session) -> dict:
    password = "LandlordPass123!"
    user = create_user(db, "landlord@example.com", password, "landlord")
    return _user_dict(user, password)


@pytest.fixture(scope="function")
def landlord_token(landlord_user_dict: dict) -> str:
    return create_access_token(landlord_user_dict["id"], landlord_user_dict["email"])


@pytest.fixture(scope="function")
def another_landlord_user_dict(db: Session) -> dict:
    password = "OtherLandlord123!"
    user = create_user(db, "another.landlord@example.com", password, "landlord")
    return _user_dict(user, password)


@pytest.fixture(scope="function")
def another_landlord_token(another_landlord_user_dict: dict) -> str:
    return create_access_token(
        another_landlord_user_dict["id"], another_landlord_user_dict["email"]
    )


@pytest.fixture(scope="function")
def listing(db: Session, landlord_user_dict: dict) -> PropertyModel:
    """A listing owned by the landlord fixture."""
    return create_listing(
        db,
        landlord_user_dict["id"],
        title="Bright flat near the river",
        price=500.0,
        city="Nantes",
        amenities=["WiFi"],
    )

import os
import tempfile
from datetime import date, time

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_dojo.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@test.example.com"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from dojo.main import app
from dojo.core.security import create_access_token
from dojo.db.models.gym_class import ClassAccess as ClassAccessModel
from dojo.db.models.gym_class import GymClass as GymClassModel
from dojo.db.models.location import Location as LocationModel
from dojo.db.models.location import MembershipType as MembershipTypeModel
from dojo.db.models.membership import Membership as MembershipModel
from dojo.db.models.profile import Profile as ProfileModel
from dojo.db.models.role import Role as RoleModel
from dojo.db.models.user import User as UserModel

# 2026-10-19 is a Monday; classes in these tests run on Mondays (day_of_week 1)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)


@pytest.fixture(scope="function")
def session_factory():
    """Create a fresh database for each test, run migrations, and yield a session factory."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    try:
        yield TestingSessionLocal
    finally:
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from dojo.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_user(db: Session, email: str, role_name: str) -> UserModel:
    role = db.query(RoleModel).filter(RoleModel.name == role_name).first()
    if not role:
        raise RuntimeError(f"Role {role_name} not found")

    user = UserModel(email=email, role_id=role.id)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# ============================================================================
# LOCATIONS AND MEMBERSHIP TYPES
# ============================================================================


@pytest.fixture(scope="function")
def location(db: Session) -> LocationModel:
    loc = LocationModel(name="Downtown")
    db.add(loc)
    db.commit()
    db.refresh(loc)
    return loc


@pytest.fixture(scope="function")
def other_location(db: Session) -> LocationModel:
    loc = LocationModel(name="Riverside")
    db.add(loc)
    db.commit()
    db.refresh(loc)
    return loc


@pytest.fixture(scope="function")
def membership_type(db: Session, location: LocationModel) -> MembershipTypeModel:
    mtype = MembershipTypeModel(location_id=location.id, name="Unlimited")
    db.add(mtype)
    db.commit()
    db.refresh(mtype)
    return mtype


@pytest.fixture(scope="function")
def other_membership_type(db: Session, location: LocationModel) -> MembershipTypeModel:
    mtype = MembershipTypeModel(location_id=location.id, name="Kids Twice Weekly")
    db.add(mtype)
    db.commit()
    db.refresh(mtype)
    return mtype


# ============================================================================
# USERS
# ============================================================================


@pytest.fixture(scope="function")
def admin_user(db: Session) -> UserModel:
    """The admin user seeded by migration 002."""
    from dojo.repositories.user import get_user_by_email
    from dojo.core.config import settings

    user = get_user_by_email(db, settings.first_admin_email)
    if not user:
        raise RuntimeError("Admin user not found. Check migration 002.")
    return user


@pytest.fixture(scope="function")
def admin_token(admin_user: UserModel) -> str:
    return create_access_token(data={"sub": admin_user.id})


@pytest.fixture(scope="function")
def professor_user(db: Session) -> UserModel:
    return _create_user(db, "professor@example.com", "professor")


@pytest.fixture(scope="function")
def professor_token(professor_user: UserModel) -> str:
    return create_access_token(data={"sub": professor_user.id})


@pytest.fixture(scope="function")
def instructor_user(db: Session) -> UserModel:
    return _create_user(db, "instructor@example.com", "instructor")


@pytest.fixture(scope="function")
def instructor_token(instructor_user: UserModel) -> str:
    return create_access_token(data={"sub": instructor_user.id})


@pytest.fixture(scope="function")
def member_factory(db: Session, location: LocationModel, membership_type: MembershipTypeModel):
    """Create a member with a profile and one membership."""
    counter = {"n": 0}

    def make(
        first_name: str,
        last_name: str = "Silva",
        *,
        location_id: int | None = None,
        membership_type_id: int | None = None,
        status: str = "active",
        is_kids_program: bool = False,
        belt_rank: str = "white",
        stripes: int = 0,
    ) -> UserModel:
        counter["n"] += 1
        user = _create_user(
            db, f"{first_name.lower()}.{counter['n']}@example.com", "member"
        )
        db.add(
            ProfileModel(
                user_id=user.id,
                first_name=first_name,
                last_name=last_name,
                email=user.email,
                is_child=is_kids_program,
                is_kids_program=is_kids_program,
                belt_rank=belt_rank,
                stripes=stripes,
            )
        )
        db.add(
            MembershipModel(
                user_id=user.id,
                location_id=location_id or location.id,
                membership_type_id=membership_type_id or membership_type.id,
                status=status,
            )
        )
        db.commit()
        db.refresh(user)
        return user

    return make


@pytest.fixture(scope="function")
def member_user(member_factory) -> UserModel:
    return member_factory("Helio", "Gracie")


@pytest.fixture(scope="function")
def member_token(member_user: UserModel) -> str:
    return create_access_token(data={"sub": member_user.id})


@pytest.fixture(scope="function")
def kids_member(member_factory) -> UserModel:
    return member_factory("Kai", "Machado", is_kids_program=True)


# ============================================================================
# CLASSES
# ============================================================================


def make_class(
    db: Session,
    location_id: int,
    name: str = "Fundamentals",
    day_of_week: int = 1,
    membership_type_id: int | None = None,
    is_active: bool = True,
) -> GymClassModel:
    gym_class = GymClassModel(
        location_id=location_id,
        name=name,
        day_of_week=day_of_week,
        start_time=time(18, 0),
        end_time=time(19, 30),
        membership_type_id=membership_type_id,
        is_active=is_active,
    )
    db.add(gym_class)
    db.commit()
    db.refresh(gym_class)
    return gym_class


@pytest.fixture(scope="function")
def gym_class(db: Session, location: LocationModel) -> GymClassModel:
    """A Monday class open to every active member at the location."""
    return make_class(db, location.id)


@pytest.fixture(scope="function")
def grant(db: Session, professor_user: UserModel, gym_class: GymClassModel) -> ClassAccessModel:
    """Give the professor grading access to the class."""
    access = ClassAccessModel(grader_user_id=professor_user.id, class_id=gym_class.id)
    db.add(access)
    db.commit()
    db.refresh(access)
    return access

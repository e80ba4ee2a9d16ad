import pytest
from datetime import date
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.category import Category
from app.models.ranking_item import RankingItem
from app.repositories.sql_gateway import SqlRankingGateway
from app.seed.seed_data import seed_db


# Use a SQLite file database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enforce foreign keys like Postgres does."""
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def gateway(db_session):
    return SqlRankingGateway(db_session)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def seeded_db(db_session):
    """Create a database session with seeded data."""
    seed_db(db_session)
    return db_session


@pytest.fixture(scope="function")
def seeded_client(seeded_db):
    """Create a test client with seeded database."""
    def override_get_db():
        try:
            yield seeded_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db_session):
    """Fixture that provides a function to insert a category row."""
    def _create(category_id, name=None):
        category = Category(id=category_id, name=name or category_id)
        db_session.add(category)
        db_session.commit()
        return category
    return _create


@pytest.fixture
def make_item(db_session):
    """Fixture that provides a function to insert a ranking item row (rank left unset)."""
    def _create(item_id, category_id, score, image_url=None, eaten_at=date(2026, 3, 1), name=None):
        item = RankingItem(
            id=item_id,
            category_id=category_id,
            name=name or item_id,
            score=score,
            eaten_at=eaten_at,
            comment="",
            image_url=image_url,
        )
        db_session.add(item)
        db_session.commit()
        return item
    return _create

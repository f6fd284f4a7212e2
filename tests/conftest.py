"""
Test configuration and fixtures for pcf-api tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pcf_api.main import app
from pcf_api.db.database import get_db
from pcf_api.db.init_db import create_tables
from pcf_api.db.models import Dataset, Method
from pcf_api.dependencies import get_graph_storage
from pcf_api.domain.events import event_publisher
from pcf_api.graphstore import GraphStorage


@pytest.fixture(autouse=True)
def clean_event_subscribers():
    """Each test starts and ends without domain event subscribers."""
    event_publisher.clear_subscribers()
    yield
    event_publisher.clear_subscribers()


@pytest.fixture
def db_engine():
    """In-memory SQLite catalog shared by all sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def graph_storage(tmp_path):
    """Create a graph storage instance in a temporary directory."""
    return GraphStorage(base_path=str(tmp_path / "graphs"))


@pytest.fixture
def client(db_engine, graph_storage):
    """Create test client wired to the test catalog and graph storage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_graph_storage] = lambda: graph_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def default_method(db_session):
    method = Method(id=1, name="Default", gwp_set="GWP100")
    db_session.add(method)
    db_session.commit()
    return method


@pytest.fixture
def sample_datasets(db_session, default_method):
    """Strommix DE (1), Diesel (2) and LKW-Transport (3) in the catalog."""
    rows = [
        Dataset(name="Strommix DE", source="UBA", year=2022, geo="DE", unit="kWh",
                value_co2e=0.401, kind="energy", method_id=default_method.id),
        Dataset(name="Diesel", source="ecoinvent", year=2020, geo="EU", unit="l",
                value_co2e=2.68, kind="energy", method_id=default_method.id),
        Dataset(name="LKW-Transport", source="ecoinvent", year=2020, geo="EU", unit="tkm",
                value_co2e=0.12, kind="emissions", method_id=default_method.id),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return rows


@pytest.fixture
def sample_project(graph_storage):
    """Create a sample project for testing."""
    project = graph_storage.create_project("Test Project", "A test project")
    return project


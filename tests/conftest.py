# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
import os
import shutil
import tempfile
import logging
from sqlalchemy import create_engine

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Point the app at a throwaway database before anything imports the settings ---
TEST_DB_DIR = tempfile.mkdtemp(prefix="keymantra_test_")
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "keymantra_test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

from keymantra.models.tables import Base
from keymantra.dictation.scheduler import ManualScheduler


# --- TestClient Fixture ---
@pytest.fixture(scope="session")
def client():
    """
    Creates the TestClient for the session. Entering it runs the app lifespan,
    which creates the tables in the test database.
    """
    from keymantra.main import app
    logger.info(f"Creating TestClient against {TEST_DB_PATH}.")
    with TestClient(app) as c:
        yield c
    shutil.rmtree(TEST_DB_DIR, ignore_errors=True)
    logger.info("Removed test database directory.")


# --- Table Reset Fixture ---
@pytest.fixture(autouse=True)
def reset_tables():
    yield
    if not os.path.exists(TEST_DB_PATH):
        return
    # A plain sqlite engine keeps the cleanup off the app's event loop.
    sync_engine = create_engine(f"sqlite:///{TEST_DB_PATH}")
    with sync_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    sync_engine.dispose()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def course(client: TestClient):
    """A course with three questions; the second has no answer."""
    response = client.post("/courses/", json={"name": "English Basics", "description": "Everyday phrases"})
    assert response.status_code == 201
    course = response.json()
    questions = [
        {"title": "Introduce yourself", "answer_content": "My name is apple"},
        {"title": "Blank card", "answer_content": None},
        {"title": "Greeting", "answer_content": "Hello, world!"},
    ]
    course["questions"] = []
    for question in questions:
        r = client.post(f"/courses/{course['id']}/questions", json=question)
        assert r.status_code == 201
        course["questions"].append(r.json())
    return course

import os
import tempfile

# Cheap password hashing and a throwaway data dir, before jobly reads settings.
os.environ.setdefault("JOBLY_PASSWORD_TIME_COST", "1")
os.environ.setdefault("JOBLY_PASSWORD_MEMORY_COST", "1024")
os.environ.setdefault("JOBLY_DATA_PATH", tempfile.mkdtemp(prefix="jobly-test-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker

from jobly.database import get_db, init_db
from jobly.main import app
from jobly.utils.security import hash_password


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _seed(session):
    session.execute(
        text(
            """
            INSERT INTO companies (handle, name, num_employees, description, logo_url)
            VALUES ('c1', 'C1', 1, 'Desc1', 'http://c1.img'),
                   ('c2', 'C2', 2, 'Desc2', 'http://c2.img'),
                   ('c3', 'C3', 3, 'Desc3', 'http://c3.img')
            """
        )
    )
    session.execute(
        text(
            """
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ('u1', :pw1, 'U1F', 'U1L', 'user1@user.com', 0),
                   ('a1', :pw2, 'A1F', 'A1L', 'admin1@user.com', 1)
            """
        ),
        {"pw1": hash_password("password1"), "pw2": hash_password("password2")},
    )
    session.execute(
        text(
            """
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ('Job1', 1, '0.1', 'c1'),
                   ('Job2', 2, '0.2', 'c1'),
                   ('Job3', 3, NULL, 'c2')
            """
        )
    )
    session.commit()


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "jobly.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)
    seed = TestSession()
    _seed(seed)
    seed.close()

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def job_ids(db):
    """Ids of Job1, Job2 and Job3, in that order."""
    return [r[0] for r in db.execute(text("SELECT id FROM jobs ORDER BY id"))]


@pytest.fixture
def client(test_db):
    return TestClient(app)


@pytest.fixture
def u1_token():
    return app.state.tokens.create_token("u1", False)


@pytest.fixture
def a1_token():
    return app.state.tokens.create_token("a1", True)

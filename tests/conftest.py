import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from video_api.config import Settings
from video_api.main import create_app


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_dir):
    return Settings(
        PGDB="videos",
        PGUSER="postgres",
        PGPASSWORD="secret",
        PGHOST="localhost",
        QUEUE_TOPIC="transcode",
        UPLOAD_FOLDER_PATH=str(upload_dir),
    )


@pytest.fixture
def engine():
    # one shared in-memory database for every pooled connection
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def client(settings, engine):
    app = create_app(settings, engine=engine)
    with TestClient(app) as client:
        yield client

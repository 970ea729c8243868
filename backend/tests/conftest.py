"""Pytest fixtures for Label Catalog tests."""
import os
import tempfile

# Settings are read at import time; keep test runs out of the working tree.
_scratch = tempfile.mkdtemp(prefix="label-catalog-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_scratch}/catalog.db")
os.environ.setdefault("ARTWORK_DIR", os.path.join(_scratch, "artwork"))
os.environ.setdefault("STATE_DIR", os.path.join(_scratch, "state"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from catalog.main import app
from catalog.bootstrap import MemoryFlagStore
from catalog.database import Base, get_db, enable_sqlite_foreign_keys
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import StandaloneTrackForm, TrackForm
from catalog.services.auth import AuthService
from catalog.services.catalog import CatalogService
from catalog.services.standalone import StandaloneTrackService

# In-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with the test database."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Bootstrap flag is per process; start every test without one
    app.state.bootstrap_flags = MemoryFlagStore()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db):
    """Create a test user."""
    auth = AuthService(db)
    return auth.create_user("testuser", "testpass")


@pytest.fixture
def admin_user(db):
    """Create an admin user."""
    auth = AuthService(db)
    return auth.create_user("adminuser", "adminpass", is_admin=True)


@pytest.fixture
def auth_headers(db, test_user):
    """Get authorization headers for test user."""
    auth = AuthService(db)
    token = auth.create_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(db, admin_user):
    """Get authorization headers for admin user."""
    auth = AuthService(db)
    token = auth.create_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}


def album_data(**overrides):
    """Valid album form input."""
    data = {
        "album_name": "Night Drive",
        "album_artist": "The Ferals",
        "catalog_number": "ANG-5",
        "album_type": "LP",
        "status": "Released",
        "visibility": "Public",
        "artwork_front": "https://cdn.example.com/night-drive/front.jpg",
        "release_date": "2024-03-01",
        "album_duration": "41:07",
        "producers": ["Ada Lane", {"name": "Kim Ro", "role": "co-producer"}],
        "streaming_links": {"spotify": "https://open.spotify.com/album/xyz", "tidal": ""},
    }
    data.update(overrides)
    return data


def track_data(**overrides):
    """Valid album track form input."""
    data = {
        "track_number": 1,
        "track_name": "Headlights",
        "duration": "3:45",
        "track_status": "RELEASED",
        "stage_of_production": "RELEASED",
        "visibility": "Public",
        "stream_embed": '<iframe src="https://player.example.com/1" onload="x()"></iframe>',
        "artists": ["The Ferals"],
    }
    data.update(overrides)
    return data


def standalone_data(**overrides):
    """Valid standalone track form input."""
    data = {
        "track_name": "Loose Thread",
        "album_artist": "The Ferals",
        "duration": "2:05",
        "visibility": "Public",
    }
    data.update(overrides)
    return data


@pytest.fixture
def catalog(db):
    """Catalog service bound to the test database."""
    return CatalogService(db)


@pytest.fixture
def standalone(db):
    """Standalone track service bound to the test database."""
    return StandaloneTrackService(db)


@pytest.fixture
def test_album(catalog):
    """A public, released album."""
    return catalog.create_album(AlbumForm.model_validate(album_data()))


@pytest.fixture
def test_track(catalog, test_album):
    """Track 1 of the test album."""
    return catalog.create_track(test_album.id, TrackForm.model_validate(track_data()))


@pytest.fixture
def test_standalone_track(standalone):
    """A public standalone track."""
    return standalone.create_standalone_track(StandaloneTrackForm.model_validate(standalone_data()))

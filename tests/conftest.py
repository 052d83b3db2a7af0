import base64
import itertools
from datetime import datetime, timedelta, timezone
from io import BytesIO

import pytest
from PIL import Image

from pinboard import create_app
from pinboard.extensions import db
from pinboard.models import Follow, Pin, User

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)
PASSWORD = "secret123"


def _build_app(tmp_path, **overrides):
    cfg = {
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "WTF_CSRF_ENABLED": False,
        "UPLOAD_ROOT": str(tmp_path / "uploads"),
    }
    cfg.update(overrides)
    return create_app(cfg)


@pytest.fixture
def app(tmp_path):
    app = _build_app(tmp_path)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_app(tmp_path):
    """Build an app with extra config (e.g. CSRF switched on)."""
    def _make(**overrides):
        return _build_app(tmp_path, **overrides)
    return _make


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def client_as(app):
    """A test client whose session is logged in as ``user_id``."""
    def _client(user_id):
        c = app.test_client()
        with c.session_transaction() as sess:
            sess["_user_id"] = str(user_id)
            sess["_fresh"] = True
        return c
    return _client


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make(name=None, visibility="public", search=True, email=None, username=None, bio=None):
        n = next(counter)
        with app.app_context():
            u = User(
                email=email or f"user{n}@example.com",
                name=name or f"User {n}",
                username=username or f"user{n}",
                bio=bio,
                profile_visibility=visibility,
                search_visibility=search,
            )
            u.set_password(PASSWORD)
            db.session.add(u)
            db.session.commit()
            return u.id
    return _make


@pytest.fixture
def make_pin(app):
    """Pins get strictly increasing created_at so 'newest first' is deterministic."""
    counter = itertools.count(1)

    def _make(owner_id, title=None, description=None, tags=(), image_url=None):
        n = next(counter)
        with app.app_context():
            p = Pin(
                creator_id=owner_id,
                title=title or f"Pin {n}",
                description=description,
                image_url=image_url or f"https://img.example.com/{n}.jpg",
                created_at=BASE_TIME + timedelta(minutes=n),
            )
            p.set_tags(list(tags))
            db.session.add(p)
            db.session.commit()
            return p.id
    return _make


@pytest.fixture
def add_edge(app):
    """add_edge(Like|Save, user_id, pin_id) or add_edge(Follow, follower_id, following_id)."""
    def _add(model, a, b):
        with app.app_context():
            if model is Follow:
                edge = Follow(follower_id=a, following_id=b)
            else:
                edge = model(user_id=a, pin_id=b)
            db.session.add(edge)
            db.session.commit()
    return _add


@pytest.fixture
def count_rows(app):
    def _count(model, **filters):
        with app.app_context():
            return model.query.filter_by(**filters).count()
    return _count


def png_bytes(width=40, height=30, color=(200, 30, 30)):
    buf = BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def png_data_url(width=40, height=30):
    return "data:image/png;base64," + base64.b64encode(png_bytes(width, height)).decode()

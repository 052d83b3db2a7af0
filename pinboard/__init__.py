# pinboard/__init__.py
import os
from pathlib import Path

from flask import Flask
from sqlalchemy import inspect

from .extensions import db, init_extensions
from .errors import register_error_handlers


def _ensure_all_tables(app):
    """Dev-only SQLite safety net: make sure base tables exist once."""
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not uri.startswith("sqlite:"):
        return
    with app.app_context():
        from pinboard import models  # noqa: F401
        insp = inspect(db.engine)
        existing = set(insp.get_table_names())
        if not existing:
            app.logger.info("Dev create_all (fresh SQLite DB)")
            db.create_all()


def create_app(config=None):
    app = Flask(__name__)

    # ---------- Base Config ----------
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-only")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///pinboard.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    if config:
        app.config.update(config)

    # Ensure instance folder exists
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    # Blob store
    uploads_dir = os.getenv("UPLOADS_DIR") or os.path.join(app.instance_path, "uploads")
    app.config.setdefault("UPLOAD_ROOT", uploads_dir)
    app.config.setdefault("UPLOAD_URL_PREFIX", "/u")
    app.config.setdefault("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
    app.config.setdefault("MAX_IMAGE_MB", 10)
    app.config.setdefault("IMAGE_MAX_WIDTH", 1080)
    Path(app.config["UPLOAD_ROOT"]).mkdir(parents=True, exist_ok=True)

    # Paging
    app.config.setdefault("PINS_PAGE_LIMIT", 50)
    app.config.setdefault("USERS_SEARCH_LIMIT", 20)
    app.config.setdefault("MAX_PAGE_LIMIT", 100)

    # ---------- Extensions ----------
    init_extensions(app)
    register_error_handlers(app)

    # ---------- Blueprints ----------
    from .auth import bp as auth_bp
    app.register_blueprint(auth_bp)

    from .pins import bp as pins_bp
    app.register_blueprint(pins_bp)

    from .users import bp as users_bp
    app.register_blueprint(users_bp)

    from .account import bp as account_bp
    app.register_blueprint(account_bp)

    # Import the module FIRST so all @bp.* decorators execute before registration.
    import pinboard.uploader.api as _uploader_api  # noqa: F401
    from .uploader import bp as uploads_public_bp
    app.register_blueprint(uploads_public_bp)

    # ---------- CLI ----------
    from .cli import seed
    app.cli.add_command(seed)

    _ensure_all_tables(app)
    return app

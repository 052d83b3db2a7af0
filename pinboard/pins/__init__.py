from flask import Blueprint

bp = Blueprint(
    "pins_api",
    __name__,
    url_prefix="/api/pins",
)

from pinboard.pins import routes  # noqa: E402,F401

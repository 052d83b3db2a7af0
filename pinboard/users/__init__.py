from flask import Blueprint

bp = Blueprint(
    "users_api",
    __name__,
    url_prefix="/api/users",
)

from pinboard.users import routes  # noqa: E402,F401

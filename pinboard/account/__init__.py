from flask import Blueprint

# The signed-in user's own account (settings, avatar, deletion)
bp = Blueprint(
    "account_api",
    __name__,
    url_prefix="/api/user",
)

from pinboard.account import routes  # noqa: E402,F401

# pinboard/uploader/__init__.py
from flask import Blueprint

# Public file serving for the URLs the blob store issues.
bp = Blueprint(
    "uploads_public",
    __name__,
    url_prefix="/u",
)

# Do NOT import .api here (avoids circulars). The app factory imports pinboard.uploader.api before registering bp.

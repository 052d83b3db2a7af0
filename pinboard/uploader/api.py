# pinboard/uploader/api.py
from pathlib import Path

from flask import send_from_directory

from pinboard.errors import NotFound
from . import bp
from .storage import get_upload_root


@bp.route("/<path:relpath>")
def serve_upload(relpath: str):
    root = get_upload_root().resolve()
    # prevent path traversal
    try:
        abs_path = (root / Path(relpath)).resolve()
    except (OSError, RuntimeError):
        raise NotFound()
    if root not in abs_path.parents or not abs_path.is_file():
        raise NotFound()
    return send_from_directory(abs_path.parent.as_posix(), abs_path.name, conditional=True)

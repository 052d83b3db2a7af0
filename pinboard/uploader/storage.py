# pinboard/uploader/storage.py
"""
Local-disk blob store for images.

Blobs are written under ``UPLOAD_ROOT/<folder>/<YYYY>/<MM>/<DD>/`` with a
random name and served back from ``UPLOAD_URL_PREFIX``. The public URL is
the blob's identifier: ``delete_blob`` takes the same URL ``store_*``
returned.
"""
import base64
import binascii
import logging
import re
import uuid
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional

import filetype
from flask import current_app
from PIL import Image

from pinboard.errors import ValidationError

log = logging.getLogger(__name__)

ALLOWED_TYPES = {"jpg", "png", "gif", "webp"}

_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>.+)$", re.DOTALL)


def _cfg(key: str, default=None):
    return current_app.config.get(key, default)


def get_upload_root() -> Path:
    """
    Disk root where blobs are stored.
    Defaults to '<instance>/uploads'; override with app.config['UPLOAD_ROOT'].
    """
    root = _cfg("UPLOAD_ROOT")
    p = Path(root) if root else Path(current_app.instance_path) / "uploads"
    p.mkdir(parents=True, exist_ok=True)
    return p


def get_public_base() -> str:
    return _cfg("UPLOAD_URL_PREFIX", "/u")


def date_slug() -> str:
    return datetime.utcnow().strftime("%Y/%m/%d")


def is_data_url(value: str) -> bool:
    return bool(value) and value.startswith("data:image")


def _limit_width(abs_path: Path, max_width: int) -> None:
    """Shrink wide images in place, keeping the aspect ratio."""
    try:
        with Image.open(abs_path) as im:
            if im.width <= max_width or getattr(im, "is_animated", False):
                return
            fmt = im.format
            height = max(1, round(im.height * max_width / im.width))
            resized = im.resize((max_width, height))
        resized.save(abs_path, format=fmt)
    except OSError:
        log.warning("could not resize %s; keeping original", abs_path)


def store_image(payload: bytes, folder: str = "pins") -> str:
    """Validate and persist raw image bytes; return the public URL."""
    if not payload:
        raise ValidationError("Image is required")

    max_mb = int(_cfg("MAX_IMAGE_MB", 10))
    if len(payload) > max_mb * 1024 * 1024:
        raise ValidationError(f"File too large (>{max_mb}MB)")

    kind = filetype.guess(payload)
    if not kind or not kind.mime.startswith("image/"):
        raise ValidationError("Unsupported or invalid image file")
    ext = (kind.extension or "").lower()
    if ext == "jpeg":
        ext = "jpg"
    if ext not in ALLOWED_TYPES:
        raise ValidationError("Unsupported image type")

    rel_dir = Path(folder) / date_slug()
    abs_dir = get_upload_root() / rel_dir
    abs_dir.mkdir(parents=True, exist_ok=True)

    abs_path = abs_dir / f"{uuid.uuid4().hex}.{ext}"
    abs_path.write_bytes(payload)
    _limit_width(abs_path, int(_cfg("IMAGE_MAX_WIDTH", 1080)))

    return f"{get_public_base().rstrip('/')}/{rel_dir.as_posix()}/{abs_path.name}"


def store_data_url(data_url: str, folder: str = "pins") -> str:
    m = _DATA_URL_RE.match(data_url or "")
    if not m:
        raise ValidationError("Invalid image data")
    try:
        payload = base64.b64decode(m.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid image data")
    return store_image(payload, folder=folder)


def store_upload(file_storage, folder: str = "avatars") -> str:
    """Persist a Werkzeug FileStorage (multipart upload)."""
    buf = BytesIO()
    file_storage.save(buf)
    return store_image(buf.getvalue(), folder=folder)


def _path_for(url: str) -> Optional[Path]:
    base = get_public_base().rstrip("/") + "/"
    if not url or not url.startswith(base):
        return None
    root = get_upload_root().resolve()
    path = (root / url[len(base):]).resolve()
    if root not in path.parents:
        return None
    return path


def delete_blob(url: str) -> bool:
    """
    Remove a blob we issued. URLs we did not issue (external images) are
    left alone and reported as False.
    """
    path = _path_for(url)
    if path is None or not path.exists():
        return False
    path.unlink()
    return True

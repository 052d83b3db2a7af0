# pinboard/account/routes/delete.py
import logging

from flask import jsonify
from flask_login import login_required, current_user, logout_user

from pinboard.account import bp
from pinboard.extensions import db
from pinboard.models import Pin
from pinboard.uploader.storage import delete_blob

log = logging.getLogger(__name__)


def _purge_blob(url: str | None) -> None:
    if not url:
        return
    try:
        delete_blob(url)
    except OSError as e:
        log.warning("Failed to delete blob %s: %s", url, e)


@bp.delete("/delete")
@login_required
def delete_account():
    """Drop the account; pins, likes, saves and follows go with it."""
    user = current_user._get_current_object()

    user_id = user.id
    blobs = [user.image]
    blobs += [url for (url,) in db.session.query(Pin.image_url).filter_by(creator_id=user_id)]

    db.session.delete(user)
    db.session.commit()
    logout_user()

    # files go only once the rows are gone
    for url in blobs:
        _purge_blob(url)

    log.info("account %s deleted", user_id)
    return jsonify({"message": "Account deleted successfully"})

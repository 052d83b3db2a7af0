# pinboard/models.py
from datetime import datetime, timezone

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from .extensions import db


PROFILE_VISIBILITIES = ("public", "private")

NOTIFICATION_FIELDS = (
    "email_notifications",
    "push_notifications",
    "like_notifications",
    "comment_notifications",
    "follow_notifications",
)


def _utcnow():
    return datetime.now(timezone.utc)


# -------------------------
# Users
# -------------------------
class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    # Identity
    email         = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255))

    # Profile
    name     = db.Column(db.String(120))
    username = db.Column(db.String(80), unique=True, index=True)  # NULL allowed, many times
    bio      = db.Column(db.Text)
    image    = db.Column(db.String(500))

    # Privacy: 'public' | 'private'
    profile_visibility  = db.Column(db.String(16), nullable=False, default="public")
    search_visibility   = db.Column(db.Boolean, nullable=False, default=True)
    activity_visibility = db.Column(db.Boolean, nullable=False, default=True)

    # Notification preferences
    email_notifications   = db.Column(db.Boolean, nullable=False, default=True)
    push_notifications    = db.Column(db.Boolean, nullable=False, default=True)
    like_notifications    = db.Column(db.Boolean, nullable=False, default=True)
    comment_notifications = db.Column(db.Boolean, nullable=False, default=True)
    follow_notifications  = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    # relationships (ORM cascade covers SQLite, where FK enforcement is off)
    pins = db.relationship(
        "Pin",
        back_populates="creator",
        cascade="all, delete-orphan",
    )
    likes = db.relationship(
        "Like",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    saves = db.relationship(
        "Save",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    following = db.relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        back_populates="follower",
        cascade="all, delete-orphan",
    )
    followers = db.relationship(
        "Follow",
        foreign_keys="Follow.following_id",
        back_populates="following_user",
        cascade="all, delete-orphan",
    )

    @classmethod
    def unique_username(cls, email):
        """Email prefix, with a numeric suffix when the prefix is taken."""
        base = email.split("@", 1)[0] or "user"
        candidate, n = base, 1
        while db.session.query(cls.id).filter(cls.username == candidate).first():
            n += 1
            candidate = f"{base}{n}"
        return candidate

    def set_password(self, raw_password):
        """Hash and store a password."""
        self.password_hash = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        """Verify a password against the stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, raw_password)

    @property
    def is_private(self) -> bool:
        return self.profile_visibility == "private"

    def __repr__(self) -> str:
        return f"<User {self.email}>"


# -------------------------
# Pins
# -------------------------
class Pin(db.Model):
    __tablename__ = "pins"

    id = db.Column(db.Integer, primary_key=True)

    creator_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title       = db.Column(db.String(240), nullable=False)
    description = db.Column(db.Text)
    image_url   = db.Column(db.String(500), nullable=False)
    link        = db.Column(db.String(500))

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    creator = db.relationship("User", back_populates="pins", foreign_keys=[creator_id])

    tag_rows = db.relationship(
        "PinTag",
        back_populates="pin",
        cascade="all, delete-orphan",
        order_by="PinTag.id",
    )
    likes = db.relationship(
        "Like",
        back_populates="pin",
        cascade="all, delete-orphan",
    )
    saves = db.relationship(
        "Save",
        back_populates="pin",
        cascade="all, delete-orphan",
    )

    @property
    def tags(self):
        return [t.name for t in self.tag_rows]

    def set_tags(self, names) -> None:
        """Replace the tag set; blanks and duplicates are dropped, order kept."""
        seen = []
        for raw in (names or []):
            if not isinstance(raw, str):
                continue
            name = raw.strip()
            if name and name not in seen:
                seen.append(name)
        existing = {t.name: t for t in self.tag_rows}
        self.tag_rows = [existing.get(n) or PinTag(name=n) for n in seen]

    def __repr__(self) -> str:
        return f"<Pin {self.id} {self.title!r}>"


class PinTag(db.Model):
    __tablename__ = "pin_tags"
    __table_args__ = (
        db.UniqueConstraint("pin_id", "name", name="uq_pin_tags_pin_name"),
    )

    id     = db.Column(db.Integer, primary_key=True)
    pin_id = db.Column(
        db.Integer,
        db.ForeignKey("pins.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(64), nullable=False, index=True)

    pin = db.relationship("Pin", back_populates="tag_rows", foreign_keys=[pin_id])


# -------------------------
# Edges (existence-only)
# -------------------------
class Like(db.Model):
    __tablename__ = "likes"
    __table_args__ = (
        db.UniqueConstraint("user_id", "pin_id", name="uq_likes_user_pin"),
    )

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pin_id  = db.Column(db.Integer, db.ForeignKey("pins.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    user = db.relationship("User", back_populates="likes", foreign_keys=[user_id])
    pin  = db.relationship("Pin", back_populates="likes", foreign_keys=[pin_id])


class Save(db.Model):
    __tablename__ = "saves"
    __table_args__ = (
        db.UniqueConstraint("user_id", "pin_id", name="uq_saves_user_pin"),
    )

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pin_id  = db.Column(db.Integer, db.ForeignKey("pins.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    user = db.relationship("User", back_populates="saves", foreign_keys=[user_id])
    pin  = db.relationship("Pin", back_populates="saves", foreign_keys=[pin_id])


class Follow(db.Model):
    __tablename__ = "follows"
    __table_args__ = (
        db.UniqueConstraint("follower_id", "following_id", name="uq_follows_follower_following"),
        db.CheckConstraint("follower_id <> following_id", name="no_self_follow"),
    )

    id           = db.Column(db.Integer, primary_key=True)
    follower_id  = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    following_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at   = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    follower = db.relationship(
        "User",
        back_populates="following",
        foreign_keys=[follower_id],
    )
    following_user = db.relationship(
        "User",
        back_populates="followers",
        foreign_keys=[following_id],
    )

    def __repr__(self) -> str:
        return f"<Follow {self.follower_id} -> {self.following_id}>"

# -*- coding: utf-8 -*-
import click
from flask.cli import with_appcontext
from sqlalchemy import func

from pinboard.extensions import db
from pinboard.models import Follow, Pin, User

DEMO_PASSWORD = "demo-password"

DEMO_USERS = [
    # email, name, visibility
    ("ana@pinboard.local",   "Ana Demo",   "public"),
    ("boris@pinboard.local", "Boris Demo", "private"),
]

DEMO_PINS = [
    # owner email, title, tags
    ("ana@pinboard.local",   "Sunset over the lake", ["nature", "sunset"]),
    ("ana@pinboard.local",   "Sourdough starter",    ["food"]),
    ("ana@pinboard.local",   "Tiny house interior",  ["home", "design"]),
    ("boris@pinboard.local", "Trail map sketch",     ["nature"]),
    ("boris@pinboard.local", "Workbench layout",     ["diy"]),
]

DEMO_IMAGE = "https://picsum.photos/seed/{seed}/600/800"


@click.group()
def seed():
    """Data seeding commands."""
    pass


@seed.command("demo")
@with_appcontext
def seed_demo():
    """
    Create demo users and pins. Safe to run repeatedly: existing users
    and pins (matched by email / owner+title) are left alone.
    """
    created = []

    with db.session.no_autoflush:
        users = {}
        for email, name, visibility in DEMO_USERS:
            u = User.query.filter(func.lower(User.email) == email).first()
            if not u:
                u = User(
                    email=email,
                    name=name,
                    username=User.unique_username(email),
                    profile_visibility=visibility,
                )
                u.set_password(DEMO_PASSWORD)
                db.session.add(u)
                created.append(email)
            users[email] = u

    db.session.flush()  # ensure IDs present for pins/follows

    for i, (email, title, tags) in enumerate(DEMO_PINS):
        owner = users[email]
        if Pin.query.filter_by(creator_id=owner.id, title=title).first():
            continue
        p = Pin(title=title, image_url=DEMO_IMAGE.format(seed=i), creator_id=owner.id)
        p.set_tags(tags)
        db.session.add(p)
        created.append(title)

    # Ana follows Boris so his private board is visible to her
    ana, boris = users["ana@pinboard.local"], users["boris@pinboard.local"]
    if not Follow.query.filter_by(follower_id=ana.id, following_id=boris.id).first():
        db.session.add(Follow(follower_id=ana.id, following_id=boris.id))

    db.session.commit()
    if created:
        click.echo("Created: " + ", ".join(created))
    click.echo(f"Demo data ensured. Password for demo users: {DEMO_PASSWORD}")

#!/usr/bin/env python3
"""Report table presence and place/creator link consistency for DATABASE_URL"""

import sys

from sqlalchemy import inspect
from sqlmodel import Session, select

from places_api.database import engine
from places_api.models.place import Place
from places_api.models.user import User

REQUIRED_TABLES = ["user", "place"]


def missing_tables():
    existing = inspect(engine).get_table_names()
    return [t for t in REQUIRED_TABLES if t not in existing]


def find_link_problems(session: Session):
    """
    Compare Place.creator with User.places.

    Returns a list of human readable problems; empty means both sides agree.
    """
    problems = []
    users = {u.id: u for u in session.exec(select(User)).all()}
    places = session.exec(select(Place)).all()
    place_ids = {p.id for p in places}

    for place in places:
        owner = users.get(place.creator)
        if owner is None:
            problems.append(f"place {place.id} has missing creator {place.creator}")
        elif owner.places.count(place.id) != 1:
            problems.append(f"place {place.id} listed {owner.places.count(place.id)}x by creator {owner.id}")

    for user in users.values():
        for pid in user.places:
            if pid not in place_ids:
                problems.append(f"user {user.id} lists missing place {pid}")
    return problems


if __name__ == "__main__":
    print(f"Database: {engine.url}")
    missing = missing_tables()
    if missing:
        print(f"✗ Missing tables: {', '.join(missing)}")
        print("Run migrations with: alembic upgrade head")
        sys.exit(1)
    print("✓ All required tables exist")

    with Session(engine) as session:
        problems = find_link_problems(session)

    for problem in problems:
        print(f"✗ {problem}")
    if not problems:
        print("✓ Place/creator links are consistent")
    sys.exit(1 if problems else 0)

#!/usr/bin/env python3
"""Seed demo data for local development.

Creates a demo account with a handful of rooms spread over the price range,
enough to page through the room search.

Usage:
    # From project root, against the database in DATABASE_URL / .env:
    python scripts/seed_demo_data.py

    # Or with an explicit database:
    DATABASE_URL=sqlite:///./roombnb.db python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from roombnb.database import SessionLocal, init_db
from roombnb.models import Account, Room
from roombnb.services.accounts import AccountRepository
from roombnb.services.rooms import RoomRepository

# Demo account credentials
DEMO_EMAIL = "demo@example.com"
DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demopass123"

DEMO_ROOMS = [
    ("Studio near Canal Saint-Martin", 65, (48.8718, 2.3659)),
    ("Bright loft in the Marais", 140, (48.8589, 2.3622)),
    ("Quiet room with garden view", 48, (48.8322, 2.3561)),
    ("Family apartment by the Eiffel Tower", 210, (48.8556, 2.2986)),
    ("Attic room in Montmartre", 72, (48.8867, 2.3431)),
    ("Houseboat on the Seine", 185, (48.8610, 2.3005)),
    ("Cosy studio in Belleville", 55, (48.8722, 2.3767)),
    ("Designer flat near Opera", 250, (48.8719, 2.3316)),
    ("Room in shared flat, Bastille", 39, (48.8533, 2.3692)),
    ("Penthouse with terrace", 320, (48.8462, 2.3371)),
    ("Artist studio in Oberkampf", 90, (48.8649, 2.3800)),
    ("Two-bedroom by Parc Monceau", 175, (48.8796, 2.3091)),
]


def seed_demo_data():
    """Seed the database with a demo account and its rooms."""
    init_db()
    session = SessionLocal()

    try:
        accounts = AccountRepository(session)
        rooms = RoomRepository(session)

        existing = accounts.find_by_email(DEMO_EMAIL)
        if existing:
            print("Demo data already exists. Clearing and re-seeding...")
            session.query(Room).filter(Room.user_id == existing.id).delete()
            session.query(Account).filter(Account.id == existing.id).delete()
            session.commit()

        print("Creating demo account...")
        owner = accounts.create(
            email=DEMO_EMAIL,
            username=DEMO_USERNAME,
            password=DEMO_PASSWORD,
            name="Demo Host",
            description="Hosting travellers in Paris since 2015.",
        )

        print(f"Creating {len(DEMO_ROOMS)} rooms...")
        for title, price, (lat, lng) in DEMO_ROOMS:
            room = rooms.create(
                owner=owner,
                title=title,
                description=f"{title}. Fresh linen, fast wifi and a coffee machine.",
                price=price,
                location={"lat": lat, "lng": lng},
            )
            accounts.append_room(owner, room.id)

        session.commit()
        print("Demo data seeded successfully!")
        print(f"Bearer token for {DEMO_EMAIL}: {owner.token}")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()

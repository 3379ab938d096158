"""Seed the datastore with the pension's rooms and the site's display content.

Usage: python seed.py
Safe to re-run: existing rows (matched by room number / title) are left alone.
"""
import logging

from app.db import SessionLocal, init_db
from app.models import Room, ContactInfo, SocialLink, RoomReview

logger = logging.getLogger("seed")

FLOORS = (3, 4, 5)
ROOMS_PER_FLOOR = 8
ROOM_TYPE = "Single"
PRICE_PER_NIGHT = 600
AMENITIES = ["Free Wi-Fi", "Private bathroom", "Flat-screen TV", "Hot water", "Work desk"]

CONTACT_INFO = [
    {"icon": "map-pin", "title": "Address", "details": ["Hosanna, Ethiopia"], "sort_order": 1},
    {"icon": "phone", "title": "Phone", "details": ["+251 11 123 4567"], "sort_order": 2},
    {"icon": "mail", "title": "Email", "details": ["info@tkpension.com"], "sort_order": 3},
    {"icon": "clock", "title": "Reception", "details": ["Open 24 hours"], "sort_order": 4},
]

SOCIAL_LINKS = [
    {"icon": "facebook", "href": "https://facebook.com/tkpension", "label": "Facebook"},
    {"icon": "instagram", "href": "https://instagram.com/tkpension", "label": "Instagram"},
    {"icon": "telegram", "href": "https://t.me/tkpension", "label": "Telegram"},
]


def seed_rooms(db) -> int:
    existing = {r.room_number for r in db.query(Room).all()}
    added = 0
    for floor in FLOORS:
        for i in range(1, ROOMS_PER_FLOOR + 1):
            number = f"{floor}{i:02d}"
            if number in existing:
                continue
            db.add(Room(
                room_number=number,
                floor=floor,
                room_type=ROOM_TYPE,
                capacity=1,
                price_per_night=PRICE_PER_NIGHT,
                size_sqm=18,
                amenities=AMENITIES,
                is_available=True,
                description=f"A quiet single room on floor {floor} with everything you need for a restful stay.",
            ))
            added += 1
    return added


def seed_display_content(db) -> None:
    titles = {c.title for c in db.query(ContactInfo).all()}
    for row in CONTACT_INFO:
        if row["title"] not in titles:
            db.add(ContactInfo(**row))
    labels = {s.label for s in db.query(SocialLink).all()}
    for row in SOCIAL_LINKS:
        if row["label"] not in labels:
            db.add(SocialLink(**row))
    if not db.query(RoomReview).first():
        db.add(RoomReview(guest_name="Selam T.", rating=5, review_text="Clean rooms and very friendly staff.", is_featured=True))


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    init_db()
    db = SessionLocal()
    try:
        added = seed_rooms(db)
        seed_display_content(db)
        db.commit()
        logger.info("Seeded %d rooms across floors %s.", added, ", ".join(map(str, FLOORS)))
    finally:
        db.close()


if __name__ == "__main__":
    main()

"""Read-only queries behind the room listings, floor pages and gallery."""
from sqlalchemy.orm import Session

from ..exceptions import NotEnoughRoomsError
from ..models import Room, RoomMedia, RoomReview, ContactInfo, SocialLink, ServiceGalleryItem


def list_rooms(
    db: Session,
    available: bool | None = None,
    floor: int | None = None,
    room_type: str | None = None,
    order: str = "floor",
) -> list[Room]:
    q = db.query(Room)
    if available is not None:
        q = q.filter(Room.is_available == available)
    if floor is not None:
        q = q.filter(Room.floor == floor)
    if room_type:
        q = q.filter(Room.room_type == room_type)
    if order == "room_number":
        q = q.order_by(Room.room_number.asc())
    else:
        q = q.order_by(Room.floor.asc(), Room.room_number.asc())
    return q.all()


def get_room(db: Session, room_id: int) -> Room | None:
    return db.get(Room, room_id)


def get_rooms(db: Session, room_ids: list[int]) -> list[Room]:
    """Rooms for the given ids, in the order requested; unknown ids are dropped."""
    if not room_ids:
        return []
    found = {r.id: r for r in db.query(Room).filter(Room.id.in_(room_ids)).all()}
    return [found[rid] for rid in room_ids if rid in found]


def pick_available_rooms(db: Session, count: int) -> list[Room]:
    """First `count` rooms flagged available, for the hero search."""
    count = max(int(count or 1), 1)
    rooms = (
        db.query(Room)
        .filter(Room.is_available == True)
        .order_by(Room.floor.asc(), Room.room_number.asc())
        .limit(count)
        .all()
    )
    if len(rooms) < count:
        raise NotEnoughRoomsError()
    return rooms


def floor_summary(db: Session) -> list[dict]:
    """Per floor: room count, available count and the rooms themselves."""
    floors: dict[int, dict] = {}
    for room in list_rooms(db):
        entry = floors.setdefault(room.floor, {"floor": room.floor, "total": 0, "available": 0, "rooms": []})
        entry["total"] += 1
        entry["available"] += 1 if room.is_available else 0
        entry["rooms"].append(room)
    return list(floors.values())


def list_room_media(db: Session, room_ids: list[int] | None = None, media_type: str | None = None) -> list[RoomMedia]:
    q = db.query(RoomMedia)
    if room_ids is not None:
        if not room_ids:
            return []
        q = q.filter(RoomMedia.room_id.in_(room_ids))
    if media_type and media_type != "all":
        q = q.filter(RoomMedia.media_type == media_type)
    return q.order_by(RoomMedia.is_primary.desc(), RoomMedia.id.asc()).all()


def list_featured_reviews(db: Session, room_ids: list[int] | None = None, limit: int | None = None) -> list[RoomReview]:
    q = db.query(RoomReview).filter(RoomReview.is_featured == True)
    if room_ids is not None:
        if not room_ids:
            return []
        q = q.filter(RoomReview.room_id.in_(room_ids))
    q = q.order_by(RoomReview.created_at.desc(), RoomReview.id.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def list_contact_info(db: Session) -> list[ContactInfo]:
    return db.query(ContactInfo).order_by(ContactInfo.sort_order.asc(), ContactInfo.id.asc()).all()


def list_social_links(db: Session) -> list[SocialLink]:
    return db.query(SocialLink).order_by(SocialLink.id.asc()).all()


def list_services_gallery(db: Session, media_type: str | None = None) -> list[ServiceGalleryItem]:
    q = db.query(ServiceGalleryItem)
    if media_type and media_type != "all":
        q = q.filter(ServiceGalleryItem.media_type == media_type)
    return q.order_by(ServiceGalleryItem.created_at.desc(), ServiceGalleryItem.id.desc()).all()


def phone_href(contact_info: list[ContactInfo], default: str = "+251111234567") -> str:
    """tel: link built from the first number of the 'Phone' contact entry."""
    number = default
    for info in contact_info:
        if info.title == "Phone" and info.details:
            number = info.details[0]
            break
    return "tel:" + "".join(ch for ch in number if ch.isdigit() or ch == "+")

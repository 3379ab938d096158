from datetime import date
from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from ..db import get_db
from ..services import catalog
from ..templating import templates

router = APIRouter(tags=["public"])

MEDIA_TYPES = ("all", "image", "video")


def _media_type(value: str | None) -> str:
    return value if value in MEDIA_TYPES else "all"


@router.get("/", response_class=HTMLResponse)
def landing(request: Request, media: str | None = None, services: str | None = None, db: Session = Depends(get_db)):
    rooms = catalog.list_rooms(db)
    rooms_map = {r.id: r for r in rooms}
    contact_info = catalog.list_contact_info(db)
    ctx = {
        "request": request,
        "floors": catalog.floor_summary(db),
        "available_count": sum(1 for r in rooms if r.is_available),
        "room_count": len(rooms),
        "rooms_map": rooms_map,
        "media_filter": _media_type(media),
        "services_filter": _media_type(services),
        "room_media": catalog.list_room_media(db, media_type=_media_type(media)),
        "services": catalog.list_services_gallery(db, media_type=_media_type(services)),
        "reviews": catalog.list_featured_reviews(db, limit=6),
        "contact_info": contact_info,
        "phone_href": catalog.phone_href(contact_info),
        "social_links": catalog.list_social_links(db),
        "today_str": date.today().isoformat(),
    }
    return templates.TemplateResponse("index.html", ctx)


@router.get("/floor/{floor}", response_class=HTMLResponse)
def floor_details(request: Request, floor: int, db: Session = Depends(get_db)):
    rooms = catalog.list_rooms(db, floor=floor, order="room_number")
    if not rooms:
        return templates.TemplateResponse(
            "floor.html",
            {"request": request, "floor": floor, "rooms": [], "media_by_room": {}, "reviews": [], "available_rooms": []},
            status_code=404,
        )
    room_ids = [r.id for r in rooms]
    media_by_room: dict[int, list] = {}
    for m in catalog.list_room_media(db, room_ids=room_ids):
        media_by_room.setdefault(m.room_id, []).append(m)
    ctx = {
        "request": request,
        "floor": floor,
        "rooms": rooms,
        "available_rooms": [r for r in rooms if r.is_available],
        "media_by_room": media_by_room,
        "reviews": catalog.list_featured_reviews(db, room_ids=room_ids),
        "today_str": date.today().isoformat(),
    }
    return templates.TemplateResponse("floor.html", ctx)

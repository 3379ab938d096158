import asyncio

from app.config import settings
from app.models import Booking, ContactInfo, ContactMessage, Payment, PaymentMethod
from app.routers.bookings_views import screenshot_from_upload

from conftest import PNG_BYTES


def _form(room_ids, stay, **overrides):
    check_in, check_out = stay
    data = {
        "room_ids": [str(i) for i in room_ids],
        "first_name": "Abebe",
        "last_name": "Kebede",
        "email": "abebe@example.com",
        "phone": "+251911234567",
        "check_in": check_in.isoformat(),
        "check_out": check_out.isoformat(),
        "guests": "1",
        "payment_method": PaymentMethod.CHAPA.value,
    }
    data.update(overrides)
    return data


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_landing_lists_floors(client, db, rooms):
    db.add(ContactInfo(title="Phone", details=["+251 46 555 1234"], sort_order=1))
    db.commit()
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Floor 3" in resp.text and "Floor 4" in resp.text
    assert "600.00 Br" in resp.text
    assert "tel:+251465551234" in resp.text


def test_floor_page(client, rooms):
    resp = client.get("/floor/3")
    assert resp.status_code == 200
    assert "Room 301" in resp.text and "Room 302" in resp.text
    assert "Room 401" not in resp.text


def test_unknown_floor_is_404(client, rooms):
    resp = client.get("/floor/9")
    assert resp.status_code == 404
    assert "Floor not found" in resp.text


def test_booking_form_for_room(client, rooms, stay):
    resp = client.get(
        "/book", params={"room_id": rooms[0].id, "check_in": stay[0].isoformat(), "check_out": stay[1].isoformat()}
    )
    assert resp.status_code == 200
    assert "Room 301" in resp.text
    assert "1,380.00 Br" in resp.text


def test_booking_form_unknown_room(client, rooms):
    assert client.get("/book", params={"room_id": 9999}).status_code == 404


def test_booking_form_not_enough_rooms(client, rooms):
    resp = client.get("/book", params={"rooms": 5})
    assert resp.status_code == 409
    assert "Not enough rooms available" in resp.text


def test_quote_partial(client, rooms, stay):
    resp = client.get(
        "/book/quote",
        params={"room_ids": [rooms[0].id, rooms[1].id], "check_in": stay[0].isoformat(), "check_out": stay[1].isoformat()},
    )
    assert resp.status_code == 200
    assert "2,760.00 Br" in resp.text


def test_quote_partial_without_dates_is_unavailable(client, rooms):
    resp = client.get("/book/quote", params={"room_ids": [rooms[0].id]})
    assert "unavailable" in resp.text


def test_submit_gateway_booking(client, db, rooms, stay):
    resp = client.post("/book", data=_form([rooms[0].id, rooms[2].id], stay))
    assert resp.status_code == 200
    assert "Booking Created" in resp.text
    assert "Payment integration will be available soon." in resp.text
    db.expire_all()
    assert db.query(Booking).count() == 2
    assert db.query(Payment).count() == 2


def test_submit_bank_transfer_with_screenshot(client, db, rooms, stay, upload_dir):
    resp = client.post(
        "/book",
        data=_form([rooms[0].id], stay, payment_method="bank_transfer", transaction_reference="FT2430012345"),
        files={"screenshot": ("receipt.png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 200
    assert "We will verify your payment soon." in resp.text
    db.expire_all()
    booking = db.query(Booking).one()
    assert booking.screenshot_url.startswith("/static/uploads/")
    assert len(list(upload_dir.iterdir())) == 1


def test_submit_bank_transfer_without_screenshot_rerenders_form(client, db, rooms, stay):
    resp = client.post(
        "/book", data=_form([rooms[0].id], stay, payment_method="bank_transfer", transaction_reference="FT1")
    )
    assert resp.status_code == 400
    assert "Please provide transaction ID and screenshot." in resp.text
    assert 'value="Abebe"' in resp.text
    db.expire_all()
    assert db.query(Booking).count() == 0


def test_submit_over_capacity(client, rooms, stay):
    resp = client.post("/book", data=_form([rooms[0].id], stay, guests="3"))
    assert resp.status_code == 400
    assert "Max 1 guests." in resp.text


def test_contact_form(client, db):
    resp = client.post(
        "/contact", data={"first_name": "Hana", "email": "hana@example.com", "message": "Is breakfast included?"}
    )
    assert resp.status_code == 200
    assert "Message Sent" in resp.text
    db.expire_all()
    assert db.query(ContactMessage).one().first_name == "Hana"


def test_contact_form_requires_message(client, db):
    resp = client.post("/contact", data={"first_name": "Hana", "email": "hana@example.com"})
    assert resp.status_code == 400
    db.expire_all()
    assert db.query(ContactMessage).count() == 0


def test_booking_form_disables_submit_while_posting(client, rooms):
    resp = client.get("/book", params={"room_id": rooms[0].id})
    assert "onsubmit=\"this.querySelector('button[type=submit]').disabled = true\"" in resp.text


def test_upload_read_is_capped_past_the_size_limit(monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_IMAGE_MAX_BYTES", 64)

    class FakeUpload:
        filename = "receipt.png"
        content_type = "image/png"
        requested = None

        async def read(self, size=-1):
            FakeUpload.requested = size
            data = PNG_BYTES * 100
            return data if size < 0 else data[:size]

    shot = asyncio.run(screenshot_from_upload(FakeUpload()))
    assert FakeUpload.requested == 65
    assert len(shot.data) == 65


def test_oversized_screenshot_is_rejected(client, db, rooms, stay, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_IMAGE_MAX_BYTES", 64)
    resp = client.post(
        "/book",
        data=_form([rooms[0].id], stay, payment_method="bank_transfer", transaction_reference="FT1"),
        files={"screenshot": ("receipt.png", PNG_BYTES * 10, "image/png")},
    )
    assert resp.status_code == 400
    assert "smaller than" in resp.text
    db.expire_all()
    assert db.query(Booking).count() == 0

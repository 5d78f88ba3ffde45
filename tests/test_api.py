DATE = "2025-08-01"


def book(client, slot="09:00", user_id="u1"):
    return client.post("/bookings", json={"turf_id": "T1", "date": DATE, "time_slot": slot, "user_id": user_id})


def slots(client):
    res = client.get("/turfs/T1/slots", params={"date": DATE})
    assert res.status_code == 200
    return res.json()["slots"]


def test_root(client):
    assert client.get("/").json() == {"message": "TurfLedger Backend Running"}


def test_store_status(client):
    data = client.get("/test").json()
    assert data["collections"] == {"turf": 1, "user": 2, "booking": 0, "review": 0}


def test_turfs(client):
    assert [t["id"] for t in client.get("/turfs").json()] == ["T1"]
    assert client.get("/turfs/T1").json()["availableHours"] == ["09:00", "10:00"]
    assert client.get("/turfs/nope").status_code == 404


def test_slots_bad_date(client):
    assert client.get("/turfs/T1/slots", params={"date": "01/08/2025"}).status_code == 422


def test_booking_flow(client):
    res = book(client)
    assert res.status_code == 201
    booking = res.json()
    assert booking["status"] == "pending"
    assert booking["paymentStatus"] == "unpaid"
    assert slots(client) == ["10:00"]

    assert book(client).status_code == 409

    res = client.post(f"/admin/bookings/{booking['id']}/status", json={"admin_id": "admin1", "status": "rejected"})
    assert res.status_code == 200
    assert res.json()["status"] == "rejected"
    assert slots(client) == ["09:00", "10:00"]


def test_confirm_requires_admin(client):
    booking = book(client).json()
    res = client.post(f"/admin/bookings/{booking['id']}/status", json={"admin_id": "u1", "status": "confirmed"})
    assert res.status_code == 403
    res = client.post(f"/admin/bookings/{booking['id']}/status", json={"admin_id": "admin1", "status": "confirmed"})
    assert res.json()["status"] == "confirmed"
    assert res.json()["paymentStatus"] == "unpaid"
    res = client.post(f"/admin/bookings/{booking['id']}/status", json={"admin_id": "admin1", "status": "rejected"})
    assert res.status_code == 400


def test_unknown_booking_decision(client):
    res = client.post("/admin/bookings/missing/status", json={"admin_id": "admin1", "status": "confirmed"})
    assert res.status_code == 404


def test_admin_cannot_book(client):
    assert book(client, user_id="admin1").status_code == 403


def test_block_and_unblock(client):
    payload = {"turf_id": "T1", "date": DATE, "time_slot": "10:00", "admin_id": "admin1"}
    res = client.post("/admin/blocks", json=payload)
    assert res.status_code == 201
    assert res.json()["notes"] == "Maintenance"
    assert res.json()["paymentStatus"] == "N/A"
    assert client.post("/admin/blocks", json=payload).status_code == 409
    assert slots(client) == ["09:00"]

    params = {"turf_id": "T1", "date": DATE, "time_slot": "10:00", "admin_id": "admin1"}
    assert client.delete("/admin/blocks", params=params).json() == {"removed": 1}
    assert client.delete("/admin/blocks", params=params).json() == {"removed": 0}
    assert slots(client) == ["09:00", "10:00"]


def test_my_bookings_and_filters(client):
    book(client, "09:00")
    client.post("/admin/blocks", json={"turf_id": "T1", "date": DATE, "time_slot": "10:00", "admin_id": "admin1"})
    assert [b["timeSlot"] for b in client.get("/bookings/me", params={"user_id": "u1"}).json()] == ["09:00"]
    assert len(client.get("/bookings").json()) == 2
    assert len(client.get("/bookings", params={"status": "blocked"}).json()) == 1
    assert client.get("/bookings", params={"status": "bogus"}).status_code == 422


def test_admin_summary(client):
    book(client)
    assert client.get("/admin/summary", params={"admin_id": "u1"}).status_code == 403
    data = client.get("/admin/summary", params={"admin_id": "admin1"}).json()
    assert data["counts"]["pending"] == 1
    assert len(data["pending_bookings"]) == 1
    assert data["blocked_slots"] == []
    assert [p["id"] for p in data["players"]] == ["u1"]


def test_register_and_login(client):
    payload = {"name": "New", "email": "new@x.com", "contact_no": "555", "dob": "02/02/2000"}
    res = client.post("/auth/register", json=payload)
    assert res.status_code == 201
    assert res.json()["role"] == "player"
    assert client.post("/auth/register", json=payload).status_code == 409

    res = client.post("/auth/login", json={"email": "new@x.com", "contact_no": "555"})
    assert res.status_code == 200
    assert res.json()["name"] == "New"
    res = client.post("/auth/login", json={"email": "new@x.com", "contact_no": "556"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Wrong details"


def test_register_ignores_role(client):
    payload = {"name": "Sneaky", "email": "s@x.com", "contact_no": "1", "dob": "02/02/2000", "role": "admin"}
    assert client.post("/auth/register", json=payload).json()["role"] == "player"


def test_register_validates_dob(client):
    for dob in ("2000-02-02", "31/02/2000", "01/01/2999"):
        payload = {"name": "X", "email": "x@x.com", "contact_no": "1", "dob": dob}
        assert client.post("/auth/register", json=payload).status_code == 422


def test_reviews(client):
    res = client.post("/reviews", json={"turf_id": "T1", "user_id": "u1", "rating": 4, "comment": "Nice"})
    assert res.status_code == 201
    assert [r["rating"] for r in client.get("/turfs/T1/reviews").json()] == [4]
    assert client.post("/reviews", json={"turf_id": "T1", "user_id": "u1", "rating": 0, "comment": "x"}).status_code == 422
    assert client.post("/reviews", json={"turf_id": "T1", "user_id": "u1", "rating": 3, "comment": "  "}).status_code == 422
    assert client.post("/reviews", json={"turf_id": "T9", "user_id": "u1", "rating": 3, "comment": "x"}).status_code == 404


def test_users_by_role(client):
    assert [u["id"] for u in client.get("/users", params={"role": "admin"}).json()] == ["admin1"]


def test_schema(client):
    assert set(client.get("/schema").json()) == {"turf", "user", "booking", "review"}


def test_block_errors(client):
    payload = {"turf_id": "nope", "date": DATE, "time_slot": "10:00", "admin_id": "admin1"}
    assert client.post("/admin/blocks", json=payload).status_code == 404
    payload = {"turf_id": "T1", "date": DATE, "time_slot": "23:00", "admin_id": "admin1"}
    assert client.post("/admin/blocks", json=payload).status_code == 400
    assert client.get("/bookings").json() == []

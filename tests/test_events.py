import datetime as dt

from app.core.constants import Collections


def event_payload(title, date, **overrides):
    return {
        "title": title,
        "date": date,
        "time": "20:00",
        "description": f"{title} in the back room",
        "capacity": 50,
        "location": "Back room",
        "duration": 90,
        **overrides,
    }


def add_event(store, title, date, **overrides):
    return store.create_document(Collections.EVENTS, event_payload(title, date, **overrides))


def test_public_list_shows_active_events_in_date_order(client, store):
    add_event(store, "Folk night", "2026-11-20")
    add_event(store, "Pub quiz", "2026-11-05")
    add_event(store, "Private party", "2026-11-10", isActive=False)

    res = client.get("/api/events")

    assert res.status_code == 200
    assert [e["title"] for e in res.json()] == ["Pub quiz", "Folk night"]


def test_upcoming_filter_hides_past_events(client, store):
    past = (dt.date.today() - dt.timedelta(days=3)).isoformat()
    future = (dt.date.today() + dt.timedelta(days=3)).isoformat()
    add_event(store, "Last week", past)
    add_event(store, "Next week", future)

    res = client.get("/api/events", params={"upcoming": True})

    assert [e["title"] for e in res.json()] == ["Next week"]


def test_public_get_hides_inactive(client, store):
    active = add_event(store, "Open mic", "2026-12-01")
    hidden = add_event(store, "Staff do", "2026-12-02", isActive=False)

    assert client.get(f"/api/events/{active.id}").json()["title"] == "Open mic"
    assert client.get(f"/api/events/{hidden.id}").status_code == 404
    assert client.get("/api/events/unknown").status_code == 404


def test_admin_crud_and_listing(admin_client, store):
    res = admin_client.post("/api/admin/events", json=event_payload("Burns night", "2027-01-25", time="7:30"))
    assert res.status_code == 201, res.text
    created = res.json()
    assert created["time"] == "07:30"
    assert created["price"] == 0

    add_event(store, "Hidden", "2027-02-01", isActive=False)

    titles = [e["title"] for e in admin_client.get("/api/admin/events").json()]
    assert titles == ["Hidden", "Burns night"]

    res = admin_client.patch(f"/api/admin/events/{created['id']}", json={"isActive": False})
    assert res.json()["isActive"] is False
    assert admin_client.get(f"/api/admin/events/{created['id']}").status_code == 200

    assert admin_client.delete(f"/api/admin/events/{created['id']}").status_code == 204
    assert admin_client.get(f"/api/admin/events/{created['id']}").status_code == 404


def test_invalid_event_rejected(admin_client):
    assert admin_client.post("/api/admin/events", json=event_payload("Bad", "2027-01-01", time="25:00")).status_code == 422
    assert admin_client.post("/api/admin/events", json=event_payload("Bad", "2027-01-01", capacity=0)).status_code == 422
    assert admin_client.patch("/api/admin/events/whatever", json={"time": "noon"}).status_code == 422


def test_event_pages(admin_client, store):
    for day in range(1, 6):
        add_event(store, f"Gig {day}", f"2027-03-0{day}")

    first = admin_client.get("/api/admin/events/page", params={"page_size": 2}).json()
    assert [e["title"] for e in first["items"]] == ["Gig 5", "Gig 4"]
    assert first["hasMore"] is True

    second = admin_client.get(
        "/api/admin/events/page", params={"page_size": 2, "cursor": first["nextCursor"]}
    ).json()
    third = admin_client.get(
        "/api/admin/events/page", params={"page_size": 2, "cursor": second["nextCursor"]}
    ).json()

    assert [e["title"] for e in second["items"]] == ["Gig 3", "Gig 2"]
    assert [e["title"] for e in third["items"]] == ["Gig 1"]
    assert third["hasMore"] is False

    assert admin_client.get("/api/admin/events/page", params={"cursor": "%%%"}).status_code == 422

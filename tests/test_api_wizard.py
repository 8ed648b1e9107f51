"""
Wizard API tests — server-held form state, recompute on every step, save as quote.

Tests:
1-3.   Start, fetch, unknown session
4-9.   Each step recomputes the estimate
10-12. Reset and costs
13-17. Save quote, complete sessions are read-only
"""

from datetime import datetime


def _start(client):
    resp = client.post("/api/wizard/start")
    assert resp.status_code == 200
    return resp.json()["session_id"]


def _with_stall(client):
    session_id = _start(client)
    client.patch(f"/api/wizard/{session_id}/stall", json={"area": 20})
    return session_id


# ============================================================
# Start / fetch
# ============================================================

def test_start_returns_default_estimate(client):
    data = client.post("/api/wizard/start").json()
    assert data["status"] == "active"
    assert data["step"] == "event"
    assert data["estimate"]["total"] == 40000
    assert data["state"]["stall"]["area"] == 0.0


def test_get_session(client):
    session_id = _start(client)
    resp = client.get(f"/api/wizard/{session_id}")
    assert resp.status_code == 200
    assert resp.json()["session_id"] == session_id


def test_unknown_session_is_404(client):
    assert client.get("/api/wizard/does-not-exist").status_code == 404
    assert client.patch("/api/wizard/does-not-exist/stall", json={"area": 10}).status_code == 404


# ============================================================
# Steps
# ============================================================

def test_event_step(client):
    session_id = _start(client)
    resp = client.patch(f"/api/wizard/{session_id}/event", json={
        "exhibition_name": "India Mobile Congress",
        "destination_city": "Delhi",
        "team_size": 4,
    })
    data = resp.json()
    assert data["state"]["event"]["exhibition_name"] == "India Mobile Congress"
    assert data["state"]["event"]["team_size"] == 4
    assert data["estimate"]["event"]["destination_city"] == "Delhi"


def test_stall_step_recomputes(client):
    session_id = _start(client)
    resp = client.patch(f"/api/wizard/{session_id}/stall", json={"area": 20})
    data = resp.json()
    assert data["step"] == "stall_design"
    assert data["estimate"]["total"] == 445000


def test_stall_step_merges_partial_updates(client):
    session_id = _with_stall(client)
    data = client.patch(f"/api/wizard/{session_id}/stall", json={"boothPosition": "corner"}).json()
    assert data["state"]["stall"]["area"] == 20.0
    assert data["state"]["stall"]["booth_position"] == "corner"
    assert data["estimate"]["stall_breakdown"]["position_multiplier"] == 1.10


def test_flights_step_adds_travel(client):
    session_id = _with_stall(client)
    resp = client.post(f"/api/wizard/{session_id}/flights", json={
        "outbound": {"airline": "SpiceJet", "price": 3600, "total_price": 7200},
        "return_flight": {"airline": "IndiGo", "price": 4200, "total_price": 8400},
    })
    data = resp.json()
    assert data["estimate"]["simplified"]["travel_hotel_cost"] == 15600
    assert data["estimate"]["total"] == 445000 + 15600


def test_hotel_step_uses_event_nights(client):
    session_id = _with_stall(client)
    client.patch(f"/api/wizard/{session_id}/event", json={"nights": 2})
    data = client.post(f"/api/wizard/{session_id}/hotel", json={
        "hotel": {"name": "ITC Maurya", "price_per_night": 18000},
    }).json()
    assert data["estimate"]["simplified"]["travel_hotel_cost"] == 36000


def test_vendors_step_keeps_selection_order(client, seeded_vendors):
    session_id = _start(client)
    picked = [seeded_vendors[2].id, seeded_vendors[0].id]
    data = client.post(f"/api/wizard/{session_id}/vendors", json={"vendor_ids": picked}).json()
    names = [v["name"] for v in data["estimate"]["vendors"]]
    assert names == [seeded_vendors[2].name, seeded_vendors[0].name]
    assert "keywords" not in data["estimate"]["vendors"][0]


def test_vendors_step_unknown_id_is_404(client, seeded_vendors):
    session_id = _start(client)
    resp = client.post(f"/api/wizard/{session_id}/vendors", json={"vendor_ids": [9999]})
    assert resp.status_code == 404


# ============================================================
# Costs / reset
# ============================================================

def test_costs_override_and_restore(client):
    session_id = _with_stall(client)
    data = client.patch(f"/api/wizard/{session_id}/costs", json={
        "marketing_cost": 0, "logistics_cost": 0,
    }).json()
    assert data["estimate"]["total"] == 405000

    data = client.patch(f"/api/wizard/{session_id}/costs", json={}).json()
    assert data["estimate"]["total"] == 445000


def test_negative_cost_rejected(client):
    session_id = _start(client)
    resp = client.patch(f"/api/wizard/{session_id}/costs", json={"marketing_cost": -10})
    assert resp.status_code == 422


def test_reset_restores_defaults(client):
    session_id = _with_stall(client)
    data = client.post(f"/api/wizard/{session_id}/reset").json()
    assert data["step"] == "event"
    assert data["estimate"]["total"] == 40000


# ============================================================
# Save quote
# ============================================================

def test_save_quote(client):
    session_id = _with_stall(client)
    client.patch(f"/api/wizard/{session_id}/event", json={
        "exhibition_name": "Auto Expo", "destination_city": "Delhi",
    })
    resp = client.post(f"/api/wizard/{session_id}/quote", json={"notes": "First draft"})
    assert resp.status_code == 201
    quote = resp.json()
    assert quote["quote_number"] == f"EXH-{datetime.utcnow().year}-0001"
    assert quote["status"] == "draft"
    assert quote["total"] == 445000
    assert quote["exhibition_name"] == "Auto Expo"
    assert quote["session_id"] == session_id
    assert quote["outputs"]["total"] == quote["total"]


def test_quote_numbers_increment(client):
    first = client.post(f"/api/wizard/{_start(client)}/quote", json={}).json()
    second = client.post(f"/api/wizard/{_start(client)}/quote", json={}).json()
    assert first["quote_number"].endswith("-0001")
    assert second["quote_number"].endswith("-0002")


def test_save_quote_with_unknown_exhibitor_is_404(client):
    session_id = _start(client)
    resp = client.post(f"/api/wizard/{session_id}/quote", json={"exhibitor_id": 42})
    assert resp.status_code == 404


def test_completed_session_rejects_changes(client):
    session_id = _with_stall(client)
    client.post(f"/api/wizard/{session_id}/quote", json={})

    assert client.get(f"/api/wizard/{session_id}").json()["status"] == "complete"
    resp = client.patch(f"/api/wizard/{session_id}/stall", json={"area": 30})
    assert resp.status_code == 400

    # reset reopens it
    data = client.post(f"/api/wizard/{session_id}/reset").json()
    assert data["status"] == "active"


def test_completed_session_cannot_be_saved_twice(client):
    session_id = _with_stall(client)
    assert client.post(f"/api/wizard/{session_id}/quote", json={}).status_code == 201
    assert client.post(f"/api/wizard/{session_id}/quote", json={}).status_code == 400
    assert len(client.get("/api/quotes/").json()) == 1

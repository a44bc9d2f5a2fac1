from carnet.repositories import entries as store

WEEK = {"startDate": "2024-02-12", "endDate": "2024-02-18"}


def create_week(client, headers, path="/entries", body=WEEK):
    r = client.post(path, json=body, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_list_requires_authentication(client):
    r = client.get("/entries", params=WEEK)
    assert r.status_code == 401


def test_list_without_dates_or_token_is_401(client):
    r = client.get("/entries")
    assert r.status_code == 401


def test_list_rejects_invalid_token(client):
    r = client.get("/entries", params=WEEK, headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401


def test_list_requires_dates(client, alice):
    r = client.get("/entries", params={"startDate": "2024-02-12"}, headers=alice)
    assert r.status_code == 400
    assert r.json()["detail"] == "Missing dates"


def test_list_rejects_unparseable_dates(client, alice):
    r = client.get("/entries", params={"startDate": "soon", "endDate": "later"}, headers=alice)
    assert r.status_code == 400


def test_list_empty_range_is_ok(client, alice):
    r = client.get("/entries", params=WEEK, headers=alice)
    assert r.status_code == 200
    assert r.json() == []


def test_create_week_returns_seven_days(client, alice):
    entry = create_week(client, alice)

    assert entry["userId"] == "user_alice"
    assert entry["startDate"] == "2024-02-12"
    assert entry["endDate"] == "2024-02-18"
    assert len(entry["days"]) == 7
    assert entry["days"][0]["date"] == "2024-02-12"
    assert entry["days"][6]["date"] == "2024-02-18"
    assert all(day["exercises"] == {} for day in entry["days"])
    for field in ("charityActs", "comments", "difficulties", "improvements", "successes"):
        assert entry[field] == ""


def test_create_then_list_returns_the_entry(client, alice):
    created = create_week(client, alice)

    r = client.get("/entries", params=WEEK, headers=alice)
    assert r.status_code == 200
    entries = r.json()
    assert len(entries) == 1
    assert entries[0]["id"] == created["id"]
    assert [d["date"] for d in entries[0]["days"]] == [
        "2024-02-12", "2024-02-13", "2024-02-14", "2024-02-15",
        "2024-02-16", "2024-02-17", "2024-02-18",
    ]


def test_create_alias_route(client, alice):
    entry = create_week(client, alice, path="/entries/create")
    assert len(entry["days"]) == 7


def test_create_accepts_iso_datetimes(client, alice):
    body = {"startDate": "2024-02-12T00:00:00.000Z", "endDate": "2024-02-18T23:59:59.999Z"}
    entry = create_week(client, alice, body=body)
    assert entry["startDate"] == "2024-02-12"


def test_create_accepts_local_midnights_east_of_utc(client, alice):
    # UTC+1 browser: local Monday 00:00 to Sunday 23:59:59.999
    body = {"startDate": "2024-02-11T23:00:00.000Z", "endDate": "2024-02-18T22:59:59.999Z"}
    entry = create_week(client, alice, body=body)
    assert (entry["startDate"], entry["endDate"]) == ("2024-02-12", "2024-02-18")


def test_create_accepts_local_midnights_west_of_utc(client, alice):
    # UTC-5 browser
    body = {"startDate": "2024-02-12T05:00:00.000Z", "endDate": "2024-02-19T04:59:59.999Z"}
    entry = create_week(client, alice, body=body)
    assert (entry["startDate"], entry["endDate"]) == ("2024-02-12", "2024-02-18")

    r = client.get("/entries", params=body, headers=alice)
    assert [e["id"] for e in r.json()] == [entry["id"]]


def test_create_requires_dates(client, alice):
    r = client.post("/entries", json={"startDate": "2024-02-12"}, headers=alice)
    assert r.status_code == 400

    r = client.post("/entries", headers=alice)
    assert r.status_code == 400


def test_create_requires_authentication(client):
    r = client.post("/entries", json=WEEK)
    assert r.status_code == 401


def test_create_rejects_partial_week(client, alice):
    r = client.post("/entries", json={"startDate": "2024-02-12", "endDate": "2024-02-14"}, headers=alice)
    assert r.status_code == 400


def test_create_twice_is_a_duplicate(client, alice):
    first = create_week(client, alice)

    r = client.post("/entries", json=WEEK, headers=alice)
    assert r.status_code == 400
    assert "already exists" in r.json()["detail"]

    entries = client.get("/entries", params=WEEK, headers=alice).json()
    assert len(entries) == 1
    assert entries[0]["id"] == first["id"]


def test_same_week_for_two_users(client, alice, bob):
    a = create_week(client, alice)
    b = create_week(client, bob)
    assert a["id"] != b["id"]

    listed = client.get("/entries", params=WEEK, headers=bob).json()
    assert [e["id"] for e in listed] == [b["id"]]


def test_get_entry(client, alice, bob):
    entry = create_week(client, alice)

    r = client.get(f"/entries/{entry['id']}", headers=alice)
    assert r.status_code == 200
    assert r.json() == entry

    assert client.get(f"/entries/{entry['id']}", headers=bob).status_code == 403
    assert client.get("/entries/missing", headers=alice).status_code == 404


def test_update_entry(client, alice):
    entry = create_week(client, alice)
    entry["comments"] = "Bonne semaine"
    entry["charityActs"] = "Visite à un voisin"
    entry["days"][1]["exercises"] = {"tuesdayPrayer": True, "rosary": True}

    r = client.put(f"/entries/{entry['id']}", json=entry, headers=alice)
    assert r.status_code == 200, r.text
    updated = r.json()
    assert updated["comments"] == "Bonne semaine"
    assert updated["charityActs"] == "Visite à un voisin"
    assert updated["difficulties"] == ""
    assert updated["days"][1]["exercises"] == {"tuesdayPrayer": True, "rosary": True}
    assert updated["days"][1]["id"] == entry["days"][1]["id"]
    assert len(updated["days"]) == 7


def test_update_day_without_id_matches_by_date(client, alice):
    entry = create_week(client, alice)
    day_ids = [d["id"] for d in entry["days"]]
    days = [{"date": d["date"], "exercises": {"mass": True}} for d in entry["days"]]

    for _ in range(2):
        r = client.put(f"/entries/{entry['id']}", json={"days": days}, headers=alice)
        assert r.status_code == 200, r.text

    updated = r.json()
    assert [d["id"] for d in updated["days"]] == day_ids
    assert all(d["exercises"] == {"mass": True} for d in updated["days"])


def test_update_day_outside_week(client, alice):
    entry = create_week(client, alice)
    body = {"days": [{"date": "2024-03-01", "exercises": {"mass": True}}]}
    r = client.put(f"/entries/{entry['id']}", json=body, headers=alice)
    assert r.status_code == 400


def test_update_rejects_malformed_body(client, alice):
    entry = create_week(client, alice)
    r = client.put(f"/entries/{entry['id']}", json={"days": [{"date": "nope", "exercises": {}}]}, headers=alice)
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Invalid request")

    r = client.put(f"/entries/{entry['id']}", json={"days": [{"exercises": {}}]}, headers=alice)
    assert r.status_code == 400

    # The body is checked before the entry is looked up
    r = client.put("/entries/missing", json={"days": [{"exercises": {}}]}, headers=alice)
    assert r.status_code == 400


def test_update_not_found(client, alice):
    r = client.put("/entries/does-not-exist", json={"comments": "x"}, headers=alice)
    assert r.status_code == 404


def test_update_other_users_entry_is_forbidden(client, alice, bob):
    entry = create_week(client, alice)
    r = client.put(f"/entries/{entry['id']}", json={"comments": "mine now"}, headers=bob)
    assert r.status_code == 403

    unchanged = client.get(f"/entries/{entry['id']}", headers=alice).json()
    assert unchanged["comments"] == ""


def test_update_requires_authentication(client, alice):
    entry = create_week(client, alice)
    r = client.put(f"/entries/{entry['id']}", json={"comments": "x"})
    assert r.status_code == 401


def test_session_cookie_is_accepted(client, alice):
    create_week(client, alice)
    token = alice["Authorization"].split(" ", 1)[1]
    r = client.get("/entries", params=WEEK, headers={"Cookie": f"__session={token}"})
    assert r.status_code == 200
    assert len(r.json()) == 1


def test_unexpected_error_is_generic_500(client, alice, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection to db-internal:5432 refused")

    monkeypatch.setattr(store, "find_entries", boom)
    r = client.get("/entries", params=WEEK, headers=alice)
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}

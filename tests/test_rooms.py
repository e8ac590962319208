from bson import ObjectId


def _seed(database, **fields):
    return database.rooms.insert_one({"title": "Sea view", "price": 120, **fields}).inserted_id


def test_list_rooms(client, database):
    a = _seed(database)
    b = _seed(database, title="Garden suite")
    resp = client.get("/allrooms")
    assert resp.status_code == 200
    rooms = resp.json()
    assert [r["_id"] for r in rooms] == [str(a), str(b)]
    assert rooms[1]["title"] == "Garden suite"


def test_get_room(client, database):
    rid = _seed(database)
    resp = client.get(f"/allrooms/{rid}")
    assert resp.status_code == 200
    assert resp.json()["_id"] == str(rid)
    assert resp.json()["price"] == 120


def test_get_missing_room_is_null(client):
    resp = client.get(f"/allrooms/{ObjectId()}")
    assert resp.status_code == 200
    assert resp.json() is None


def test_malformed_room_id(client):
    resp = client.get("/allrooms/not-an-id")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "invalid_id"


def test_patch_overwrites_availability(client, database):
    rid = _seed(database, Availability={"from": "2024-01-01"})
    body = {"from": "2024-02-01", "to": "2024-02-03"}
    resp = client.patch(f"/allrooms/{rid}", json=body)
    assert resp.status_code == 200
    assert resp.json() == {
        "acknowledged": True,
        "modifiedCount": 1,
        "upsertedId": None,
        "upsertedCount": 0,
        "matchedCount": 1,
    }
    stored = database.rooms.find_one({"_id": rid})
    assert stored["Availability"] == body
    assert "availability" not in stored


def test_patch_accepts_plain_value(client, database):
    rid = _seed(database)
    client.patch(f"/allrooms/{rid}", json="2024-03-01")
    assert database.rooms.find_one({"_id": rid})["Availability"] == "2024-03-01"


def test_patch_unknown_room_matches_nothing(client):
    resp = client.patch(f"/allrooms/{ObjectId()}", json={"from": "2024-02-01"})
    assert resp.status_code == 200
    assert resp.json()["matchedCount"] == 0


def test_patch_requires_body(client, database):
    rid = _seed(database)
    resp = client.patch(f"/allrooms/{rid}")
    assert resp.status_code == 422


def test_patch_malformed_room_id(client):
    resp = client.patch("/allrooms/not-an-id", json={"from": "2024-02-01"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "invalid_id"

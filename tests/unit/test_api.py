"""HTTP surface: envelopes, query parsing, and error mapping."""

import json

import pytest

from conftest import reviews_json


def test_list_locations_by_rating(client, store, auth_headers):
    store.seed(
        "locations",
        [
            {"Id": 1, "name": "A", "reviews": reviews_json(2)},
            {"Id": 2, "name": "B", "reviews": reviews_json(5, 4)},
            {"Id": 3, "name": "C", "reviews": "[]"},
        ],
    )

    resp = client.get(
        "/api/locations",
        params={"sort": "rating", "order": "desc", "limit": 2, "hasMarker": ""},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [row["Id"] for row in data["list"]] == [2, 1]
    assert data["list"][0]["calculated_rating"] == 4.5
    assert data["pageInfo"]["totalRows"] == 3
    assert "where" not in store.requests[0].url.params


def test_list_query_rejects_bad_paging(client, auth_headers):
    resp = client.get("/api/locations", params={"page": 0}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_missing_location_is_404(client, auth_headers):
    resp = client.get("/api/locations/42", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Location not found"}


def test_create_location_encodes_list_fields(client, store, auth_headers):
    resp = client.post(
        "/api/locations",
        json={
            "name": "My Khe Beach",
            "types": "beach, swimming",
            "images": "https://img.test/1.jpg\nhttps://img.test/2.jpg",
            "lat": "16.06",
            "long": "bad",
        },
        headers=auth_headers,
    )

    assert resp.status_code == 201
    body = store.bodies("POST")[0]
    assert body["types"] == '["beach","swimming"]'
    assert body["images"] == '["https://img.test/1.jpg","https://img.test/2.jpg"]'
    assert body["videos"] == "[]"
    assert body["lat"] == 16.06
    assert body["long"] == 0.0
    assert body["marker"] is True
    assert body["reviews"] == "[]"


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "1e999"])
def test_create_location_stores_non_finite_coordinates_as_zero(client, store, auth_headers, raw):
    resp = client.post("/api/locations", json={"name": "X", "lat": raw, "long": raw}, headers=auth_headers)

    assert resp.status_code == 201
    body = store.bodies("POST")[0]
    assert body["lat"] == 0
    assert body["long"] == 0


def test_toggle_marker_sends_partial_update(client, store, auth_headers):
    store.seed("locations", [{"Id": 7, "name": "Ba Na Hills", "marker": True}])

    resp = client.patch("/api/locations/7/marker", json={"marker": False}, headers=auth_headers)

    assert resp.status_code == 200
    assert store.bodies("PATCH") == [{"marker": False, "Id": 7}]
    assert store.table("locations")[0]["name"] == "Ba Na Hills"


def test_delete_review_out_of_range_is_400(client, store, auth_headers):
    store.seed("festivals", [{"Id": 3, "name": "Tet", "reviews": reviews_json(5, 4)}])

    resp = client.delete("/api/reviews/festival/3/2", headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid review index"}
    assert json.loads(store.table("festivals")[0]["reviews"])[1]["start"] == 4


def test_store_outage_surfaces_as_500(client, store, auth_headers, sleeps):
    store.fail_with = [502, 502, 502]

    resp = client.get("/api/users", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json()["success"] is False
    assert sleeps == [1.0, 2.0]


def test_users_never_expose_password(client, store, auth_headers):
    store.seed("accounts", [{"Id": 1, "email": "lan@test.vn", "password": "abc123"}])

    listed = client.get("/api/users", headers=auth_headers).json()["data"]["list"]
    single = client.get("/api/users/1", headers=auth_headers).json()["data"]

    assert "password" not in listed[0]
    assert "password" not in single


def test_create_user_hashes_password(client, store, auth_headers):
    resp = client.post(
        "/api/users",
        json={"email": " lan@test.vn ", "password": "pw"},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    body = store.bodies("POST")[0]
    assert body["email"] == "lan@test.vn"
    assert body["password"] != "pw"
    assert len(body["password"]) == 64


def test_create_objective_requires_name_and_type(client, auth_headers):
    resp = client.post("/api/objectives", json={"name": "Lantern"}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Name and type are required"}


def test_update_object_is_partial(client, store, auth_headers):
    store.seed("objects", [{"Id": 5, "title": "Bell", "content": "Bronze"}])

    resp = client.put("/api/objects/5", json={"title": " Temple Bell "}, headers=auth_headers)

    assert resp.status_code == 200
    assert store.bodies("PATCH") == [{"title": "Temple Bell", "Id": 5}]
    assert store.table("objects")[0]["content"] == "Bronze"


def test_festival_types_are_distinct_and_sorted(client, store, auth_headers):
    store.seed(
        "festivals",
        [
            {"Id": 1, "types": '["Cultural", "traditional"]'},
            {"Id": 2, "types": "music, cultural"},
        ],
    )

    resp = client.get("/api/festivals/types", headers=auth_headers)

    assert resp.json()["data"] == ["cultural", "music", "traditional"]

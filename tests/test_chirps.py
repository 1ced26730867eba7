import uuid
from datetime import timedelta

from flask import current_app

from utils.security import make_jwt
from tests.conftest import bearer


def test_create_chirp_masks_profanity(client, logged_in):
    session = logged_in()
    res = client.post(
        "/api/chirps",
        json={"body": "This is a kerfuffle opinion I need to share with the world"},
        headers=bearer(session["token"]),
    )
    assert res.status_code == 201
    body = res.get_json()
    assert body["body"] == "This is a **** opinion I need to share with the world"
    assert body["user_id"] == session["id"]


def test_create_chirp_too_long(client, logged_in):
    session = logged_in()
    res = client.post("/api/chirps", json={"body": "x" * 141}, headers=bearer(session["token"]))
    assert res.status_code == 400
    assert res.get_json()["message"] == "Chirp is too long"


def test_create_chirp_at_max_length(client, logged_in):
    session = logged_in()
    res = client.post("/api/chirps", json={"body": "x" * 140}, headers=bearer(session["token"]))
    assert res.status_code == 201


def test_chirp_length_counts_characters(client, logged_in):
    session = logged_in()
    res = client.post("/api/chirps", json={"body": "\u00e9" * 140}, headers=bearer(session["token"]))
    assert res.status_code == 201
    assert len(res.get_json()["body"]) == 140


def test_create_chirp_empty_body(client, logged_in):
    session = logged_in()
    res = client.post("/api/chirps", json={"body": ""}, headers=bearer(session["token"]))
    assert res.status_code == 400


def test_create_chirp_requires_token(client):
    res = client.post("/api/chirps", json={"body": "hello"})
    assert res.status_code == 401


def test_create_chirp_rejects_expired_token(client, logged_in):
    session = logged_in()
    expired = make_jwt(session["id"], current_app.config["JWT_SECRET"], timedelta(seconds=-10))
    res = client.post("/api/chirps", json={"body": "hello"}, headers=bearer(expired))
    assert res.status_code == 401


def test_create_chirp_rejects_foreign_signature(client, logged_in):
    session = logged_in()
    forged = make_jwt(session["id"], "not-our-secret", timedelta(hours=1))
    res = client.post("/api/chirps", json={"body": "hello"}, headers=bearer(forged))
    assert res.status_code == 401


def test_token_failures_share_one_message(client, logged_in):
    session = logged_in()
    forged = make_jwt(session["id"], "not-our-secret", timedelta(hours=1))
    bad_signature = client.post("/api/chirps", json={"body": "hello"}, headers=bearer(forged))
    no_header = client.post("/api/chirps", json={"body": "hello"})
    assert bad_signature.get_json() == no_header.get_json()


def test_get_chirp(client, logged_in, create_chirp):
    session = logged_in()
    chirp = create_chirp(session["token"])
    res = client.get(f"/api/chirps/{chirp['id']}")
    assert res.status_code == 200
    assert res.get_json() == chirp


def test_get_chirp_not_found(client):
    res = client.get(f"/api/chirps/{uuid.uuid4()}")
    assert res.status_code == 404


def test_get_chirp_invalid_id(client):
    res = client.get("/api/chirps/not-a-uuid")
    assert res.status_code == 400


def test_list_chirps_sort_and_filter(client, logged_in, create_chirp):
    walt = logged_in()
    jesse = logged_in(email="jesse@breakingbad.com", password="yo")
    first = create_chirp(walt["token"], "one")
    second = create_chirp(jesse["token"], "two")
    third = create_chirp(walt["token"], "three")

    res = client.get("/api/chirps")
    assert [c["id"] for c in res.get_json()] == [first["id"], second["id"], third["id"]]

    res = client.get("/api/chirps?sort=desc")
    assert [c["id"] for c in res.get_json()] == [third["id"], second["id"], first["id"]]

    res = client.get(f"/api/chirps?author_id={walt['id']}")
    assert [c["id"] for c in res.get_json()] == [first["id"], third["id"]]


def test_list_chirps_bad_params(client):
    assert client.get("/api/chirps?author_id=nope").status_code == 400
    assert client.get("/api/chirps?sort=sideways").status_code == 400


def test_delete_chirp_by_owner(client, logged_in, create_chirp):
    session = logged_in()
    chirp = create_chirp(session["token"])
    res = client.delete(f"/api/chirps/{chirp['id']}", headers=bearer(session["token"]))
    assert res.status_code == 204
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 404


def test_delete_chirp_by_non_owner(client, logged_in, create_chirp):
    walt = logged_in()
    jesse = logged_in(email="jesse@breakingbad.com", password="yo")
    chirp = create_chirp(walt["token"])
    res = client.delete(f"/api/chirps/{chirp['id']}", headers=bearer(jesse["token"]))
    assert res.status_code == 403
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 200


def test_delete_chirp_unknown(client, logged_in):
    session = logged_in()
    res = client.delete(f"/api/chirps/{uuid.uuid4()}", headers=bearer(session["token"]))
    assert res.status_code == 404


def test_delete_chirp_requires_token(client, logged_in, create_chirp):
    session = logged_in()
    chirp = create_chirp(session["token"])
    res = client.delete(f"/api/chirps/{chirp['id']}")
    assert res.status_code == 401

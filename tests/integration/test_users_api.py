from storekeeper.db import models
from storekeeper.utils.realms import Realm

NEW_USER = {"name": "Mona", "email": "mona@mail.com", "password": "12312312"}


def test_list_users_paginated(client, admin_headers, user_factory, storage_factory):
    users = [user_factory(email=f"u{i}@mail.com", name=f"User {i}") for i in range(20)]
    storage_factory(users[0])

    r = client.get("/api/users", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["msg"] == ""
    assert body["isSuccess"] is True
    page = body["payload"]
    assert page["total_items"] == 20
    assert page["total_pages"] == 2
    assert page["page"] == 1
    assert page["per_page"] == 15
    assert len(page["items"]) == 15
    first = page["items"][0]
    assert first["email"] == "u0@mail.com"
    assert first["storage"]["user_id"] == users[0].id
    assert page["items"][1]["storage"] is None
    assert "password_hash" not in first

    r = client.get("/api/users?page=2&per_page=5", headers=admin_headers)
    page = r.json()["payload"]
    assert [u["email"] for u in page["items"]] == [f"u{i}@mail.com" for i in range(5, 10)]
    assert page["total_pages"] == 4

    r = client.get("/api/users?per_page=1000", headers=admin_headers)
    assert r.json()["payload"]["per_page"] == 100


def test_list_users_rejects_bad_page(client, admin_headers):
    r = client.get("/api/users?page=0", headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["msg"] == "The page field is invalid."


def test_create_user(client, admin_headers, db_session):
    r = client.post("/api/users", json=NEW_USER, headers=admin_headers)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["msg"] == "The user created successfully"
    assert body["payload"]["name"] == "Mona"
    assert body["payload"]["email"] == "mona@mail.com"
    assert "password" not in body["payload"]
    assert db_session.query(models.User).filter_by(email="mona@mail.com").count() == 1


def test_create_user_validation(client, admin_headers, user_factory):
    r = client.post("/api/users", json={**NEW_USER, "password": "short"}, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["msg"] == "The password must be at least 8 characters."

    user_factory(email="mona@mail.com")
    r = client.post("/api/users", json=NEW_USER, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["msg"] == "The email has already been taken."


def test_show_user(client, admin_headers, user_factory, storage_factory):
    user = user_factory(email="mona@mail.com", name="Mona")
    storage = storage_factory(user)
    r = client.get(f"/api/users/{user.id}", headers=admin_headers)
    assert r.status_code == 200
    payload = r.json()["payload"]
    assert payload["id"] == user.id
    assert payload["storage"]["id"] == storage.id


def test_show_missing_user(client, admin_headers):
    for path in ("/api/users/999", "/api/users/not-a-number"):
        r = client.get(path, headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"msg": "Not Found", "isSuccess": False, "statusCode": 404, "payload": None}


def test_update_user_keeps_own_email(client, admin_headers, user_factory, db_session):
    user = user_factory(email="mona@mail.com", name="Mona")
    r = client.put(
        f"/api/users/{user.id}",
        json={"name": "Mona Lisa", "email": "mona@mail.com", "password": "87654321"},
        headers=admin_headers,
    )
    assert r.status_code == 202, r.text
    assert r.json()["msg"] == "The user updated successfully"
    assert r.json()["payload"]["name"] == "Mona Lisa"

    r = client.post("/api/users/auth/login", json={"email": "mona@mail.com", "password": "87654321"})
    assert r.status_code == 202


def test_update_user_to_taken_email(client, admin_headers, user_factory):
    user_factory(email="taken@mail.com")
    user = user_factory(email="mona@mail.com")
    r = client.put(
        f"/api/users/{user.id}",
        json={"name": "Mona", "email": "taken@mail.com", "password": "87654321"},
        headers=admin_headers,
    )
    assert r.status_code == 422
    assert r.json()["msg"] == "The email has already been taken."


def test_update_missing_user_is_404_before_validation(client, admin_headers):
    r = client.put("/api/users/999", json={}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["msg"] == "Not Found"


def test_delete_user_cascades_and_revokes_tokens(
    client, admin_headers, user_factory, storage_factory, item_factory, auth_headers, db_session
):
    user = user_factory(email="mona@mail.com")
    storage = storage_factory(user)
    item_factory(storage)
    headers = auth_headers(Realm.USER, user)
    user_id = user.id

    r = client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert r.status_code == 202
    assert r.json() == {"msg": "The user deleted successfully", "isSuccess": True, "statusCode": 202, "payload": None}

    db_session.expire_all()
    assert db_session.query(models.User).count() == 0
    assert db_session.query(models.Storage).count() == 0
    assert db_session.query(models.Item).count() == 0
    assert db_session.query(models.AccessToken).filter_by(realm="user").count() == 0

    r = client.post("/api/users/auth/logout", headers=headers)
    assert r.status_code == 401

    r = client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert r.status_code == 404


def test_non_numeric_id_is_404_before_validation(client, admin_headers):
    r = client.put("/api/users/abc", json={"name": "x"}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["msg"] == "Not Found"


def test_oversized_page_is_rejected(client, admin_headers):
    r = client.get("/api/users?page=99999999999999999999", headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["msg"] == "The page field is invalid."


def test_page_past_the_end_is_empty(client, admin_headers, user_factory):
    user_factory(email="only@mail.com")
    r = client.get("/api/users?page=2147483647&per_page=100", headers=admin_headers)
    assert r.status_code == 200
    page = r.json()["payload"]
    assert page["items"] == []
    assert page["total_items"] == 1


def test_oversized_user_id_is_not_found(client, admin_headers):
    r = client.delete("/api/users/99999999999999999999", headers=admin_headers)
    assert r.status_code == 404


def test_email_taken_reported_before_password(client, admin_headers, user_factory):
    user_factory(email="mona@mail.com")
    r = client.post("/api/users", json={**NEW_USER, "password": "short"}, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["msg"] == "The email has already been taken."


def test_patch_updates_user(client, admin_headers, user_factory):
    user = user_factory(email="mona@mail.com", name="Mona")
    r = client.patch(
        f"/api/users/{user.id}",
        json={"name": "Mona Lisa", "email": "mona@mail.com", "password": "87654321"},
        headers=admin_headers,
    )
    assert r.status_code == 202
    assert r.json()["payload"]["name"] == "Mona Lisa"

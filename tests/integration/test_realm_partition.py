import pytest

ADMIN_ONLY_ROUTES = [
    ("get", "/api/users"),
    ("post", "/api/users"),
    ("get", "/api/users/1"),
    ("put", "/api/users/1"),
    ("delete", "/api/users/1"),
    ("get", "/api/storages"),
    ("post", "/api/storages"),
    ("get", "/api/storages/1"),
    ("put", "/api/storages/1"),
    ("delete", "/api/storages/1"),
    ("get", "/api/items"),
    ("post", "/api/items"),
    ("get", "/api/items/1"),
    ("put", "/api/items/1"),
    ("delete", "/api/items/1"),
    ("post", "/api/admins/auth/logout"),
]

USER_ONLY_ROUTES = [
    ("post", "/api/users/items"),
    ("post", "/api/users/auth/logout"),
]

UNAUTHENTICATED = {"msg": "Not Authenticated", "isSuccess": False, "statusCode": 401, "payload": None}


def _call(client, method, path, headers=None):
    return client.request(method.upper(), path, json={}, headers=headers or {})


@pytest.mark.parametrize("method,path", ADMIN_ONLY_ROUTES + USER_ONLY_ROUTES)
def test_no_token_is_rejected(client, method, path):
    r = _call(client, method, path)
    assert r.status_code == 401
    assert r.json() == UNAUTHENTICATED


@pytest.mark.parametrize("method,path", ADMIN_ONLY_ROUTES)
def test_user_token_never_reaches_admin_routes(client, user_headers, method, path):
    r = _call(client, method, path, user_headers)
    assert r.status_code == 401
    assert r.json() == UNAUTHENTICATED


@pytest.mark.parametrize("method,path", USER_ONLY_ROUTES)
def test_admin_token_never_reaches_user_routes(client, admin_headers, method, path):
    r = _call(client, method, path, admin_headers)
    assert r.status_code == 401
    assert r.json() == UNAUTHENTICATED


@pytest.mark.parametrize(
    "header",
    [
        "Bearer",
        "Bearer garbage",
        "Token skt_abc_def",
        "Bearer skt_0000000000000000_secret",
    ],
)
def test_malformed_or_unknown_tokens(client, header):
    r = client.get("/api/users", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json() == UNAUTHENTICATED


def test_auth_precedes_not_found(client, user_headers):
    # Even a nonexistent resource answers 401 to the wrong realm
    r = client.get("/api/items/1000", headers=user_headers)
    assert r.status_code == 401


def test_public_routes_need_no_token(client):
    assert client.get("/api/health").status_code == 200
    assert client.post("/api/users/auth/login", json={}).status_code == 422
    assert client.post("/api/admins/auth/register", json={}).status_code == 422


def test_auth_precedes_body_parsing(client):
    r = client.post("/api/items", content="{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 401

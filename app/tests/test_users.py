import uuid

USERS = "/api/v1/users"


def _email():
    return f"managed-{uuid.uuid4().hex[:10]}@fleet.io"


def test_admin_routes_reject_users(client, make_user):
    alice = make_user()
    assert client.get(USERS).status_code == 401
    assert client.get(USERS, headers=alice["headers"]).status_code == 403
    response = client.post(USERS, json={"email": _email(), "password": "password1"}, headers=alice["headers"])
    assert response.status_code == 403
    assert client.delete(f"{USERS}/{alice['id']}", headers=alice["headers"]).status_code == 403


def test_admin_lists_and_creates_users(client, admin):
    email = _email()
    response = client.post(USERS, json={"email": email, "password": "password1"}, headers=admin["headers"])
    assert response.status_code == 201
    created = response.json()["responseObject"]
    assert created["email"] == email
    assert created["role"] == "USER"

    response = client.post(USERS, json={"email": email, "password": "password1"}, headers=admin["headers"])
    assert response.status_code == 409

    response = client.get(USERS, headers=admin["headers"])
    assert response.status_code == 200
    assert email in [u["email"] for u in response.json()["responseObject"]]


def test_user_reads_only_own_profile(client, admin, make_user):
    alice, bob = make_user(), make_user()
    response = client.get(f"{USERS}/{alice['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["responseObject"]["email"] == alice["email"]

    assert client.get(f"{USERS}/{bob['id']}", headers=alice["headers"]).status_code == 403
    assert client.get(f"{USERS}/{bob['id']}", headers=admin["headers"]).status_code == 200
    assert client.get(f"{USERS}/999999", headers=admin["headers"]).status_code == 404


def test_user_cannot_change_own_role(client, make_user):
    alice = make_user()
    response = client.patch(f"{USERS}/{alice['id']}", json={"role": "ADMIN"}, headers=alice["headers"])
    assert response.status_code == 403


def test_user_updates_own_credentials(client, make_user, login):
    alice, bob = make_user(), make_user()
    new_email = _email()

    response = client.patch(f"{USERS}/{alice['id']}", json={"email": bob["email"]}, headers=alice["headers"])
    assert response.status_code == 409

    response = client.patch(
        f"{USERS}/{alice['id']}",
        json={"email": new_email, "password": "newpassword2"},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    assert response.json()["responseObject"]["email"] == new_email

    session = login(new_email, "newpassword2")
    assert session["id"] == alice["id"]


def test_admin_promotes_user(client, admin, make_user):
    alice = make_user()
    response = client.patch(f"{USERS}/{alice['id']}", json={"role": "ADMIN"}, headers=admin["headers"])
    assert response.status_code == 200
    assert response.json()["responseObject"]["role"] == "ADMIN"


def test_delete_user_cascades(client, admin, make_user, make_vehicle):
    alice = make_user()
    vehicle = make_vehicle(alice["headers"])

    response = client.delete(f"{USERS}/{alice['id']}", headers=admin["headers"])
    assert response.status_code == 200

    assert client.get(f"{USERS}/{alice['id']}", headers=admin["headers"]).status_code == 404
    assert client.get(f"/api/v1/vehicles/detail/{vehicle['id']}", headers=admin["headers"]).status_code == 404
    assert client.post("/api/v1/auth/refresh", headers={"x-refresh-token": alice["refresh"]}).status_code == 401
    assert client.delete(f"{USERS}/{alice['id']}", headers=admin["headers"]).status_code == 404


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/v1/no-existe")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Not Found",
        "responseObject": None,
        "statusCode": 404,
    }


def test_health_check(client):
    response = client.get("/api/v1/health-check")
    assert response.status_code == 200
    assert response.json()["success"] is True

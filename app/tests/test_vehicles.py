import uuid

VEHICLES = "/api/v1/vehicles"
TELEMETRY = "/api/v1/telemetry-logs"


def test_vehicle_routes_require_token(client):
    response = client.get(f"{VEHICLES}/all")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 401


def test_create_vehicle_binds_owner(client, make_user):
    alice, bob = make_user(), make_user()
    response = client.post(
        VEHICLES,
        json={"name": "Pickup", "license_plate": f"A{uuid.uuid4().hex[:6]}", "user_id": bob["id"]},
        headers=alice["headers"],
    )
    assert response.status_code == 201
    vehicle = response.json()["responseObject"]
    # Un USER no puede asignar el vehículo a otro usuario
    assert vehicle["user_id"] == alice["id"]
    assert vehicle["status"] == "INACTIVE"
    assert vehicle["deleted_at"] is None
    assert vehicle["created_at"].endswith(("Z", "+00:00"))


def test_admin_can_create_for_other_user(client, admin, make_user, make_vehicle):
    bob = make_user()
    vehicle = make_vehicle(admin["headers"], user_id=bob["id"])
    assert vehicle["user_id"] == bob["id"]

    response = client.post(
        VEHICLES,
        json={"name": "Ghost", "license_plate": f"G{uuid.uuid4().hex[:6]}", "user_id": 999999},
        headers=admin["headers"],
    )
    assert response.status_code == 404


def test_duplicate_license_plate(client, make_user, make_vehicle):
    alice = make_user()
    vehicle = make_vehicle(alice["headers"])
    response = client.post(
        VEHICLES,
        json={"name": "Copia", "license_plate": vehicle["license_plate"]},
        headers=alice["headers"],
    )
    assert response.status_code == 409


def test_invalid_vehicle_body(client, make_user):
    alice = make_user()
    response = client.post(VEHICLES, json={"name": "ab", "license_plate": "X1"}, headers=alice["headers"])
    assert response.status_code == 400
    response = client.post(VEHICLES, json={"name": "Camion", "license_plate": "X2", "status": "FLYING"}, headers=alice["headers"])
    assert response.status_code == 400


def test_ownership_on_vehicle_detail(client, admin, make_user, make_vehicle):
    alice, bob = make_user(), make_user()
    vehicle = make_vehicle(bob["headers"])

    response = client.get(f"{VEHICLES}/detail/{vehicle['id']}", headers=alice["headers"])
    assert response.status_code == 403

    response = client.get(f"{VEHICLES}/detail/{vehicle['id']}", headers=admin["headers"])
    assert response.status_code == 200
    detail = response.json()["responseObject"]
    assert detail["id"] == vehicle["id"]
    assert detail["latestTelemetry"] is None

    assert client.get(f"{VEHICLES}/detail/{vehicle['id']}", headers=bob["headers"]).status_code == 200


def test_vehicle_not_found(client, make_user):
    alice = make_user()
    assert client.get(f"{VEHICLES}/detail/999999", headers=alice["headers"]).status_code == 404
    assert client.patch(f"{VEHICLES}/999999", json={"name": "Nuevo"}, headers=alice["headers"]).status_code == 404
    assert client.delete(f"{VEHICLES}/999999", headers=alice["headers"]).status_code == 404


def test_latest_telemetry_flattened(client, make_user, make_vehicle, telemetry_payload):
    alice = make_user()
    vehicle = make_vehicle(alice["headers"])

    response = client.get(f"{VEHICLES}/{vehicle['id']}", headers=alice["headers"])
    assert response.status_code == 404

    client.post(f"{TELEMETRY}/{vehicle['id']}/vehicles", json=telemetry_payload(speed=61), headers=alice["headers"])

    response = client.get(f"{VEHICLES}/{vehicle['id']}", headers=alice["headers"])
    assert response.status_code == 200
    flat = response.json()["responseObject"]
    assert flat["vehicleId"] == vehicle["id"]
    assert flat["speed"] == 61
    assert flat["latitude"] == -6.2
    assert flat["longitude"] == 106.8
    assert flat["fuel_level"] == 55.5
    assert flat["odometer"] == 12000
    assert flat["timestamp"]


def test_list_is_scoped_and_paginated(client, admin, make_user, make_vehicle):
    alice, bob = make_user(), make_user()
    for i in range(3):
        make_vehicle(alice["headers"], name=f"Alice car {i}")
    bob_vehicle = make_vehicle(bob["headers"])

    response = client.get(f"{VEHICLES}/all", params={"page": 1, "limit": 2}, headers=alice["headers"])
    assert response.status_code == 200
    payload = response.json()["responseObject"]
    assert payload["pagination"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}
    assert len(payload["data"]) == 2
    assert all(v["user_id"] == alice["id"] for v in payload["data"])
    assert all("latestTelemetry" in v for v in payload["data"])
    # Más recientes primero
    assert payload["data"][0]["name"] == "Alice car 2"

    second_page = client.get(f"{VEHICLES}/all", params={"page": 2, "limit": 2}, headers=alice["headers"])
    assert len(second_page.json()["responseObject"]["data"]) == 1

    ids = [v["id"] for v in client.get(f"{VEHICLES}/all", params={"limit": 100}, headers=admin["headers"]).json()["responseObject"]["data"]]
    assert bob_vehicle["id"] in ids


def test_list_filters(client, make_user, make_vehicle):
    alice = make_user()
    make_vehicle(alice["headers"], name="Water Tanker", status="MAINTENANCE")
    make_vehicle(alice["headers"], name="Sweeper", status="ACTIVE")

    response = client.get(f"{VEHICLES}/all", params={"search": "tank"}, headers=alice["headers"])
    names = [v["name"] for v in response.json()["responseObject"]["data"]]
    assert names == ["Water Tanker"]

    response = client.get(f"{VEHICLES}/all", params={"status": "ACTIVE"}, headers=alice["headers"])
    names = [v["name"] for v in response.json()["responseObject"]["data"]]
    assert names == ["Sweeper"]

    response = client.get(f"{VEHICLES}/all", params={"limit": 0}, headers=alice["headers"])
    assert response.status_code == 400


def test_summary_includes_latest_speed(client, make_user, make_vehicle, telemetry_payload):
    alice = make_user()
    with_logs = make_vehicle(alice["headers"], name="Con telemetria")
    without_logs = make_vehicle(alice["headers"], name="Sin telemetria")
    client.post(f"{TELEMETRY}/{with_logs['id']}/vehicles", json=telemetry_payload(speed=33), headers=alice["headers"])

    response = client.get(VEHICLES, headers=alice["headers"])
    assert response.status_code == 200
    summary = {row["id"]: row for row in response.json()["responseObject"]}
    assert summary[with_logs["id"]]["speed"] == 33
    assert summary[without_logs["id"]]["speed"] is None
    assert set(summary[with_logs["id"]]) == {"id", "name", "status", "speed", "updated_at"}


def test_update_vehicle(client, admin, make_user, make_vehicle):
    alice, bob = make_user(), make_user()
    vehicle = make_vehicle(alice["headers"])
    other = make_vehicle(alice["headers"])

    response = client.patch(f"{VEHICLES}/{vehicle['id']}", json={"name": "Renombrado", "user_id": bob["id"]}, headers=alice["headers"])
    assert response.status_code == 200
    updated = response.json()["responseObject"]
    assert updated["name"] == "Renombrado"
    assert updated["user_id"] == alice["id"]

    response = client.patch(f"{VEHICLES}/{vehicle['id']}", json={"license_plate": other["license_plate"]}, headers=alice["headers"])
    assert response.status_code == 409

    assert client.patch(f"{VEHICLES}/{vehicle['id']}", json={"name": "Robado"}, headers=bob["headers"]).status_code == 403

    response = client.patch(f"{VEHICLES}/{vehicle['id']}", json={"user_id": bob["id"]}, headers=admin["headers"])
    assert response.status_code == 200
    assert response.json()["responseObject"]["user_id"] == bob["id"]


def test_soft_delete(client, make_user, make_vehicle):
    alice, bob = make_user(), make_user()
    vehicle = make_vehicle(alice["headers"])

    assert client.delete(f"{VEHICLES}/{vehicle['id']}", headers=bob["headers"]).status_code == 403

    response = client.delete(f"{VEHICLES}/{vehicle['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get(f"{VEHICLES}/detail/{vehicle['id']}", headers=alice["headers"]).status_code == 404
    listing = client.get(f"{VEHICLES}/all", headers=alice["headers"]).json()["responseObject"]
    assert vehicle["id"] not in [v["id"] for v in listing["data"]]

    # La placa sigue reservada por el registro borrado
    response = client.post(VEHICLES, json={"name": "Otra vez", "license_plate": vehicle["license_plate"]}, headers=alice["headers"])
    assert response.status_code == 409

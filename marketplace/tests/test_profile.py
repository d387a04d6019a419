"""Tests of the profile endpoint"""

URL = "/api/v1/profile"


def test_requires_authentication(client):
    response = client.get(URL)
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Authentication required"}


def test_invalid_token(client):
    response = client.get(URL, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_get_profile(client, auth_headers, test_user):
    response = client.get(URL, headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == test_user.email
    assert user["full_name"] == "Test User"
    assert user["account_number"] == str(10000 + test_user.id)
    assert user["member_since"] == "Jan 01, 2024"


def test_unknown_action(client, auth_headers):
    response = client.get(URL, params={"action": "teleport"}, headers=auth_headers)
    assert response.status_code == 400


def test_action_with_wrong_verb(client, auth_headers):
    response = client.post(URL, json={"action": "delete_address", "id": 1}, headers=auth_headers)
    assert response.status_code == 405
    assert response.json()["success"] is False


def test_missing_action_in_body(client, auth_headers):
    response = client.post(URL, json={}, headers=auth_headers)
    assert response.status_code == 400


def test_address_lifecycle(client, auth_headers, address_payload):
    first = client.post(
        URL, json={"action": "add_address", **address_payload(is_default=False)},
        headers=auth_headers,
    )
    assert first.status_code == 200
    home = first.json()["data"]["address"]
    assert home["is_default"] is True
    assert home["phone"] == "+265 991 000 001"

    second = client.post(
        URL, json={"action": "add_address", **address_payload("Work")},
        headers=auth_headers,
    )
    work = second.json()["data"]["address"]
    assert work["is_default"] is False

    moved = client.put(
        URL, json={"action": "set_default_address", "address_id": work["id"]},
        headers=auth_headers,
    )
    assert moved.status_code == 200
    assert moved.json()["data"]["address"]["is_default"] is True

    listing = client.get(URL, params={"action": "addresses"}, headers=auth_headers)
    addresses = listing.json()["data"]["addresses"]
    assert [a["label"] for a in addresses if a["is_default"]] == ["Work"]

    deleted = client.request(
        "DELETE", URL, json={"action": "delete_address", "id": work["id"]},
        headers=auth_headers,
    )
    assert deleted.status_code == 200
    assert deleted.json()["data"]["new_default"]["id"] == home["id"]


def test_add_address_validation(client, auth_headers, address_payload):
    response = client.post(
        URL, json={"action": "add_address", **address_payload(phone="abc")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "phone" in response.json()["message"]

    missing = address_payload()
    del missing["city"]
    response = client.post(
        URL, json={"action": "add_address", **missing}, headers=auth_headers
    )
    assert response.status_code == 400


def test_other_users_address_is_not_found(
    client, auth_headers_user2, address_book
):
    response = client.put(
        URL,
        json={"action": "set_default_address", "id": address_book["B"].id},
        headers=auth_headers_user2,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Address not found"


def test_update_address(client, auth_headers, address_book):
    response = client.put(
        URL,
        json={"action": "update_address", "id": address_book["C"].id, "landmark": "Old Mosque"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    address = response.json()["data"]["address"]
    assert address["landmark"] == "Old Mosque"
    assert address["short_address"] == "Near Old Mosque, Lilongwe"


def test_update_profile(client, auth_headers):
    response = client.post(
        URL,
        json={
            "action": "update_profile",
            "full_name": "  New Name ",
            "email": "new@example.com",
            "phone": "+265 (991) 555-777",
            "city": "Zomba",
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["full_name"] == "New Name"
    assert user["phone"] == "+265991555777"
    assert user["city"] == "Zomba"


def test_update_profile_conflicting_email(client, auth_headers, test_user2):
    response = client.post(
        URL,
        json={"action": "update_profile", "full_name": "X", "email": test_user2.email},
        headers=auth_headers,
    )
    assert response.status_code == 409


def test_update_profile_invalid_email(client, auth_headers):
    response = client.post(
        URL,
        json={"action": "update_profile", "full_name": "X", "email": "nope"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_change_password(client, auth_headers):
    wrong = client.post(
        URL,
        json={
            "action": "change_password",
            "current_password": "bad",
            "new_password": "newpass1",
            "confirm_password": "newpass1",
        },
        headers=auth_headers,
    )
    assert wrong.status_code == 401

    mismatch = client.post(
        URL,
        json={
            "action": "change_password",
            "current_password": "testpass123",
            "new_password": "newpass1",
            "confirm_password": "newpass2",
        },
        headers=auth_headers,
    )
    assert mismatch.status_code == 400

    ok = client.post(
        URL,
        json={
            "action": "change_password",
            "current_password": "testpass123",
            "new_password": "newpass1",
            "confirm_password": "newpass1",
        },
        headers=auth_headers,
    )
    assert ok.status_code == 200

    login = client.post(
        "/api/v1/auth/login", json={"email": "test@example.com", "password": "newpass1"}
    )
    assert login.status_code == 200


def test_orders_newest_first(client, auth_headers, test_orders):
    response = client.get(URL, params={"action": "orders"}, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert [o["order_number"] for o in data["orders"]] == ["ORD-002", "ORD-001"]
    assert data["total"] == 2
    assert data["orders"][0]["merchant_name"] == "DropX Store"
    assert data["orders"][1]["merchant_name"] == "Brew House"
    assert data["orders"][1]["items"] == [{"product": "Latte", "qty": 2}]


def test_orders_status_filter_and_paging(client, auth_headers, test_orders):
    response = client.get(
        URL, params={"action": "orders", "status": "delivered"}, headers=auth_headers
    )
    assert [o["order_number"] for o in response.json()["data"]["orders"]] == ["ORD-001"]

    paged = client.get(
        URL, params={"action": "orders", "limit": 1, "offset": 1}, headers=auth_headers
    )
    data = paged.json()["data"]
    assert data["count"] == 1
    assert data["total"] == 2


def test_orders_huge_offset_returns_empty_page(client, auth_headers, test_orders):
    response = client.get(
        URL, params={"action": "orders", "offset": "1e30"}, headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["orders"] == []
    assert data["total"] == 2


def test_stats(client, auth_headers, test_orders):
    response = client.get(URL, params={"action": "stats"}, headers=auth_headers)
    stats = response.json()["data"]["stats"]
    assert stats["total_orders"] == 2
    assert stats["total_spent"] == 30.0
    assert stats["avg_order_value"] == 15.0

"""
tests/test_strict_mutations.py -- PUT/DELETE on a missing id with STRICT_MUTATIONS on.

The default behaviour (success on a missing id) is covered in
test_api_routes.py; this module runs its own app instance with the strict
catalog service wired in.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

PEARS = {"name": "Pears", "category": "Fruit", "price": 50, "quantity": 10}


def test_update_missing_id_is_404(strict_client: tuple[TestClient, str, str]) -> None:
    client, admin_token, _user = strict_client
    resp = client.put("/api/products/999999", json=PEARS, headers={"Authorization": f"Bearer {admin_token}"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "not_found"


def test_delete_missing_id_is_404(strict_client: tuple[TestClient, str, str]) -> None:
    client, admin_token, _user = strict_client
    resp = client.delete("/api/products/999999", headers={"Authorization": f"Bearer {admin_token}"})
    assert resp.status_code == 404


def test_existing_id_unaffected(strict_client: tuple[TestClient, str, str]) -> None:
    client, admin_token, _user = strict_client
    headers = {"Authorization": f"Bearer {admin_token}"}
    item_id = client.post("/api/products", json=PEARS, headers=headers).json()["id"]
    assert client.put(f"/api/products/{item_id}", json=PEARS, headers=headers).status_code == 200
    assert client.delete(f"/api/products/{item_id}", headers=headers).status_code == 204


def test_permission_still_checked_first(strict_client: tuple[TestClient, str, str]) -> None:
    client, _admin, user_token = strict_client
    resp = client.delete("/api/products/999999", headers={"Authorization": f"Bearer {user_token}"})
    assert resp.status_code == 403

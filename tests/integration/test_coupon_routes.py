"""HTTP tests for the coupon endpoints."""

import pytest


def _payload(**overrides) -> dict:
    payload = {
        "code": "SAVE10",
        "discountPercent": 10,
        "usageLimit": 100,
        "startDate": "2025-01-01T00:00:00Z",
        "endDate": "2099-01-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload


class TestCouponRoutes:
    def test_create_and_list(self, client, admin_headers):
        created = client.post("/api/coupon", json=_payload(), headers=admin_headers)

        assert created.status_code == 201, created.text
        coupon = created.json()["coupon"]
        assert coupon["code"] == "SAVE10"
        assert coupon["usageCount"] == 0
        assert coupon["status"] == "Active"

        listed = client.get("/api/coupon", headers=admin_headers)
        assert listed.status_code == 200
        body = listed.json()
        assert body["success"] is True
        assert [c["id"] for c in body["couponList"]] == [coupon["id"]]

    def test_expired_coupon_status(self, client, admin_headers):
        client.post(
            "/api/coupon",
            json=_payload(startDate="2020-01-01T00:00:00Z", endDate="2020-02-01T00:00:00Z"),
            headers=admin_headers,
        )

        body = client.get("/api/coupon", headers=admin_headers).json()
        assert body["couponList"][0]["status"] == "Expired"

    def test_duplicate_code_conflicts(self, client, admin_headers):
        assert client.post("/api/coupon", json=_payload(), headers=admin_headers).status_code == 201

        response = client.post("/api/coupon", json=_payload(), headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["success"] is False
        assert "already exists" in response.json()["message"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"discountPercent": 0},
            {"usageLimit": 0},
            {"endDate": "2024-01-01T00:00:00Z"},
            {"code": ""},
        ],
    )
    def test_invalid_payload(self, client, admin_headers, overrides):
        response = client.post(
            "/api/coupon", json=_payload(**overrides), headers=admin_headers
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request"

    def test_delete(self, client, admin_headers):
        coupon_id = client.post(
            "/api/coupon", json=_payload(), headers=admin_headers
        ).json()["coupon"]["id"]

        response = client.delete(f"/api/coupon/{coupon_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Coupon deleted successfully!"}
        assert client.get("/api/coupon", headers=admin_headers).json()["couponList"] == []

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/coupon/does-not-exist", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Coupon not found!"}

    @pytest.mark.parametrize(
        ("method", "path"),
        [("get", "/api/coupon"), ("delete", "/api/coupon/any")],
    )
    def test_admin_only(self, client, user_headers, method, path):
        response = getattr(client, method)(path, headers=user_headers)
        assert response.status_code == 403

    def test_requires_authentication(self, client):
        assert client.get("/api/coupon").status_code == 401

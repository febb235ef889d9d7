"""
Tests for API key authentication and key management endpoints.
"""

import pytest


PROTECTED = [
    "/v1/accounts",
    "/v1/categories",
    "/v1/transactions",
    "/v1/summary",
    "/v1/stocks",
    "/v1/api-keys",
]


class TestApiKeyHeader:

    @pytest.mark.parametrize("path", PROTECTED)
    def test_missing_key_returns_401(self, client, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing API Key"

    @pytest.mark.parametrize("path", PROTECTED)
    def test_invalid_key_returns_401(self, client, path):
        response = client.get(path, headers={"x-api-key": "ft_bogus"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API Key"

    def test_valid_key_accepted(self, client, auth_headers):
        response = client.get("/v1/accounts", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_last_used_is_stamped(self, client, auth_headers):
        client.get("/v1/accounts", headers=auth_headers)

        keys = client.get("/v1/api-keys", headers=auth_headers).json()
        assert keys[0]["last_used_at"] is not None


class TestKeyManagement:

    def test_mint_and_use_new_key(self, client, auth_headers):
        response = client.post(
            "/v1/api-keys", json={"name": "cron job"}, headers=auth_headers
        )
        assert response.status_code == 201
        raw_key = response.json()["raw_key"]

        assert client.get(
            "/v1/accounts", headers={"x-api-key": raw_key}
        ).status_code == 200

    def test_listing_never_exposes_raw_key(self, client, auth_headers):
        keys = client.get("/v1/api-keys", headers=auth_headers).json()
        assert "raw_key" not in keys[0]
        assert "key_hash" not in keys[0]

    def test_revoke_key(self, client, auth_headers):
        minted = client.post(
            "/v1/api-keys", json={"name": "temp"}, headers=auth_headers
        ).json()

        response = client.delete(
            f"/v1/api-keys/{minted['id']}", headers=auth_headers
        )
        assert response.status_code == 204

        response = client.get(
            "/v1/accounts", headers={"x-api-key": minted["raw_key"]}
        )
        assert response.status_code == 401

"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /merkle/roots stores an allowlist and is idempotent
3. GET /merkle/proof returns a verifiable proof, null when not listed,
   404 for unknown roots
4. POST /merkle/trees validates type and schema
5. GET /merkle/trees/{root} and the recipients proof route
6. POST /merkle/verify
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.config.runtime import DatabaseConfig, RuntimeConfig

from fixtures.common import make_address, make_allowlist_data, make_recipients_data, make_root, sqlite_url


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def client(tmp_path):
    """TestClient over an app with its own SQLite file; runs the lifespan."""
    config = RuntimeConfig(database=DatabaseConfig(url=sqlite_url(tmp_path / "api.db")))
    with TestClient(create_app(config)) as test_client:
        yield test_client


def _create_root(client, data) -> str:
    response = client.post("/merkle/roots", json={"data": data})
    assert response.status_code == 200, response.text
    return response.json()["result"]["merkleRoot"]


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for liveness endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        body = response.json()
        assert response.status_code == 200
        assert body["ok"] is True
        assert body["ready"] is True
        assert body["odd_node_policy"] == "promote"

    def test_root_path(self, client):
        assert client.get("/").json()["ok"] is True


# =============================================================================
# Roots and Proofs
# =============================================================================

class TestMerkleRoots:
    """Tests for POST /merkle/roots and GET /merkle/proof."""

    def test_create_root(self, client):
        response = client.post("/merkle/roots", json={"data": make_allowlist_data(3)})
        body = response.json()
        assert response.status_code == 200
        assert body["ok"] is True
        assert body["result"]["success"] is True
        assert body["result"]["merkleRoot"].startswith("0x")
        assert len(body["result"]["merkleRoot"]) == 66
        assert "merkle_root" not in body["result"]

    def test_create_root_idempotent(self, client):
        data = make_allowlist_data(3)
        assert _create_root(client, data) == _create_root(client, list(reversed(data)))

    def test_empty_data(self, client):
        response = client.post("/merkle/roots", json={"data": []})
        body = response.json()
        assert response.status_code == 400
        assert body["ok"] is False
        assert body["error"]["code"] == "EMPTY_DATA"
        assert body["error"]["message"] == "The length of data cannot be 0."

    def test_invalid_entry(self, client):
        response = client.post("/merkle/roots", json={"data": [{"address": "0x1", "amount": "1"}]})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ENTRY"

    def test_proof(self, client):
        data = make_allowlist_data(5)
        root = _create_root(client, data)

        response = client.get("/merkle/proof", params={"address": data[1]["address"], "merkle_root": root})
        body = response.json()
        assert response.status_code == 200
        assert body["result"]["address"] == data[1]["address"]
        assert body["result"]["amount"] == "10"
        assert body["result"]["usable"] == 10

        verify = client.post(
            "/merkle/verify",
            json={
                "merkle_root": root,
                "type": "recipientAmount",
                "entry": data[1],
                "proof": body["result"]["proof"],
            },
        )
        assert verify.json()["valid"] is True

    def test_proof_not_listed(self, client):
        root = _create_root(client, make_allowlist_data(2))
        response = client.get("/merkle/proof", params={"address": make_address(999), "merkle_root": root})
        assert response.status_code == 200
        assert response.json()["result"] is None

    def test_proof_unknown_root(self, client):
        response = client.get(
            "/merkle/proof",
            params={"address": make_address(1), "merkle_root": make_root(42)},
        )
        body = response.json()
        assert response.status_code == 404
        assert body["error"]["code"] == "UNKNOWN_ROOT"
        assert body["error"]["message"] == "Invalid Merkle Tree"

    def test_proof_collection_without_contract(self, client):
        data = make_allowlist_data(2)
        root = _create_root(client, data)
        response = client.get(
            "/merkle/proof",
            params={
                "address": data[0]["address"],
                "merkle_root": root,
                "collection_address": make_address(0xBEEF),
            },
        )
        assert response.json()["result"]["usable"] == -1


# =============================================================================
# General Trees
# =============================================================================

class TestMerkleTrees:
    """Tests for /merkle/trees routes."""

    def test_create_and_get(self, client):
        data = make_recipients_data(3)
        created = client.post("/merkle/trees", json={"type": "recipients", "data": data})
        assert created.status_code == 200
        result = created.json()["result"]
        assert result["type"] == "recipients"
        assert result["data"] == data

        fetched = client.get(f"/merkle/trees/{result['merkleRoot']}")
        assert fetched.status_code == 200
        assert fetched.json()["result"]["id"] == result["id"]

    def test_invalid_type(self, client):
        response = client.post("/merkle/trees", json={"type": "whitelist", "data": make_allowlist_data(1)})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid type provided."

    def test_schema_mismatch(self, client):
        response = client.post("/merkle/trees", json={"type": "recipients", "data": make_allowlist_data(1)})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid data provided."

    def test_get_missing_tree(self, client):
        response = client.get(f"/merkle/trees/{make_root(8)}")
        assert response.status_code == 404
        assert response.json()["ok"] is False

    def test_recipient_proof(self, client):
        data = make_recipients_data(4)
        root = client.post("/merkle/trees", json={"type": "recipients", "data": data}).json()["result"]["merkleRoot"]

        response = client.get(
            f"/merkle/trees/{root}/recipients",
            params={"collection": data[2]["collection"], "token_id": data[2]["tokenId"]},
        )
        body = response.json()
        assert response.status_code == 200
        assert body["result"]["quantity"] == data[2]["quantity"]

        verify = client.post(
            "/merkle/verify",
            json={"merkle_root": root, "type": "recipients", "entry": data[2], "proof": body["result"]["proof"]},
        )
        assert verify.json()["valid"] is True


class TestVerify:
    """Tests for POST /merkle/verify."""

    def test_forged_entry_invalid(self, client):
        data = make_allowlist_data(3)
        root = _create_root(client, data)
        response = client.post(
            "/merkle/verify",
            json={
                "merkle_root": root,
                "entry": {"address": data[0]["address"], "amount": "1000"},
                "proof": [],
            },
        )
        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_unknown_type(self, client):
        response = client.post(
            "/merkle/verify",
            json={"merkle_root": make_root(1), "type": "bogus", "entry": {}, "proof": []},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TYPE"

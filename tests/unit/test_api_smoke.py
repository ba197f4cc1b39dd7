"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /init publishes the root once (409 on the second call)
3. POST /can_claim and POST /claim follow the claim lifecycle
4. Rejections map to 409, a missing caller to 400
5. POST /verify is total: malformed input yields valid=false
"""

import pytest
from fastapi.testclient import TestClient

from airdrop.config.runtime import RuntimeConfig
from airdrop.crypto.hashing import to_hex
from airdrop_api.app import create_app


def _claim_body(distribution, account_id: str, amount=None) -> dict:
    claim = distribution.get_claim(account_id).model_dump(mode="json")
    return {
        "account_id": account_id,
        "amount": claim["amount"] if amount is None else amount,
        "proof": claim["proof"],
    }


@pytest.fixture
def client():
    """Client for an app with an uninitialized contract."""
    return TestClient(create_app(RuntimeConfig()))


@pytest.fixture
def live_client(distribution):
    """Client for an app whose contract was initialized from config."""
    config = RuntimeConfig.from_dict({"contract": {"root_hash": distribution.root}})
    return TestClient(create_app(config))


class TestHealth:
    """Tests for GET /health."""

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "merkle-airdrop-api", "version": "v1"}

    def test_root_path(self, client):
        assert client.get("/").json()["ok"] is True


class TestInit:
    """Tests for POST /init and GET /state."""

    def test_state_uninitialized(self, client):
        state = client.get("/state").json()

        assert state["initialized"] is False
        assert state["root"] is None
        assert state["hasher"] == "sha256"

    def test_init_then_state(self, client, distribution):
        response = client.post("/init", json={"root_hash": distribution.root, "owner": "dao.near"})

        assert response.status_code == 200
        assert response.json()["root"] == distribution.root
        assert client.get("/state").json()["owner"] == "dao.near"

    def test_init_twice_conflict(self, client, distribution):
        body = {"root_hash": distribution.root, "owner": "dao.near"}
        client.post("/init", json=body)

        response = client.post("/init", json=body)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALREADY_INITIALIZED"
        assert response.json()["error"]["message"] == "AirdropContract: already initialized"

    def test_init_bad_root(self, client):
        response = client.post("/init", json={"root_hash": "0x1234", "owner": "dao.near"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_init_bad_owner(self, client, distribution):
        response = client.post("/init", json={"root_hash": distribution.root, "owner": "Bad Owner"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ENTITLEMENT_ENCODING_ERROR"

    def test_auto_init_from_config(self, live_client, distribution):
        state = live_client.get("/state").json()

        assert state["initialized"] is True
        assert state["root"] == distribution.root
        assert state["owner"] == "owner.near"


class TestClaimFlow:
    """Tests for POST /can_claim and POST /claim."""

    def test_can_claim_before_init(self, client, distribution):
        response = client.post("/can_claim", json=_claim_body(distribution, "alice.near"))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "NOT_INITIALIZED"

    def test_lifecycle(self, live_client, distribution):
        body = _claim_body(distribution, "alice.near")

        assert live_client.post("/can_claim", json=body).json()["can_claim"] is True

        claimed = live_client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Account-Id": "alice.near"},
        )
        assert claimed.status_code == 200
        receipt = claimed.json()["receipt"]
        assert receipt["account_id"] == "alice.near"
        assert receipt["amount"] == "100"
        assert receipt["root"] == distribution.root

        assert live_client.post("/can_claim", json=body).json()["can_claim"] is False
        assert live_client.get("/state").json()["claimed_count"] == 1

    def test_double_claim_conflict(self, live_client, distribution):
        body = _claim_body(distribution, "bob.near")
        payload = {"amount": body["amount"], "proof": body["proof"]}
        headers = {"X-Account-Id": "bob.near"}
        live_client.post("/claim", json=payload, headers=headers)

        response = live_client.post("/claim", json=payload, headers=headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALREADY_CLAIMED"

    def test_wrong_amount_conflict(self, live_client, distribution):
        body = _claim_body(distribution, "bob.near", amount="201")

        response = live_client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Account-Id": "bob.near"},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CLAIM_REJECTED"
        assert response.json()["error"]["message"].startswith("AirdropContract: can't claim")

    def test_missing_caller(self, live_client, distribution):
        body = _claim_body(distribution, "bob.near")

        response = live_client.post("/claim", json={"amount": body["amount"], "proof": body["proof"]})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CALLER"

    def test_malformed_proof(self, live_client, distribution):
        body = _claim_body(distribution, "carol.near")
        body["proof"][0]["sibling"] = "0xnot-hex"

        assert live_client.post("/can_claim", json=body).json()["can_claim"] is False

        response = live_client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Account-Id": "carol.near"},
        )
        assert response.status_code == 409

    def test_oversized_amount(self, live_client, distribution):
        body = _claim_body(distribution, "alice.near", amount="9" * 5000)

        response = live_client.post("/can_claim", json=body)
        assert response.status_code == 200
        assert response.json()["can_claim"] is False

        response = live_client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Account-Id": "alice.near"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CLAIM_REJECTED"

    def test_transfer_failure(self, distribution):
        config = RuntimeConfig.from_dict({
            "contract": {"root_hash": distribution.root, "transfer_pool": 10},
        })
        client = TestClient(create_app(config))
        body = _claim_body(distribution, "erin.near")

        response = client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Account-Id": "erin.near"},
        )

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "TRANSFER_FAILED"
        assert client.post("/can_claim", json=body).json()["can_claim"] is True

    def test_custom_caller_header(self, distribution):
        config = RuntimeConfig.from_dict({
            "contract": {"root_hash": distribution.root},
            "api": {"caller_header": "X-Caller"},
        })
        client = TestClient(create_app(config))
        body = _claim_body(distribution, "dave.near")

        response = client.post(
            "/claim",
            json={"amount": body["amount"], "proof": body["proof"]},
            headers={"X-Caller": "dave.near"},
        )

        assert response.status_code == 200


class TestVerifyEndpoint:
    """Tests for stateless POST /verify."""

    def _body(self, distribution, account_id: str) -> dict:
        claim = distribution.get_claim(account_id)
        return {
            "root": distribution.root,
            "leaf": to_hex(claim.entitlement.encode()),
            "proof": claim.model_dump(mode="json")["proof"],
            "hasher": distribution.hasher,
        }

    def test_valid(self, client, distribution):
        response = client.post("/verify", json=self._body(distribution, "alice.near"))

        assert response.status_code == 200
        assert response.json() == {"ok": True, "valid": True}

    def test_wrong_leaf(self, client, distribution):
        body = self._body(distribution, "alice.near")
        body["leaf"] = self._body(distribution, "bob.near")["leaf"]

        assert client.post("/verify", json=body).json()["valid"] is False

    @pytest.mark.parametrize("field,value", [
        ("root", "0x12"),
        ("root", "nothex"),
        ("leaf", "0xz"),
    ])
    def test_malformed_is_invalid(self, client, distribution, field, value):
        body = self._body(distribution, "alice.near")
        body[field] = value

        response = client.post("/verify", json=body)

        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_malformed_side_is_invalid(self, client, distribution):
        body = self._body(distribution, "alice.near")
        body["proof"][0]["side"] = "middle"

        assert client.post("/verify", json=body).json()["valid"] is False

    def test_unknown_hasher(self, client, distribution):
        body = self._body(distribution, "alice.near")
        body["hasher"] = "md5"

        response = client.post("/verify", json=body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

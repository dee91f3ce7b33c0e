from __future__ import annotations

from fastapi.testclient import TestClient

from wallet.api.app import create_app
from wallet.ledger.contract import TransferLedger
from wallet.ledger.errors import StoreError
from wallet.ledger.keys import from_key
from wallet.ledger.store import MemoryStateStore


def _client(store: MemoryStateStore | None = None) -> TestClient:
    ledger = TransferLedger(store=store if store is not None else MemoryStateStore())
    return TestClient(create_app(boot_runtime=False, ledger=ledger))


class _DownStore:
    def put(self, key: bytes, value: bytes) -> None:
        raise StoreError("world state unavailable")

    def get(self, key: bytes):
        raise StoreError("world state unavailable")


def test_health_reports_store() -> None:
    r = _client().get("/v1/health")
    assert r.status_code == 200
    j = r.json()
    assert j["ok"] is True
    assert j["ready"] is True
    assert j["store"] == "MemoryStateStore"


def test_seed_then_query_by_party() -> None:
    c = _client()
    assert c.post("/v1/ledger/init").json() == {"ok": True}

    r = c.get("/v1/records/from/李四")
    assert r.status_code == 200
    j = r.json()
    assert j["record"] == {
        "docType": "ledger",
        "from_pos": "李四",
        "to_pos": "赵五",
        "amount": "10",
        "transfer_time": "1548737871",
    }
    assert j["raw"].startswith('{"amount":"10"')

    r = c.get("/v1/records/to/李四")
    assert r.json()["record"]["from_pos"] == "赵五"


def test_create_record_and_query() -> None:
    c = _client()
    body = {"from_pos": "alice", "to_pos": "bob", "amount": "7.25", "transfer_time": "1700000000"}
    r = c.post("/v1/records", json=body)
    assert r.status_code == 201
    assert c.get("/v1/records/to/bob").json()["record"]["amount"] == "7.25"


def test_create_record_requires_all_fields() -> None:
    r = _client().post("/v1/records", json={"from_pos": "alice"})
    assert r.status_code == 422


def test_unknown_party_is_404() -> None:
    r = _client().get("/v1/records/from/unknown_party")
    assert r.status_code == 404
    j = r.json()
    assert j["ok"] is False
    assert j["error"]["code"] == "not_found"
    assert j["error"]["message"] == "unknown_party does not exist"


def test_simple_key_routes() -> None:
    c = _client()
    body = {"from_pos": "李四", "to_pos": "张三", "amount": "100", "transfer_time": "20191031"}
    assert c.put("/v1/records/key/RECORD0", json=body).status_code == 201
    assert c.get("/v1/records/key/RECORD0").json()["record"]["to_pos"] == "张三"
    assert c.get("/v1/records/key/RECORD9").status_code == 404


def test_corrupt_record_is_500_codec_error() -> None:
    st = MemoryStateStore()
    st.put(from_key("mallory"), b"{broken")
    r = _client(st).get("/v1/records/from/mallory")
    assert r.status_code == 500
    assert r.json()["error"]["code"] == "codec_error"
    assert r.json()["error"]["details"]["reason"] == "invalid_json"


def test_store_failure_is_503() -> None:
    c = TestClient(create_app(boot_runtime=False, ledger=TransferLedger(store=_DownStore())))
    r = c.get("/v1/records/from/alice")
    assert r.status_code == 503
    assert r.json()["error"]["code"] == "store_unavailable"


def test_invoke_endpoint() -> None:
    c = _client()
    assert c.post("/v1/invoke", json={"fn": "initLedger"}).json()["result"] is None

    r = c.post("/v1/invoke", json={"fn": "queryTransferRecordByFrom", "args": ["赵五"]})
    assert r.status_code == 200
    assert '"amount":"30"' in r.json()["result"]

    r = c.post("/v1/invoke", json={"fn": "queryRecord", "args": []})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Incorrect number of arguments. Expecting 1"

    r = c.post("/v1/invoke", json={"fn": "transfer", "args": []})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "unknown_operation"


def test_routes_503_without_ledger() -> None:
    c = TestClient(create_app(boot_runtime=False))
    r = c.get("/v1/records/from/alice")
    assert r.status_code == 503
    assert r.json()["error"]["code"] == "not_ready"
    assert c.get("/v1/health").json()["ready"] is False


def test_request_id_header_is_echoed() -> None:
    r = _client().get("/v1/health", headers={"x-request-id": "abc123"})
    assert r.headers.get("x-request-id") == "abc123"

from __future__ import annotations

import copy

import pytest

from receipt_rewards.core import config as cfg
from receipt_rewards.models.schemas import Receipt
from receipt_rewards.services.rule_engine import compute_points

from receipt_factories import CORNER_MARKET_RECEIPT, TARGET_RECEIPT


@pytest.fixture(autouse=True)
def default_policies(monkeypatch):
    monkeypatch.setattr(cfg.settings, "STRICT_FIELD_VALIDATION", False, raising=False)
    monkeypatch.setattr(cfg.settings, "UNKNOWN_RECEIPT_RETURNS_ZERO", False, raising=False)
    yield


def test_process_returns_201_with_id(client, store):
    resp = client.post("/receipts/process", json=TARGET_RECEIPT)
    assert resp.status_code == 201
    body = resp.json()
    assert set(body) == {"id"}
    assert body["id"] in store


@pytest.mark.parametrize("payload", [TARGET_RECEIPT, CORNER_MARKET_RECEIPT])
def test_process_then_get_points_matches_engine(client, payload):
    receipt_id = client.post("/receipts/process", json=payload).json()["id"]
    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 200
    assert resp.json() == {"points": compute_points(Receipt.model_validate(payload))}


def test_get_points_for_corner_market(client):
    receipt_id = client.post("/receipts/process", json=CORNER_MARKET_RECEIPT).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 109}


def test_unknown_id_returns_404(client):
    resp = client.get("/receipts/does-not-exist/points")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Receipt not found"}


def test_unknown_id_returns_zero_points_in_legacy_mode(client, monkeypatch):
    monkeypatch.setattr(cfg.settings, "UNKNOWN_RECEIPT_RETURNS_ZERO", True, raising=False)
    resp = client.get("/receipts/does-not-exist/points")
    assert resp.status_code == 200
    assert resp.json() == {"points": 0}


def test_malformed_json_is_rejected_with_400(client, store):
    resp = client.post(
        "/receipts/process",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"
    assert len(store) == 0


@pytest.mark.parametrize("field", ["retailer", "purchaseDate", "purchaseTime", "total", "items"])
def test_missing_field_is_rejected_with_400(client, store, field):
    payload = copy.deepcopy(TARGET_RECEIPT)
    del payload[field]
    resp = client.post("/receipts/process", json=payload)
    assert resp.status_code == 400
    locs = [tuple(err["loc"]) for err in resp.json()["details"]]
    assert ("body", field) in locs
    assert len(store) == 0


def test_unparseable_values_score_leniently_by_default(client):
    payload = copy.deepcopy(TARGET_RECEIPT)
    payload["purchaseDate"] = "not-a-date"
    receipt_id = client.post("/receipts/process", json=payload).json()["id"]
    # Target receipt without the odd-day bonus
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 22}


def test_strict_mode_rejects_unparseable_values(client, monkeypatch, store):
    monkeypatch.setattr(cfg.settings, "STRICT_FIELD_VALIDATION", True, raising=False)
    payload = copy.deepcopy(TARGET_RECEIPT)
    payload["purchaseTime"] = "25:99"
    payload["items"][0]["price"] = "six"
    resp = client.post("/receipts/process", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == {
        "error": "Invalid receipt fields",
        "fields": ["purchaseTime", "items[0].price"],
    }
    assert len(store) == 0


def test_strict_mode_accepts_valid_receipt(client, monkeypatch):
    monkeypatch.setattr(cfg.settings, "STRICT_FIELD_VALIDATION", True, raising=False)
    resp = client.post("/receipts/process", json=TARGET_RECEIPT)
    assert resp.status_code == 201


def test_health_check(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"

"""Tests for the HTTP API using FastAPI's TestClient."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from armora.api import routes
from armora.config import settings
from test_roster import RAW_OFFICER

OFFICERS = [
    RAW_OFFICER,
    {
        **RAW_OFFICER,
        "id": "cpo-002",
        "first_name": "Jordan",
        "rating": 4.3,
        "specializations": [{"type": "Event_Security", "years_experience": 3}],
        "availability": {"status": "Off_Duty"},
        "current_location": {"latitude": 53.4808, "longitude": -2.2426},
    },
]


@pytest.fixture
def headers():
    return {"X-API-Key": settings.armora_api_key}


@pytest.fixture
def client(tmp_path, monkeypatch, weekday_morning):
    path = tmp_path / "officers.json"
    path.write_text(json.dumps(OFFICERS), encoding="utf-8")
    monkeypatch.setattr(settings, "roster_path", str(path))
    monkeypatch.setattr(routes, "_now", lambda: weekday_morning)
    routes._rate_limit_windows.clear()
    with TestClient(routes.app) as test_client:
        yield test_client


def test_requires_api_key(client):
    assert client.get("/v1/tiers", headers={"X-API-Key": "wrong"}).status_code == 403
    assert client.get("/v1/tiers").status_code == 422


def test_rate_limit(client, headers, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_per_minute", 2)
    assert client.get("/v1/tiers", headers=headers).status_code == 200
    assert client.get("/v1/tiers", headers=headers).status_code == 200
    assert client.get("/v1/tiers", headers=headers).status_code == 429


def test_health_reports_loaded_roster(client, headers):
    body = client.get("/v1/health", headers=headers).json()
    assert body["status"] == "ok"
    assert body["officers_loaded"] == 2


def test_health_degraded_without_roster(tmp_path, monkeypatch, headers):
    monkeypatch.setattr(settings, "roster_path", str(tmp_path / "missing.json"))
    routes._rate_limit_windows.clear()
    with TestClient(routes.app) as test_client:
        body = test_client.get("/v1/health", headers=headers).json()
    assert body["status"] == "degraded"
    assert body["officers_loaded"] == 0


def test_unreadable_roster_degrades_but_still_prices(
    tmp_path, monkeypatch, headers, weekday_morning
):
    monkeypatch.setattr(settings, "roster_path", str(tmp_path))
    monkeypatch.setattr(routes, "_now", lambda: weekday_morning)
    routes._rate_limit_windows.clear()
    with TestClient(routes.app) as test_client:
        health = test_client.get("/v1/health", headers=headers).json()
        quote = test_client.post(
            "/v1/pricing/quote",
            json={"tier_id": "essential", "assessment": {"duration": 4}},
            headers=headers,
        )
    assert health["status"] == "degraded"
    assert health["officers_loaded"] == 0
    assert quote.status_code == 200
    assert quote.json()["formatted_total"] == "£240.00"


def test_match_ranks_and_limits(client, headers):
    payload = {
        "principal_location": {"latitude": 51.5074, "longitude": -0.1278},
        "threat_level": "medium",
        "urgency": "scheduled",
        "required_specializations": ["VIP_Protection"],
        "duration": 4,
    }
    body = client.post("/v1/match", json=payload, headers=headers).json()
    assert body["officers_evaluated"] == 2
    assert body["officers_eligible"] == 2
    assert [m["officer"]["id"] for m in body["matches"]] == ["cpo-001", "cpo-002"]
    assert body["matches"][0]["price_estimate"] == 200.0

    limited = client.post("/v1/match", json={**payload, "limit": 1}, headers=headers).json()
    assert len(limited["matches"]) == 1
    assert limited["officers_eligible"] == 2


def test_match_immediate_excludes_distant_officer(client, headers):
    payload = {
        "principal_location": {"latitude": 51.5074, "longitude": -0.1278},
        "threat_level": "low",
        "urgency": "immediate",
        "duration": 2,
    }
    body = client.post("/v1/match", json=payload, headers=headers).json()
    assert [m["officer"]["id"] for m in body["matches"]] == ["cpo-001"]


def test_match_rejects_invalid_request(client, headers):
    response = client.post("/v1/match", json={"threat_level": "low"}, headers=headers)
    assert response.status_code == 422


def test_officer_search_and_lookup(client, headers):
    body = client.get(
        "/v1/officers", params={"specializations": "Event_Security"}, headers=headers
    ).json()
    assert body["count"] == 1
    assert body["officers"][0]["id"] == "cpo-002"

    assert client.get("/v1/officers/cpo-001", headers=headers).json()["first_name"] == "Alex"
    assert client.get("/v1/officers/nobody", headers=headers).status_code == 404


def test_available_recommended_and_specialization_queries(client, headers):
    available = client.get(
        "/v1/officers/available",
        params={"latitude": 51.5, "longitude": -0.12},
        headers=headers,
    ).json()
    assert [o["id"] for o in available["officers"]] == ["cpo-001"]

    recommended = client.get("/v1/officers/recommended", headers=headers).json()
    assert [o["id"] for o in recommended["officers"]] == ["cpo-001"]

    by_spec = client.get("/v1/officers/by-specialization/VIP_Protection", headers=headers).json()
    assert [o["id"] for o in by_spec["officers"]] == ["cpo-001"]


def test_tiers(client, headers):
    tiers = client.get("/v1/tiers", headers=headers).json()["tiers"]
    assert [t["id"] for t in tiers] == ["essential", "executive", "shadow"]


def test_quote(client, headers):
    payload = {
        "tier_id": "shadow",
        "assessment": {
            "duration": 24,
            "threat_level": "high",
            "special_requirements": {"armed": True},
        },
    }
    body = client.post("/v1/pricing/quote", json=payload, headers=headers).json()
    assert body["formatted_total"] == "£3,243.60"
    assert body["formatted_vat"] == "£540.60"
    assert body["recommended_tier"] == "shadow"
    assert body["evaluated_at"].startswith("2025-03-12T10:00")
    assert body["calculation"]["breakdown"][-1]["type"] == "tax"


def test_recommend_tier(client, headers):
    body = client.post(
        "/v1/pricing/recommend-tier",
        json={"duration": 4, "threat_level": "medium", "location_type": "event"},
        headers=headers,
    ).json()
    assert body["id"] == "executive"

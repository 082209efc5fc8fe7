"""Tests for the matching pipeline: eligibility, ranking and estimates."""

from __future__ import annotations

import pytest

from armora.matching import EligibilityFilter, MatchingEngine, OfficerRanker, match
from armora.matching.estimates import estimate_price, estimate_response_time
from armora.matching.geo import UNKNOWN_DISTANCE_KM, distance_between, haversine_km
from armora.matching.models import (
    AvailabilityStatus,
    Location,
    SpecializationType,
    ThreatLevel,
    Urgency,
)
from armora.reference import TierId

MANCHESTER = Location(latitude=53.4808, longitude=-2.2426, city="Manchester")
CROYDON = Location(latitude=51.3762, longitude=-0.0982, city="Croydon")


# ---------------------------------------------------------------------------
# Geo
# ---------------------------------------------------------------------------


def test_haversine_london_to_manchester():
    d = haversine_km(51.5074, -0.1278, MANCHESTER.latitude, MANCHESTER.longitude)
    assert 255 < d < 270


def test_same_point_is_zero(london):
    assert distance_between(london, london) == 0.0


def test_unknown_position_uses_fixed_distance(london):
    assert distance_between(london, None) == UNKNOWN_DISTANCE_KM == 100.0


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


def test_inactive_and_unverified_are_ineligible(make_officer, make_request):
    gate = EligibilityFilter()
    request = make_request()

    inactive = gate.check_eligibility(make_officer(is_active=False), request)
    unverified = gate.check_eligibility(make_officer(is_verified=False), request)

    assert not inactive.eligible
    assert inactive.failed_checks == ["Officer is not active"]
    assert not unverified.eligible
    assert unverified.failed_checks == ["Officer is not verified"]


def test_immediate_request_excludes_distant_officers(make_officer, make_request):
    gate = EligibilityFilter()
    far = make_officer(current_location=MANCHESTER)

    assert not gate.check_eligibility(far, make_request(urgency=Urgency.IMMEDIATE)).eligible
    assert gate.check_eligibility(far, make_request(urgency=Urgency.WITHIN_HOUR)).eligible


def test_unknown_location_sits_on_immediate_boundary(make_officer, make_request):
    result = EligibilityFilter().check_eligibility(
        make_officer(current_location=None), make_request(urgency=Urgency.IMMEDIATE)
    )
    assert result.eligible
    assert result.distance_km == 100.0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def test_empty_roster_returns_no_matches(make_request):
    assert match(make_request(), []) == []


def test_only_eligible_officers_are_returned(make_officer, make_request):
    officers = [
        make_officer("ok"),
        make_officer("inactive", is_active=False),
        make_officer("unverified", is_verified=False),
        make_officer("far", current_location=MANCHESTER),
    ]
    results = match(make_request(urgency=Urgency.IMMEDIATE), officers)
    assert [r.officer.id for r in results] == ["ok"]


def test_results_sorted_descending_and_bounded(make_officer, make_request):
    officers = [
        make_officer("far", current_location=MANCHESTER, years_of_experience=1),
        make_officer("near", specializations=[SpecializationType.VIP_PROTECTION]),
        make_officer("mid", current_location=CROYDON, status=AvailabilityStatus.OFF_DUTY),
        make_officer("unknown", current_location=None, rating=5.0),
    ]
    request = make_request(
        threat_level=ThreatLevel.MEDIUM,
        required_specializations=[SpecializationType.VIP_PROTECTION],
    )
    results = MatchingEngine().match(request, officers)

    scores = [r.match_score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0].officer.id == "near"
    for r in results:
        assert 0.0 <= r.match_score <= 100.0
        assert len(r.match_reasons) <= 3


def test_equal_scores_keep_roster_order(make_officer, make_request):
    officers = [make_officer("first"), make_officer("second"), make_officer("third")]
    results = match(make_request(), officers)
    assert [r.officer.id for r in results] == ["first", "second", "third"]
    assert len({r.match_score for r in results}) == 1


def test_unknown_location_reported_at_fixed_distance(make_officer, make_request):
    [result] = match(make_request(), [make_officer(current_location=None)])
    assert result.proximity_km == 100.0
    assert result.components["proximity"] == 25.0


def test_proximity_is_rounded(make_officer, make_request):
    [result] = match(make_request(), [make_officer(current_location=CROYDON)])
    assert result.proximity_km == round(result.proximity_km, 2)
    assert 14 < result.proximity_km < 16


def test_ranker_is_stable_on_ties(make_officer, make_request):
    results = match(make_request(), [make_officer("a"), make_officer("b")])
    reordered = OfficerRanker().rank_matches(list(reversed(results)))
    assert [r.officer.id for r in reordered] == ["b", "a"]


def test_ranker_handles_empty_input():
    assert OfficerRanker().rank_matches([]) == []


# ---------------------------------------------------------------------------
# Estimates
# ---------------------------------------------------------------------------


def test_price_uses_budget_tier_rate(make_officer, make_request):
    officer = make_officer()
    assert estimate_price(officer, make_request(budget=TierId.EXECUTIVE, duration=4)) == 300.0


def test_price_respects_minimum_engagement(make_officer, make_request):
    officer = make_officer(minimum_engagement=6)
    assert estimate_price(officer, make_request(budget=TierId.EXECUTIVE, duration=4)) == 450.0


def test_price_adds_travel_allowance_for_long_engagements(make_officer, make_request):
    officer = make_officer(travel_allowance=40)
    assert estimate_price(officer, make_request(duration=50)) == 2500.0
    assert estimate_price(officer, make_request(duration=60)) == 3040.0


def test_price_falls_back_to_essential_rate(make_officer, make_request):
    officer = make_officer(hourly_rates={TierId.ESSENTIAL: 50.0})
    assert estimate_price(officer, make_request(budget=TierId.SHADOW, duration=4)) == 200.0


@pytest.mark.parametrize(
    ("urgency", "distance", "expected"),
    [
        (Urgency.IMMEDIATE, 0.0, 23),    # 22.5 rounds up
        (Urgency.WITHIN_HOUR, 3.2, 42),  # 36 + 6.4
        (Urgency.WITHIN_DAY, 10.0, 65),
        (Urgency.SCHEDULED, 0.0, 54),
    ],
)
def test_response_time_estimate(make_officer, urgency, distance, expected):
    officer = make_officer(average_response_time=45)
    assert estimate_response_time(officer, distance, urgency) == expected


def test_match_result_carries_estimates(make_officer, make_request):
    [result] = match(
        make_request(urgency=Urgency.IMMEDIATE, budget=TierId.SHADOW, duration=3),
        [make_officer(current_location=None)],
    )
    assert result.price_estimate == 195.0
    assert result.estimated_response_time == 223  # 22.5 + 200

"""Tests for the unscored roster queries."""

from __future__ import annotations

from armora.matching import available_now, find_by_specialization, recommended_officers
from armora.matching.models import (
    AvailabilityStatus,
    Location,
    Specialization,
    SpecializationType,
)

VIP = SpecializationType.VIP_PROTECTION
MARITIME = SpecializationType.MARITIME_SECURITY

READING = Location(latitude=51.4543, longitude=-0.9781, city="Reading")


def _vip(years: float) -> list[Specialization]:
    return [Specialization(type=VIP, years_experience=years)]


def test_find_by_specialization_orders_by_specialization_years(make_officer):
    officers = [
        make_officer("junior", specializations=_vip(2), rating=5.0),
        make_officer("veteran", specializations=_vip(12), rating=4.1),
        make_officer("maritime", specializations=[MARITIME]),
        make_officer("hidden", specializations=_vip(20), is_verified=False),
    ]
    found = find_by_specialization(VIP, officers)
    assert [o.id for o in found] == ["veteran", "junior"]


def test_find_by_specialization_breaks_ties_on_rating(make_officer):
    officers = [
        make_officer("lower", specializations=_vip(5), rating=4.2),
        make_officer("higher", specializations=_vip(5), rating=4.7),
    ]
    assert [o.id for o in find_by_specialization(VIP, officers)] == ["higher", "lower"]


def test_find_by_specialization_limit(make_officer):
    officers = [make_officer(f"cpo-{i}", specializations=_vip(i)) for i in range(6)]
    assert len(find_by_specialization(VIP, officers, limit=3)) == 3


def test_recommended_blends_rating_and_capped_experience(make_officer):
    officers = [
        make_officer("star", rating=4.9, years_of_experience=2),       # 3.43 + 0.03
        make_officer("veteran", rating=4.6, years_of_experience=20),   # 3.22 + 0.30
        make_officer("elder", rating=4.6, years_of_experience=40),     # capped at 20 years
        make_officer("busy", rating=5.0, status=AvailabilityStatus.ON_ASSIGNMENT),
    ]
    recommended = recommended_officers(officers)
    assert [o.id for o in recommended] == ["veteran", "elder", "star"]


def test_recommended_limit(make_officer):
    officers = [make_officer(f"cpo-{i}") for i in range(8)]
    assert len(recommended_officers(officers)) == 5
    assert len(recommended_officers(officers, limit=2)) == 2


def test_available_now_radius(make_officer, london):
    officers = [
        make_officer("here"),
        make_officer("reading", current_location=READING),
        make_officer("soon", status=AvailabilityStatus.AVAILABLE_SOON),
        make_officer("nowhere", current_location=None),
    ]
    assert [o.id for o in available_now(london, officers)] == ["here"]
    assert [o.id for o in available_now(london, officers, max_distance_km=70)] == [
        "here",
        "reading",
    ]

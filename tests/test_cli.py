"""Tests for the Typer CLI commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from armora.cli import app
from test_roster import RAW_OFFICER

runner = CliRunner(env={"COLUMNS": "200"})


def _roster_file(tmp_path):
    path = tmp_path / "officers.json"
    path.write_text(json.dumps([RAW_OFFICER]), encoding="utf-8")
    return str(path)


def test_tiers_lists_every_tier():
    result = runner.invoke(app, ["tiers"])
    assert result.exit_code == 0
    for name in ("Essential Protection", "Executive Protection", "Shadow Protocol"):
        assert name in result.output


def test_quote_at_fixed_time():
    result = runner.invoke(
        app,
        ["quote", "--tier", "shadow", "--duration", "24", "--threat", "high", "--armed",
         "--at", "2025-03-12T10:00"],
    )
    assert result.exit_code == 0
    assert "£3,243.60" in result.output
    assert "Duration Discount" in result.output


def test_quote_rejects_bad_time():
    result = runner.invoke(app, ["quote", "--duration", "4", "--at", "tomorrow"])
    assert result.exit_code == 1


def test_recommend_tier():
    result = runner.invoke(app, ["recommend-tier", "--threat", "medium", "--location", "event"])
    assert result.exit_code == 0
    assert "Executive Protection" in result.output


def test_match_from_roster(tmp_path):
    result = runner.invoke(
        app,
        ["match", "--lat", "51.5074", "--lon", "-0.1278", "--roster", _roster_file(tmp_path)],
    )
    assert result.exit_code == 0
    assert "Alex Morgan" in result.output


def test_match_with_missing_roster(tmp_path):
    result = runner.invoke(
        app,
        ["match", "--lat", "51.5", "--lon", "-0.1", "--roster", str(tmp_path / "none.json")],
    )
    assert result.exit_code == 1


def test_officers_filters(tmp_path):
    roster = _roster_file(tmp_path)
    found = runner.invoke(app, ["officers", "--language", "French", "--roster", roster])
    assert found.exit_code == 0
    assert "Alex Morgan" in found.output

    none = runner.invoke(app, ["officers", "--vehicle", "--roster", roster])
    assert none.exit_code == 0
    assert "No officers match" in none.output


def test_health(tmp_path):
    ok = runner.invoke(app, ["health", "--roster", _roster_file(tmp_path)])
    assert ok.exit_code == 0
    assert "HEALTHY" in ok.output

    degraded = runner.invoke(app, ["health", "--roster", str(tmp_path / "none.json")])
    assert degraded.exit_code == 1


def test_unreadable_roster_reports_error(tmp_path):
    matched = runner.invoke(
        app, ["match", "--lat", "51.5", "--lon", "-0.1", "--roster", str(tmp_path)]
    )
    assert matched.exit_code == 1
    assert isinstance(matched.exception, SystemExit)

    health = runner.invoke(app, ["health", "--roster", str(tmp_path)])
    assert health.exit_code == 1
    assert isinstance(health.exception, SystemExit)
    assert "Roster unavailable" in health.output

"""Armora CLI — command-line interface for officer matching and protection
pricing.

Provides commands for listing tiers, pricing bookings, recommending tiers,
matching officers from a roster file, searching the roster, checking health,
and serving the HTTP API.  Uses Typer for argument parsing and Rich for
formatted terminal output.

Usage::

    python -m armora.cli --help
    python -m armora.cli quote --tier shadow --duration 24 --threat high --armed
    python -m armora.cli match --lat 51.5074 --lon -0.1278 --threat medium --urgency immediate
    python -m armora.cli officers --availability available_now --vehicle
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from armora import __version__
from armora.config import settings

# ---------------------------------------------------------------------------
# App & console setup
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="armora",
    help="Armora CLI — close-protection officer matching and booking pricing.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True, style="bold red")

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("armora.cli")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_officers(roster: Optional[str]):
    """Load the roster or exit with an error message."""
    from armora.roster import load_roster

    path = roster or settings.roster_path
    try:
        return load_roster(path)
    except FileNotFoundError:
        err_console.print(f"Roster file not found: {path}")
        raise typer.Exit(1)
    except ValueError as exc:
        err_console.print(str(exc))
        raise typer.Exit(1)


def _parse_when(when: Optional[str]) -> datetime:
    """Parse ``--at`` or default to now in the pricing timezone."""
    zone = ZoneInfo(settings.pricing_timezone)
    if not when:
        return datetime.now(zone)
    try:
        parsed = datetime.fromisoformat(when)
    except ValueError:
        err_console.print(f"Invalid --at value: {when}. Use ISO format, e.g. 2025-03-14T10:00.")
        raise typer.Exit(1)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=zone)


def _officer_table(officers, title: str) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Officer", style="cyan")
    table.add_column("Status")
    table.add_column("Years", justify="right")
    table.add_column("Rating", justify="right")
    table.add_column("Specializations")
    for o in officers:
        table.add_row(
            o.id,
            o.full_name,
            o.availability.status.value,
            f"{o.years_of_experience:g}",
            f"{o.rating:.1f}",
            ", ".join(s.value.replace("_", " ") for s in o.specialization_types()),
        )
    return table


# ---------------------------------------------------------------------------
# Command: tiers
# ---------------------------------------------------------------------------


@app.command("tiers")
def tiers() -> None:
    """List the service tiers and their base hourly rates."""
    from armora.pricing import format_currency
    from armora.reference import SERVICE_TIERS

    table = Table(title="Service Tiers", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Rate / hour", justify="right")
    table.add_column("Description")
    for tier in SERVICE_TIERS:
        table.add_row(
            tier.id.value,
            tier.name,
            format_currency(tier.base_hourly_rate),
            tier.description,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Command: quote
# ---------------------------------------------------------------------------


@app.command("quote")
def quote(
    tier: str = typer.Option("essential", "--tier", "-t", help="essential | executive | shadow"),
    duration: float = typer.Option(..., "--duration", "-d", help="Booking length in hours"),
    threat: str = typer.Option("low", "--threat", help="low | medium | high"),
    k9: bool = typer.Option(False, "--k9", help="K9 unit and handler"),
    armed: bool = typer.Option(False, "--armed", help="Licensed firearms officer"),
    diplomatic: bool = typer.Option(False, "--diplomatic", help="Diplomatic protocol specialist"),
    surveillance: bool = typer.Option(False, "--surveillance", help="Counter-surveillance specialist"),
    medical: bool = typer.Option(False, "--medical", help="Medical response trained CPO"),
    subscription: Optional[str] = typer.Option(
        None, "--subscription", help="Member subscription tier"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Evaluate at this ISO time instead of now"
    ),
    holiday: bool = typer.Option(False, "--holiday", help="Apply the bank-holiday rate"),
) -> None:
    """Price a protection booking and print the itemised breakdown.

    Examples:

      armora quote --tier essential --duration 4

      armora quote --tier shadow --duration 24 --threat high --armed --at 2025-03-12T10:00
    """
    from pydantic import ValidationError

    from armora.pricing import calculate_pricing, format_currency
    from armora.pricing.models import SecurityAssessment, SpecialRequirements
    from armora.reference import get_service_tier

    evaluation_time = _parse_when(at)

    try:
        assessment = SecurityAssessment(
            duration=duration,
            threat_level=threat.lower(),
            special_requirements=SpecialRequirements(
                k9_unit=k9,
                armed=armed,
                diplomatic=diplomatic,
                surveillance=surveillance,
                medical=medical,
            ),
        )
    except ValidationError as exc:
        err_console.print(f"Invalid assessment: {exc}")
        raise typer.Exit(1)

    service_tier = get_service_tier(tier.lower())
    calc = calculate_pricing(
        service_tier,
        assessment,
        has_subscription=subscription is not None,
        subscription_tier=subscription,
        evaluation_time=evaluation_time,
        is_holiday=holiday,
    )

    table = Table(
        title=f"{service_tier.name} — {evaluation_time:%a %d %b %Y %H:%M}",
        box=box.ROUNDED,
    )
    table.add_column("Item", style="cyan")
    table.add_column("Detail", style="dim")
    table.add_column("Amount", justify="right")
    for item in calc.breakdown:
        style = "green" if item.amount < 0 else None
        table.add_row(item.label, item.description or "", format_currency(item.amount), style=style)
    table.add_section()
    table.add_row("[bold]Total[/bold]", "", f"[bold]{format_currency(calc.total_amount)}[/bold]")

    console.print(table)


# ---------------------------------------------------------------------------
# Command: recommend-tier
# ---------------------------------------------------------------------------


@app.command("recommend-tier")
def recommend_tier(
    threat: str = typer.Option("low", "--threat", help="low | medium | high"),
    location: str = typer.Option(
        "corporate", "--location", help="residential | corporate | event | public"
    ),
    k9: bool = typer.Option(False, "--k9"),
    armed: bool = typer.Option(False, "--armed"),
    diplomatic: bool = typer.Option(False, "--diplomatic"),
    surveillance: bool = typer.Option(False, "--surveillance"),
    medical: bool = typer.Option(False, "--medical"),
) -> None:
    """Recommend a service tier for a security assessment."""
    from pydantic import ValidationError

    from armora.pricing import get_recommended_tier
    from armora.pricing.models import SecurityAssessment, SpecialRequirements

    try:
        assessment = SecurityAssessment(
            duration=2,
            threat_level=threat.lower(),
            location_type=location.lower(),
            special_requirements=SpecialRequirements(
                k9_unit=k9,
                armed=armed,
                diplomatic=diplomatic,
                surveillance=surveillance,
                medical=medical,
            ),
        )
    except ValidationError as exc:
        err_console.print(f"Invalid assessment: {exc}")
        raise typer.Exit(1)

    tier = get_recommended_tier(assessment)
    console.print(
        Panel(
            f"[bold cyan]{tier.name}[/bold cyan]\n{tier.description}\n\n"
            + "\n".join(f"• {feature}" for feature in tier.features),
            title="Recommended Tier",
            expand=False,
        )
    )


# ---------------------------------------------------------------------------
# Command: match
# ---------------------------------------------------------------------------


@app.command("match")
def match(
    lat: float = typer.Option(..., "--lat", help="Principal latitude"),
    lon: float = typer.Option(..., "--lon", help="Principal longitude"),
    threat: str = typer.Option("medium", "--threat", help="low | medium | high | extreme"),
    urgency: str = typer.Option(
        "scheduled", "--urgency", help="immediate | within_hour | within_day | scheduled"
    ),
    specialization: Optional[List[str]] = typer.Option(
        None, "--specialization", "-s", help="Required specialization (repeatable)"
    ),
    budget: str = typer.Option("essential", "--budget", help="Tier used for price estimates"),
    duration: float = typer.Option(4.0, "--duration", "-d", help="Expected hours"),
    vehicle: bool = typer.Option(False, "--vehicle", help="Officer must bring a vehicle"),
    language: Optional[List[str]] = typer.Option(
        None, "--language", help="Preferred language (repeatable)"
    ),
    limit: int = typer.Option(10, "--limit", help="Rows to display"),
    roster: Optional[str] = typer.Option(None, "--roster", help="Roster JSON path"),
) -> None:
    """Rank roster officers for a protection request.

    Examples:

      armora match --lat 51.5074 --lon -0.1278 --threat high --urgency immediate

      armora match --lat 51.5 --lon -0.12 -s VIP_Protection -s Counter_Surveillance --vehicle
    """
    from pydantic import ValidationError

    from armora.matching import match as run_match
    from armora.matching.models import Location, MatchRequest
    from armora.pricing import format_currency

    officers = _load_officers(roster)

    try:
        request = MatchRequest(
            principal_location=Location(latitude=lat, longitude=lon),
            threat_level=threat.lower(),
            urgency=urgency.lower(),
            required_specializations=specialization or [],
            budget=budget.lower(),
            duration=duration,
            vehicle_required=vehicle,
            language_preferences=language or [],
        )
    except ValidationError as exc:
        err_console.print(f"Invalid request: {exc}")
        raise typer.Exit(1)

    with console.status("[bold green]Matching officers...[/bold green]"):
        results = run_match(request, officers)

    if not results:
        console.print("[yellow]No eligible officers for this request.[/yellow]")
        return

    table = Table(title=f"Officer Matches — {len(results)} eligible", box=box.ROUNDED)
    table.add_column("Rank", style="dim", width=6)
    table.add_column("Officer", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Distance", justify="right")
    table.add_column("ETA", justify="right")
    table.add_column("Estimate", justify="right")
    table.add_column("Reasons")

    for i, m in enumerate(results[:limit], 1):
        table.add_row(
            str(i),
            m.officer.full_name,
            f"{m.match_score:.2f}",
            f"{m.proximity_km:.1f}km",
            f"{m.estimated_response_time}min",
            format_currency(m.price_estimate),
            "; ".join(m.match_reasons),
        )

    console.print(table)


# ---------------------------------------------------------------------------
# Command: officers
# ---------------------------------------------------------------------------


@app.command("officers")
def officers(
    availability: Optional[str] = typer.Option(
        None, "--availability", help="available_now | available_today | available_this_week"
    ),
    specialization: Optional[List[str]] = typer.Option(
        None, "--specialization", "-s", help="Any of these specializations (repeatable)"
    ),
    experience: Optional[str] = typer.Option(
        None, "--experience", help="junior | experienced | senior | elite"
    ),
    min_rating: Optional[float] = typer.Option(None, "--min-rating"),
    max_rate: Optional[float] = typer.Option(None, "--max-rate", help="Max hourly rate (GBP)"),
    vehicle: bool = typer.Option(False, "--vehicle"),
    language: Optional[List[str]] = typer.Option(None, "--language"),
    area: Optional[str] = typer.Option(None, "--area", help="Coverage area"),
    military: bool = typer.Option(False, "--military"),
    police: bool = typer.Option(False, "--police"),
    sia_level: Optional[str] = typer.Option(None, "--sia-level", help="Level_2 | Level_3 | Level_4"),
    roster: Optional[str] = typer.Option(None, "--roster", help="Roster JSON path"),
) -> None:
    """Search the roster with optional filters."""
    from pydantic import ValidationError

    from armora.roster import OfficerSearchFilters, search_officers

    roster_officers = _load_officers(roster)

    try:
        filters = OfficerSearchFilters(
            availability=availability,
            specializations=specialization or [],
            experience_level=experience,
            rating_minimum=min_rating,
            max_hourly_rate=max_rate,
            has_vehicle=vehicle,
            languages=language or [],
            coverage_area=area,
            military_background=military,
            police_background=police,
            sia_level=sia_level,
        )
    except ValidationError as exc:
        err_console.print(f"Invalid filters: {exc}")
        raise typer.Exit(1)

    found = search_officers(roster_officers, filters)
    if not found:
        console.print("[yellow]No officers match these filters.[/yellow]")
        return
    console.print(_officer_table(found, f"Officers — {len(found)} of {len(roster_officers)}"))


# ---------------------------------------------------------------------------
# Command: health
# ---------------------------------------------------------------------------


@app.command("health")
def health(
    roster: Optional[str] = typer.Option(None, "--roster", help="Roster JSON path"),
) -> None:
    """Check configuration and that the roster loads."""
    from armora.roster import load_roster

    console.print(Panel("[bold cyan]Armora System Health Check[/bold cyan]", expand=False))

    path = roster or settings.roster_path
    issues: list[str] = []
    try:
        loaded = load_roster(path)
        officers_loaded = str(len(loaded))
        bookable = sum(1 for o in loaded if o.is_active and o.is_verified)
        if bookable == 0:
            issues.append("No active, verified officers in roster")
    except (FileNotFoundError, ValueError) as exc:
        officers_loaded = "N/A"
        bookable = 0
        issues.append(f"Roster unavailable: {exc}")

    try:
        ZoneInfo(settings.pricing_timezone)
    except (KeyError, ValueError) as exc:
        issues.append(f"Invalid pricing timezone {settings.pricing_timezone!r}: {exc}")

    status = "healthy" if not issues else "degraded"
    status_color = "green" if status == "healthy" else "yellow"
    console.print(f"\nOverall Status: [{status_color}]{status.upper()}[/{status_color}]")

    table = Table(box=box.SIMPLE)
    table.add_column("Check", style="cyan")
    table.add_column("Result", style="bold")
    table.add_row("Version", __version__)
    table.add_row("Roster Path", path)
    table.add_row("Officers Loaded", officers_loaded)
    table.add_row("Bookable Officers", str(bookable))
    table.add_row("Pricing Timezone", settings.pricing_timezone)
    console.print(table)

    if issues:
        console.print("\n[bold yellow]Issues:[/bold yellow]")
        for issue in issues:
            console.print(f"  [yellow]- {issue}[/yellow]")
        raise typer.Exit(1)
    console.print("[green]No issues detected.[/green]")


# ---------------------------------------------------------------------------
# Command: serve
# ---------------------------------------------------------------------------


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: Optional[int] = typer.Option(None, "--port", help="Defaults to ARMORA_API_PORT"),
) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "armora.api.routes:app",
        host=host,
        port=port or settings.armora_api_port,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()

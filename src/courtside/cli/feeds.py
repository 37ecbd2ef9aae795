from __future__ import annotations

import typer

from courtside.aggregation.leagues import SUPER_LEAGUE, predefined_routes
from courtside.cli.common import build_aggregator, echo_json, run_or_exit
from courtside.core.enums import PartialFailurePolicyEnum

LEAGUE_OPTION = typer.Option(SUPER_LEAGUE, "--league", help="League id (see `courtside leagues`).")
POLICY_OPTION = typer.Option(
    None,
    "--policy",
    help="Partial-failure policy for dual-source leagues (defaults to PARTIAL_FAILURE_POLICY).",
)


def leagues_cmd() -> None:
    """List the configured leagues."""
    echo_json([route.to_dict() for route in predefined_routes().values()])


def matches_cmd(
    league: str = LEAGUE_OPTION,
    policy: PartialFailurePolicyEnum | None = POLICY_OPTION,
) -> None:
    """Fixtures and results for a league, sorted by date."""
    matches = run_or_exit(build_aggregator(policy).fetch_matches(league))
    echo_json([m.to_dict() for m in matches])


def standings_cmd(league: str = LEAGUE_OPTION) -> None:
    """League table, sorted by position."""
    standings = run_or_exit(build_aggregator().fetch_standings(league))
    echo_json([s.to_dict() for s in standings])


def match_details_cmd(
    match_id: str = typer.Argument(..., help="Provider game id (e.g. E2025_170)."),
    league: str = LEAGUE_OPTION,
    policy: PartialFailurePolicyEnum | None = POLICY_OPTION,
) -> None:
    """One match with whatever in-game detail its provider exposes."""
    details = run_or_exit(build_aggregator(policy).fetch_match_details(match_id, league))
    if details is None:
        typer.echo(f"Match {match_id} not found in {league}.", err=True)
        raise typer.Exit(code=1)
    echo_json(details.to_dict())


def all_cmd(
    league: str = LEAGUE_OPTION,
    policy: PartialFailurePolicyEnum | None = POLICY_OPTION,
) -> None:
    """Matches and standings in one payload."""
    data = run_or_exit(build_aggregator(policy).fetch_all_data(league))
    echo_json(data.to_dict())

from __future__ import annotations

import typer

from courtside.cli.feeds import all_cmd, leagues_cmd, match_details_cmd, matches_cmd, standings_cmd

app = typer.Typer(no_args_is_help=True, help="Basketball fixtures and standings across providers.")
app.command("leagues")(leagues_cmd)
app.command("matches")(matches_cmd)
app.command("standings")(standings_cmd)
app.command("match-details")(match_details_cmd)
app.command("all")(all_cmd)

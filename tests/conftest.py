from __future__ import annotations

import copy
import json
from typing import Any

import pytest

RESULTS_XML = """<?xml version="1.0" encoding="utf-8"?>
<results>
  <game>
    <round>RS</round>
    <gameday>18</gameday>
    <date>Jan 14, 2026</date>
    <time>20:00</time>
    <gamenumber>170</gamenumber>
    <gamecode>E2025_170</gamecode>
    <hometeam>REAL MADRID</hometeam>
    <homecode>MAD</homecode>
    <homescore>95</homescore>
    <awayteam>FC BARCELONA</awayteam>
    <awaycode>BAR</awaycode>
    <awayscore>88</awayscore>
    <played>true</played>
  </game>
  <game>
    <round>RS</round>
    <gameday>18</gameday>
    <date>Jan 15, 2026</date>
    <time>19:30</time>
    <gamenumber>171</gamenumber>
    <gamecode>E2025_171</gamecode>
    <hometeam>PANATHINAIKOS AKTOR ATHENS</hometeam>
    <homecode>PAN</homecode>
    <homescore>78</homescore>
    <awayteam>OLYMPIACOS PIRAEUS</awayteam>
    <awaycode>OLY</awaycode>
    <awayscore>82</awayscore>
    <played>true</played>
  </game>
  <game>
    <round>RS</round>
    <gameday>17</gameday>
    <date>Jan 10, 2026</date>
    <time>21:00</time>
    <gamenumber>165</gamenumber>
    <gamecode>E2025_165</gamecode>
    <hometeam>AS MONACO</hometeam>
    <homecode>MCO</homecode>
    <homescore>91</homescore>
    <awayteam>FC BAYERN MUNICH</awayteam>
    <awaycode>MUN</awaycode>
    <awayscore>85</awayscore>
    <played>true</played>
  </game>
</results>"""

STANDINGS_XML = """<?xml version="1.0" encoding="utf-8"?>
<standings>
  <team>
    <name>AS Monaco</name>
    <code>MCO</code>
    <ranking>2</ranking>
    <totalgames>18</totalgames>
    <wins>14</wins>
    <losses>4</losses>
    <ptsfavour>1580</ptsfavour>
    <ptsagainst>1490</ptsagainst>
    <difference>90</difference>
  </team>
  <team>
    <name>Real Madrid</name>
    <code>MAD</code>
    <ranking>1</ranking>
    <totalgames>18</totalgames>
    <wins>15</wins>
    <losses>3</losses>
    <ptsfavour>1620</ptsfavour>
    <ptsagainst>1450</ptsagainst>
    <difference>170</difference>
  </team>
  <team>
    <name>Panathinaikos AKTOR Athens</name>
    <code>PAN</code>
    <ranking>3</ranking>
    <totalgames>18</totalgames>
    <wins>13</wins>
    <losses>5</losses>
    <ptsfavour>1550</ptsfavour>
    <ptsagainst>1480</ptsagainst>
    <difference>70</difference>
  </team>
</standings>"""


def _v2_game(
    identifier: str,
    date: str,
    home: tuple[str, str, str],
    away: tuple[str, str, str],
    venue: str | None,
    status: str = "confirmed",
) -> dict[str, Any]:
    def side(code: str, name: str, short: str) -> dict[str, Any]:
        return {
            "code": code,
            "name": name,
            "abbreviatedName": short,
            "score": 0,
            "imageUrls": {"crest": f"https://example.com/{code.lower()}.png"},
        }

    game: dict[str, Any] = {
        "id": f"id-{identifier}",
        "identifier": identifier,
        "date": date,
        "status": status,
        "home": side(*home),
        "away": side(*away),
    }
    if venue is not None:
        game["venue"] = {"name": venue}
    return game


V2_GAMES: dict[str, Any] = {
    "status": "success",
    "data": [
        _v2_game(
            "E2025_180",
            "2026-01-21T19:00:00.000Z",
            ("BAR", "FC Barcelona", "Barcelona"),
            ("MAD", "Real Madrid", "Real Madrid"),
            "Palau Blaugrana",
        ),
        _v2_game(
            "E2025_181",
            "2026-01-22T20:30:00.000Z",
            ("MCO", "AS Monaco", "Monaco"),
            ("PAN", "Panathinaikos AKTOR Athens", "Panathinaikos"),
            "Salle Gaston Medecin",
        ),
        _v2_game(
            "E2025_182",
            "2026-01-25T18:00:00.000Z",
            ("OLY", "Olympiacos Piraeus", "Olympiacos"),
            ("MUN", "FC Bayern Munich", "Bayern"),
            "Peace and Friendship Stadium",
        ),
    ],
    "metadata": {"totalItems": 3, "pageNumber": 0, "pageSize": 100, "totalPages": 1},
}

STANDINGS_HTML = """
<div class="standings-wrapper">
  <table class="standings">
    <thead>
      <tr><th>Pos</th><th>Team</th><th>P</th><th>W</th><th>L</th><th>Pts</th></tr>
    </thead>
    <tbody>
      <tr>
        <td>2</td>
        <td class="team-logo"><img src="https://example.com/riders.png" alt="Leicester Riders"></td>
        <td class="team-name"><a href="/team/102"><span class="team-name-full">Leicester Riders</span><span class="team-name-code">LEI</span></a></td>
        <td class="STANDINGS_played">18</td>
        <td class="STANDINGS_won">14</td>
        <td class="STANDINGS_lost">4</td>
        <td class="STANDINGS_standingPoints">32</td>
      </tr>
      <tr>
        <td>1</td>
        <td class="team-logo"><img src="https://example.com/lions.png" alt="London Lions"></td>
        <td class="team-name"><a href="/team/101"><span class="team-name-full">London Lions</span><span class="team-name-code">LIO</span></a></td>
        <td class="STANDINGS_played">18</td>
        <td class="STANDINGS_won">16</td>
        <td class="STANDINGS_lost">2</td>
        <td class="STANDINGS_standingPoints">34</td>
      </tr>
      <tr>
        <td>3</td>
        <td class="team-logo"><img src="https://example.com/eagles.png" alt="Newcastle Eagles"></td>
        <td class="team-name"><a href="/team/103"><span class="team-name-full">Newcastle Eagles</span><span class="team-name-code">NEW</span></a></td>
        <td class="STANDINGS_played">18</td>
        <td class="STANDINGS_won">12</td>
        <td class="STANDINGS_lost">6</td>
        <td class="STANDINGS_pointsFor">1500</td>
        <td class="STANDINGS_pointsAgainst">1420</td>
      </tr>
    </tbody>
  </table>
</div>
"""

SCHEDULE_HTML = """
<div class="schedule-wrapper">
  <div class="match-wrap match_1001">
    <div class="match-date">Sat 18 Jan</div>
    <div class="match-time">19:30</div>
    <div class="home-team">
      <a href="/team/101">
        <img src="https://example.com/lions.png" alt="London Lions">
        <span class="team-name"><span>London Lions</span></span>
      </a>
      <span class="team-score">92</span>
    </div>
    <div class="away-team">
      <a href="/team/102">
        <img src="https://example.com/riders.png" alt="Leicester Riders">
        <span class="team-name"><span>Leicester Riders</span></span>
      </a>
      <span class="team-score">85</span>
    </div>
    <div class="match-venue">Copper Box Arena</div>
    <div class="match-status">Final</div>
  </div>
  <div class="match-wrap match_1002">
    <div class="match-date">Sun 19 Jan</div>
    <div class="match-time">15:00</div>
    <div class="home-team">
      <a href="/team/103">
        <img src="https://example.com/eagles.png" alt="Newcastle Eagles">
        <span class="team-name"><span>Newcastle Eagles</span></span>
      </a>
      <span class="team-score">-</span>
    </div>
    <div class="away-team">
      <a href="/team/104">
        <img src="https://example.com/sharks.png" alt="Sheffield Sharks">
        <span class="team-name"><span>B. Braun Sheffield Sharks</span></span>
      </a>
      <span class="team-score">&nbsp;</span>
    </div>
    <div class="match-venue">Vertu Motors Arena</div>
    <div class="match-status">Scheduled</div>
  </div>
  <div class="match-wrap match_1003">
    <div class="match-date">Sun 19 Jan</div>
    <div class="match-time">17:00</div>
    <div class="home-team">
      <a href="/team/105">
        <img src="https://example.com/flyers.png" alt="Bristol Flyers">
        <span class="team-name"><span>Bristol Flyers</span></span>
      </a>
      <span class="team-score">78</span>
    </div>
    <div class="away-team">
      <a href="/team/106">
        <img src="https://example.com/phoenix.png" alt="Cheshire Phoenix">
        <span class="team-name"><span>Cheshire Phoenix</span></span>
      </a>
      <span class="team-score">81</span>
    </div>
    <div class="match-venue">SGS College Arena</div>
    <div class="match-status">Q3</div>
  </div>
</div>
"""


def markup_envelope(html: str) -> str:
    return json.dumps({"html": html, "css": [], "js": []})


@pytest.fixture
def results_xml() -> str:
    return RESULTS_XML


@pytest.fixture
def standings_xml() -> str:
    return STANDINGS_XML


@pytest.fixture
def v2_games() -> dict[str, Any]:
    return copy.deepcopy(V2_GAMES)


@pytest.fixture
def schedule_envelope() -> str:
    return markup_envelope(SCHEDULE_HTML)


@pytest.fixture
def standings_envelope() -> str:
    return markup_envelope(STANDINGS_HTML)

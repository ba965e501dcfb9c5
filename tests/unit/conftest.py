"""
Pytest configuration for unit tests.

Provides sample match report documents shared across parser, formatter
and pipeline tests.
"""

import pytest


TDM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<match datetime="2024/05/01 21:14:03" map="q3dm6" type="TDM" isTeamGame="true" duration="10:00">
  <team name="Red" score="5">
    <player name="Player1">
      <stat name="Score" value="5"/>
      <stat name="Kills" value="5"/>
      <stat name="Deaths" value="2"/>
      <stat name="MH" value="1"/>
      <stat name="RA" value="2"/>
      <weapon name="MG" hits="13" shots="29" kills="2"/>
      <weapon name="RL" hits="4" shots="10" kills="3"/>
      <items>
        <item name="RA" pickups="2"/>
      </items>
    </player>
  </team>
  <team name="Blue" score="0">
    <player name="Player2">
      <stat name="Score" value="0"/>
      <weapon name="SG" hits="20" shots="110" kills="0"/>
    </player>
    <player name="Player3">
      <stat name="Score" value="0"/>
    </player>
  </team>
</match>
"""

DUEL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<match datetime="2024/05/02 19:02:11" map="q3dm6" type="1v1" isTeamGame="false" duration="10:00">
  <player name="KDZ:VaNeZzz">
    <stat name="Score" value="1"/>
    <stat name="Kills" value="1"/>
    <weapon name="RG" hits="50" shots="40" kills="1"/>
  </player>
  <player name="anarki">
    <stat name="Kills" value="0"/>
  </player>
</match>
"""


@pytest.fixture
def tdm_xml() -> str:
    """Team deathmatch report: two teams, three players."""
    return TDM_XML


@pytest.fixture
def duel_xml() -> str:
    """1v1 report: players with no team wrapper."""
    return DUEL_XML


@pytest.fixture
def tdm_file(tmp_path):
    """TDM report written to a temporary file."""
    path = tmp_path / "2024-05-01_q3dm6.xml"
    path.write_text(TDM_XML, encoding="utf-8")
    return path

#!/usr/bin/env python3
"""Continent lookup: Europe overrides, library lookup, unknown names surfaced as None."""

import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from protest_continent import (  # noqa: E402
    CONTINENT_ALIASES,
    COUNTRY_ALIASES,
    assign_continents,
    lookup_continent,
)
from protest_core import EUROPE_OVERRIDES  # noqa: E402


@pytest.mark.parametrize("name", EUROPE_OVERRIDES)
def test_dissolved_states_forced_to_europe(name):
    assert lookup_continent(name) == "Europe"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("France", "Europe"),
        ("Kenya", "Africa"),
        ("Japan", "Asia"),
        ("Brazil", "South America"),
        ("Canada", "North America"),
        ("Australia", "Oceania"),
        ("South Korea", "Asia"),
    ],
)
def test_library_lookup(name, expected):
    assert lookup_continent(name) == expected


ALIAS_CONTINENTS = {
    "Bosnia": "Europe",
    "Congo Brazzaville": "Africa",
    "Congo Kinshasa": "Africa",
    "Ivory Coast": "Africa",
    "Cote d'Ivoire": "Africa",
    "Laos": "Asia",
    "North Korea": "Asia",
    "South Korea": "Asia",
    "Russia": "Europe",
    "Macedonia": "Europe",
    "Swaziland": "Africa",
    "Cape Verde": "Africa",
    "Timor Leste": "Asia",
    "Timor-Leste": "Asia",
    "East Timor": "Asia",
    "Germany West": "Europe",
}


def test_every_alias_has_a_case():
    assert set(ALIAS_CONTINENTS) == set(COUNTRY_ALIASES) | set(CONTINENT_ALIASES)


@pytest.mark.parametrize("name,expected", sorted(ALIAS_CONTINENTS.items()))
def test_alias_lookup(name, expected):
    assert lookup_continent(name) == expected


def test_unknown_country_is_none():
    assert lookup_continent("Atlantis Republic Zzz") is None
    assert lookup_continent(None) is None
    assert lookup_continent("  ") is None


def test_assign_continents_with_injected_lookup(capsys):
    calls = []

    def fake(name):
        calls.append(name)
        return {"A": "Europe", "B": "Asia"}.get(name)

    df = pd.DataFrame({"id": [1, 2, 3, 4], "country": ["A", "B", "A", "C"]})
    out = assign_continents(df, lookup=fake)
    assert out["continent"].tolist()[:3] == ["Europe", "Asia", "Europe"]
    assert pd.isna(out["continent"].iloc[3])
    assert sorted(calls) == ["A", "B", "C"]
    assert "'C'" in capsys.readouterr().out
    assert "continent" not in df.columns

#!/usr/bin/env python3
"""
PROTEST CONTINENT LOOKUP — country name → continent
===================================================
Name → ISO alpha-2 via pycountry (fuzzy), alpha-2 → continent via pycountry_convert.
Dissolved states pycountry cannot resolve are forced to Europe.
Unresolved names come back as None and are reported, never guessed.
"""

from typing import Callable, Optional

import pandas as pd
import pycountry
import pycountry_convert

from protest_core import EUROPE_OVERRIDES

# Names in the protest corpus that fuzzy search misreads or misses
COUNTRY_ALIASES = {
    "Bosnia": "BA",
    "Congo Brazzaville": "CG",
    "Congo Kinshasa": "CD",
    "Ivory Coast": "CI",
    "Cote d'Ivoire": "CI",
    "Laos": "LA",
    "North Korea": "KP",
    "South Korea": "KR",
    "Russia": "RU",
    "Macedonia": "MK",
    "Swaziland": "SZ",
    "Cape Verde": "CV",
}

# Names whose alpha-2 code pycountry_convert has no continent for, or that
# name a former state pycountry does not list
CONTINENT_ALIASES = {
    "Timor Leste": "Asia",
    "Timor-Leste": "Asia",
    "East Timor": "Asia",
    "Germany West": "Europe",
}


def _alpha2(country: str) -> Optional[str]:
    if country in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[country]
    c = pycountry.countries.get(name=country)
    if c is not None:
        return c.alpha_2
    try:
        matches = pycountry.countries.search_fuzzy(country)
    except LookupError:
        return None
    return matches[0].alpha_2 if matches else None


def lookup_continent(country) -> Optional[str]:
    """Continent name for a country name, or None when unknown."""
    if country is None or pd.isna(country):
        return None
    name = str(country).strip()
    if not name:
        return None
    if name in EUROPE_OVERRIDES:
        return "Europe"
    if name in CONTINENT_ALIASES:
        return CONTINENT_ALIASES[name]
    iso2 = _alpha2(name)
    if iso2 is None:
        return None
    try:
        code = pycountry_convert.country_alpha2_to_continent_code(iso2)
        return pycountry_convert.convert_continent_code_to_continent_name(code)
    except KeyError:
        return None


def assign_continents(
    df: pd.DataFrame,
    lookup: Callable[[str], Optional[str]] = lookup_continent,
) -> pd.DataFrame:
    """Add a continent column; one lookup per distinct country."""
    countries = df["country"].dropna().unique()
    table = {c: lookup(c) for c in countries}
    unknown = sorted(c for c, v in table.items() if v is None)
    if unknown:
        print(f"  ⚠ No continent for {len(unknown)} country name(s): {unknown}")
    out = df.copy()
    out["continent"] = df["country"].map(table)
    return out

"""
Fixed lookup tables for US states: FIPS code -> abbreviation, name -> abbreviation.

Zero-IO, stdlib only. Unknown identifiers resolve to an empty string rather than
raising, so a boundary file with extra regions still renders.
"""

from __future__ import annotations

from types import MappingProxyType

__all__ = [
    "FIPS_TO_ABBR",
    "NAME_TO_ABBR",
    "ALL_STATE_ABBRS",
    "abbr_for_fips",
    "abbr_for_name",
]

FIPS_TO_ABBR = MappingProxyType(
    {
        "01": "AL", "02": "AK", "04": "AZ", "05": "AR", "06": "CA", "08": "CO", "09": "CT",
        "10": "DE", "11": "DC", "12": "FL", "13": "GA", "15": "HI", "16": "ID", "17": "IL",
        "18": "IN", "19": "IA", "20": "KS", "21": "KY", "22": "LA", "23": "ME", "24": "MD",
        "25": "MA", "26": "MI", "27": "MN", "28": "MS", "29": "MO", "30": "MT", "31": "NE",
        "32": "NV", "33": "NH", "34": "NJ", "35": "NM", "36": "NY", "37": "NC", "38": "ND",
        "39": "OH", "40": "OK", "41": "OR", "42": "PA", "44": "RI", "45": "SC", "46": "SD",
        "47": "TN", "48": "TX", "49": "UT", "50": "VT", "51": "VA", "53": "WA", "54": "WV",
        "55": "WI", "56": "WY",
    }
)  # fmt: skip

NAME_TO_ABBR = MappingProxyType(
    {
        "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
        "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
        "District of Columbia": "DC", "Florida": "FL", "Georgia": "GA", "Hawaii": "HI",
        "Idaho": "ID", "Illinois": "IL", "Indiana": "IN", "Iowa": "IA", "Kansas": "KS",
        "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME", "Maryland": "MD",
        "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN", "Mississippi": "MS",
        "Missouri": "MO", "Montana": "MT", "Nebraska": "NE", "Nevada": "NV",
        "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM", "New York": "NY",
        "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH", "Oklahoma": "OK",
        "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI", "South Carolina": "SC",
        "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX", "Utah": "UT", "Vermont": "VT",
        "Virginia": "VA", "Washington": "WA", "West Virginia": "WV", "Wisconsin": "WI",
        "Wyoming": "WY",
    }
)  # fmt: skip

# Canonical master list for colour assignment: alphabetical by abbreviation.
ALL_STATE_ABBRS: tuple[str, ...] = tuple(sorted(FIPS_TO_ABBR.values()))


def abbr_for_fips(region_id: str | int | None) -> str:
    """Return the abbreviation for a FIPS id ('6', 6 and '06' all map to 'CA'); '' if unknown."""
    if region_id is None:
        return ""
    code = str(region_id).strip()
    if code.isdigit():
        code = code.zfill(2)
    return FIPS_TO_ABBR.get(code, "")


def abbr_for_name(name: str | None) -> str:
    if not name:
        return ""
    return NAME_TO_ABBR.get(name.strip(), "")

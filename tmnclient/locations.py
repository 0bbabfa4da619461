"""
testmy.net server locations.

The table is only used to validate ``--location`` and to print the
``--location help`` listing.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SERVER_LOCATIONS: Mapping[str, str] = MappingProxyType({
    "au2": "Australia >> Sydney, AU",
    "ca": "Bay Area US >> California, CA, USA",
    "co": "Central US >> Colorado Springs, CO, USA",
    "de": "Europe >> Frankfurt, DE",
    "fl": "East Coast US >> Miami, FL",
    "in": "Asia >> Bangalore, IN",
    "jp": "Asia >> Tokyo, JP",
    "lax": "West Coast US >> Los Angeles, CA, USA",
    "ny": "East Coast US >> New York, NY, USA",
    "sf": "West Coast US >> San Francisco, CA, USA",
    "sg": "Asia >> Singapore, SG",
    "tx": "Central US >> Dallas, TX, USA",
    "uk": "Europe >> London, GB",
})

HELP_LOCATION = "help"


def is_known(code: str) -> bool:
    return code in SERVER_LOCATIONS


def location_list(locations: Mapping[str, str] = SERVER_LOCATIONS) -> str:
    """Return the code/description listing, sorted by code."""
    lines = ["Available Locations:"]
    for code in sorted(locations):
        lines.append(f"{code:<4.4} {locations[code]}")
    return "\n".join(lines) + "\n"

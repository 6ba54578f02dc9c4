"""
Address parsing.

Extracts ``<city>, <state> <zip>`` from free-text addresses such as
``"1 Mills Circle Suite 904A Ontario, California 91764"``.

The match is a heuristic, not a grammar:

- the city group is any run of non-comma characters directly before a
  comma, so street text sharing that run ends up in ``city``
  (``"1 Mills Circle Ontario"`` in the example above);
- with several commas the first position at which the whole
  ``city, state zip`` shape matches wins, so text before an earlier comma
  is dropped rather than merged into the city;
- a zip longer than five digits is truncated to its first five.

Anything that does not match yields an unstructured ParsedAddress, which
resolves through the state/fallback tiers.
"""

import re

from addressmap.models.map_data import ParsedAddress

CITY_STATE_ZIP = re.compile(r"([^,]+),\s*([^,]+)\s+(\d{5})")


def parse_address(address_text: str) -> ParsedAddress:
    match = CITY_STATE_ZIP.search(address_text)
    if not match:
        return ParsedAddress(full_address=address_text)

    city, state, zip_code = (group.strip() for group in match.groups())
    return ParsedAddress(
        full_address=address_text,
        city=city,
        state=state,
        zip_code=zip_code,
    )

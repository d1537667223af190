"""mailexport.core.addresses

What:
  Ordered regular expressions that recognise physical addresses: street
  lines, unit markers, PO boxes, US/UK/Canadian/Australian postal codes,
  contextual address phrases, German and French street formats and major
  US cities followed by a ZIP code.

Why:
  Street addresses are the most varied kind of personal data in mail bodies.
  Keeping the set in its own module lets the redaction engine treat it as one
  category while tests can inspect and exercise it in isolation.

How:
  Vocabulary lists are joined into alternations once at import time. Generic
  patterns come first and city patterns (longest city name first) follow.
  The order is part of the behaviour: the bare ZIP pattern runs before the
  city patterns and may consume the ZIP those patterns need.

Interfaces:
  :data:`ADDRESS_PATTERNS`, :data:`CITY_PATTERNS`, :func:`address_patterns`,
  :func:`redact_addresses`.

Invariants & Safety:
  - Patterns are compiled exactly once and are safe to share across threads.
  - :func:`redact_addresses` never raises and returns the match count taken
    before placeholder runs are collapsed.
"""
from __future__ import annotations

import re
from typing import List, Pattern, Tuple

from ..utils.regex import compile_pattern


ADDRESS_PLACEHOLDER = "[REDACTED_ADDRESS]"

_FLAGS_I = re.IGNORECASE | re.ASCII
_FLAGS = re.ASCII

US_STATES = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota",
    "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada",
    "New Hampshire", "New Jersey", "New Mexico", "New York",
    "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon",
    "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
)

STREET_TYPES = (
    "Street", "St", "Avenue", "Ave", "Road", "Rd", "Drive", "Dr",
    "Lane", "Ln", "Way", "Court", "Ct", "Circle", "Cir", "Boulevard",
    "Blvd", "Place", "Pl", "Terrace", "Ter", "Parkway", "Pkwy",
    "Highway", "Hwy", "Freeway", "Fwy", "Expressway", "Expy",
    "Trail", "Trl", "Path", "Pass", "Pike", "Plaza", "Plz",
    "Alley", "Aly", "Center", "Ctr", "Commons", "Crossing", "Xing",
    "Estate", "Est", "Glen", "Green", "Grove", "Heights", "Hts",
    "Hill", "Hollow", "Junction", "Jct", "Knoll", "Lake", "Landing",
    "Loop", "Mall", "Manor", "Meadow", "Mill", "Park", "Passage",
    "Point", "Pt", "Ridge", "Row", "Run", "Square", "Sq", "Station",
    "Summit", "Trace", "Track", "Turnpike", "Tpke", "Valley", "View",
    "Village", "Vista", "Walk",
)

INTERNATIONAL_STREET_TYPES = (
    "Corte", "Calle", "Via", "Camino", "Avenida", "Paseo",
    "Cerrada", "Circulo", "Entrada", "Vereda", "Sendero", "Callejon",
    "Rue", "Strasse", "Straße", "Gasse", "Weg", "Platz",
)

UNIT_TYPES = (
    "Apt", "Apartment", "Suite", "Ste", "Unit", "Bldg", "Building",
    "Floor", "Fl", "Room", "Rm", "Dept", "Department", "Lot",
    "Space", "Spc", "Slip", "Pier", "Hangar", "Trlr", "Trailer",
)

DIRECTIONS = (
    "N", "S", "E", "W", "NE", "NW", "SE", "SW",
    "North", "South", "East", "West",
    "Northeast", "Northwest", "Southeast", "Southwest",
)

MAJOR_CITIES = (
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose",
    "Austin", "Jacksonville", "Fort Worth", "Columbus", "Charlotte",
    "San Francisco", "Indianapolis", "Seattle", "Denver", "Boston",
    "El Paso", "Nashville", "Detroit", "Portland", "Memphis",
    "Oklahoma City", "Las Vegas", "Louisville", "Baltimore", "Milwaukee",
    "Albuquerque", "Tucson", "Fresno", "Sacramento", "Kansas City",
    "Mesa", "Atlanta", "Omaha", "Colorado Springs", "Raleigh",
    "Long Beach", "Virginia Beach", "Miami", "Oakland", "Minneapolis",
    "Tulsa", "Bakersfield", "Wichita", "Arlington", "Aurora",
    "Tampa", "New Orleans", "Cleveland", "Honolulu", "Anaheim",
    "Lexington", "Stockton", "Corpus Christi", "Henderson", "Riverside",
    "Newark", "Saint Paul", "Santa Ana", "Cincinnati", "Irvine",
    "Orlando", "Pittsburgh", "St. Louis", "Greensboro", "Jersey City",
    "Anchorage", "Lincoln", "Plano", "Durham", "Buffalo",
    "Chandler", "Chula Vista", "Toledo", "Madison", "Gilbert",
    "Reno", "Fort Wayne", "North Las Vegas", "St. Petersburg", "Lubbock",
    "Irving", "Laredo", "Winston-Salem", "Chesapeake", "Glendale",
    "Garland", "Scottsdale", "Norfolk", "Boise", "Fremont",
    "Spokane", "Santa Clarita", "Baton Rouge", "Richmond", "Hialeah",
    # San Diego county
    "Carlsbad", "Oceanside", "Escondido", "Vista", "Encinitas",
    "San Marcos", "Poway", "La Jolla", "Del Mar", "Solana Beach",
    "Rancho Santa Fe", "Coronado", "National City",
    "Imperial Beach", "La Mesa", "El Cajon", "Santee", "Lakeside",
)

_SHORT_STREET_TYPES = "Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Way|Court|Ct|Boulevard|Blvd"
_CROSS_STREET_TYPES = "Street|St|Avenue|Ave|Road|Rd|Drive|Dr"
_PLACEHOLDER_RUN_RE = re.compile(r"(\[REDACTED_ADDRESS\]\s*)+")


def _longest_first(values: Tuple[str, ...]) -> List[str]:
    # sorted() is stable, so equal-length entries keep their declared order.
    return sorted(values, key=len, reverse=True)


def _alternation(values) -> str:
    return "|".join(re.escape(value) for value in values)


def _build_address_patterns() -> Tuple[Pattern[str], ...]:
    street_types = _alternation(dict.fromkeys(STREET_TYPES + INTERNATIONAL_STREET_TYPES))
    unit_types = _alternation(UNIT_TYPES)
    states = _alternation(_longest_first(US_STATES))
    directions = _alternation(DIRECTIONS)
    sources = (
        (
            rf"\b[0-9]{{1,6}}\s+(?:(?:{directions})\.?\s+)?[A-Za-z0-9\s]{{1,30}}(?:{street_types})\.?"
            rf"(?:\s*[,.]?\s*(?:{unit_types})\.?\s*#?\s*[A-Za-z0-9\-]+)?\b",
            _FLAGS_I,
        ),
        (
            rf"\b[0-9]{{1,6}}\s+(?:(?:{directions})\.?\s+)?[A-Za-z]+(?:\s+[A-Za-z]+)?\s+(?:{street_types})\b",
            _FLAGS_I,
        ),
        (rf"\b(?:{unit_types})\.?\s*#?\s*[0-9A-Z]{{1,6}}\b", _FLAGS_I),
        (r"\b#\s*[0-9]{1,5}[A-Z]?\b", _FLAGS_I),
        (r"\b(?:P\.?\s*O\.?\s*Box|Post\s*Office\s*Box|POB)\s*#?\s*[0-9]+\b", _FLAGS_I),
        (
            rf"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*[,.]?\s*(?:{states})\s*[0-9]{{5}}(?:-[0-9]{{4}})?\b",
            _FLAGS_I,
        ),
        (rf"\b(?:{states})\s+[0-9]{{5}}(?:-[0-9]{{4}})?\b", _FLAGS),
        (r"\b[0-9]{5}(?:-[0-9]{4})?\b", _FLAGS),
        (r"\b[A-Z]{1,2}[0-9][A-Z0-9]?\s*[0-9][A-Z]{2}\b", _FLAGS_I),
        (r"\b[A-Z][0-9][A-Z]\s*[0-9][A-Z][0-9]\b", _FLAGS_I),
        (r"\b(?:NSW|VIC|QLD|SA|WA|TAS|NT|ACT)\s*[0-9]{4}\b", _FLAGS_I),
        (
            r"\b(?:address|ship(?:ping)?|deliver(?:y)?|mail(?:ing)?|located?\s*at|residence|home)"
            r"\s*(?:to|at|is)?:?\s*[0-9]{1,6}\s+[A-Za-z0-9\s,.]{10,100}",
            _FLAGS_I,
        ),
        (rf"\bat\s+[0-9]{{1,6}}\s+[A-Za-z]+(?:\s+[A-Za-z]+){{0,3}}\s+(?:{_SHORT_STREET_TYPES})\b", _FLAGS_I),
        (
            rf"\b[A-Za-z0-9]+\s+(?:{_CROSS_STREET_TYPES})\s*(?:&|and)\s*[A-Za-z0-9]+\s+(?:{_CROSS_STREET_TYPES})\b",
            _FLAGS_I,
        ),
        (r"\b(?:Floor|Level|Fl)\s*#?\s*[0-9]{1,3}\b", _FLAGS_I),
        (r"\b[0-9]{1,2}(?:st|nd|rd|th)\s+(?:Floor|Level)\b", _FLAGS_I),
        (r"\b(?:Building|Bldg)\s*#?\s*[A-Z0-9]{1,5}\b", _FLAGS_I),
        (r"\bC/O\s+[A-Za-z\s]+", _FLAGS_I),
        (r"\bAttn:?\s+[A-Za-z\s]+", _FLAGS_I),
        (r"\b[A-Za-zäöüÄÖÜß]+(?:straße|strasse|gasse|weg|platz|allee)\s*[0-9]+[A-Za-z]?\b", _FLAGS_I),
        (r"\b[0-9]+\s+(?:Rue|Avenue|Boulevard|Place|Chemin|Allée)\s+[A-Za-z\s]+", _FLAGS_I),
    )
    return tuple(compile_pattern(source, flags) for source, flags in sources)


def _build_city_patterns() -> Tuple[Pattern[str], ...]:
    cities = _longest_first(tuple(dict.fromkeys(MAJOR_CITIES)))
    return tuple(
        compile_pattern(rf"\b{re.escape(city)}\s*[,.]?\s*(?:[A-Z]{{2}}\s*)?[0-9]{{5}}(?:-[0-9]{{4}})?\b", _FLAGS_I)
        for city in cities
    )


ADDRESS_PATTERNS: Tuple[Pattern[str], ...] = _build_address_patterns()
CITY_PATTERNS: Tuple[Pattern[str], ...] = _build_city_patterns()


def address_patterns() -> Tuple[Pattern[str], ...]:
    """Return the full ordered set: generic patterns, then city patterns."""

    return ADDRESS_PATTERNS + CITY_PATTERNS


def redact_addresses(text: str) -> Tuple[str, int]:
    """Replace every address match and collapse adjacent placeholders.

    Each pattern is applied in order to the text produced by the previous
    one. Runs of consecutive placeholders (with any whitespace between them)
    become a single ``"[REDACTED_ADDRESS] "``.

    Returns:
      The redacted text and the number of matches replaced.
    """

    total = 0
    for pattern in address_patterns():
        text, count = pattern.subn(ADDRESS_PLACEHOLDER, text)
        total += count
    return _PLACEHOLDER_RUN_RE.sub(ADDRESS_PLACEHOLDER + " ", text), total

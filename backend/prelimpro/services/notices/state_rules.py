"""
State Rules

Per-state lookup tables for preliminary notices:
- which statutory template applies
- how many days after first furnishing the notice is due
- which states require no preliminary notice at all

All lookups accept a full state name ("California") or a USPS code ("CA").
Unknown states never raise - they fall back to the default template and
have no computed deadline.
"""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Union

from dateutil import parser as date_parser

from ...models.notice import StateNoticeTemplate
from .templates import STATE_NOTICE_TEMPLATES, DEFAULT_NOTICE_TEMPLATE


# =============================================================================
# STATE NAMES
# =============================================================================

STATE_ABBREVIATIONS: Dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

STATE_CODES: Dict[str, str] = {name: code for code, name in STATE_ABBREVIATIONS.items()}

# 50 states + DC, alphabetical
US_STATES: List[str] = sorted(STATE_ABBREVIATIONS.values())


# =============================================================================
# NOTICE REQUIREMENTS
# =============================================================================

# States where subcontractors and suppliers are not required to serve a
# preliminary notice to preserve lien rights.
NO_NOTICE_STATES = frozenset([
    "New York",
    "Pennsylvania",
    "Indiana",
    "Vermont",
    "New Hampshire",
    "Rhode Island",
    "Connecticut",
    "Delaware",
    "Maryland",
    "Virginia",
    "West Virginia",
    "Kentucky",
    "North Carolina",
    "South Carolina",
])

# Days after first furnishing within which the notice must be served
STATE_DEADLINES: Dict[str, int] = {
    "California": 20,
    "Texas": 15,
    "Florida": 45,
    "Arizona": 20,
    "Nevada": 31,
    "Colorado": 10,
    "Washington": 60,
    "Oregon": 8,
    "Utah": 20,
    "New Mexico": 60,
    "Montana": 20,
    "Idaho": 20,
    "Wyoming": 30,
    "North Dakota": 40,
    "South Dakota": 45,
    "Nebraska": 60,
    "Kansas": 30,
    "Oklahoma": 75,
    "Missouri": 60,
    "Iowa": 30,
    "Minnesota": 45,
    "Wisconsin": 60,
    "Illinois": 60,
    "Michigan": 20,
    "Ohio": 21,
    "Tennessee": 90,
    "Georgia": 30,
    "Alabama": 30,
    "Mississippi": 15,
    "Louisiana": 30,
    "Arkansas": 75,
    "Maine": 30,
    "Massachusetts": 60,
    "Alaska": 15,
    "Hawaii": 45,
    "District of Columbia": 30,
}


# =============================================================================
# LOOKUPS
# =============================================================================

_NAMES_BY_LOWER = {name.lower(): name for name in US_STATES}


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Resolve a state name or USPS code to its canonical full name.

    Returns the stripped input unchanged when it is not a known state,
    and None for empty input.
    """
    if state is None:
        return None
    value = state.strip()
    if not value:
        return None
    if len(value) == 2 and value.upper() in STATE_ABBREVIATIONS:
        return STATE_ABBREVIATIONS[value.upper()]
    return _NAMES_BY_LOWER.get(value.lower(), value)


def get_state_code(state: Optional[str]) -> Optional[str]:
    """Two-letter code for a state, or None if unknown."""
    return STATE_CODES.get(normalize_state(state) or "")


def get_state_template(state: Optional[str]) -> StateNoticeTemplate:
    """Statutory template for a state. Unlisted or unknown states get the default."""
    name = normalize_state(state)
    if name is None:
        return DEFAULT_NOTICE_TEMPLATE
    return STATE_NOTICE_TEMPLATES.get(name, DEFAULT_NOTICE_TEMPLATE)


def has_specific_template(state: Optional[str]) -> bool:
    return normalize_state(state) in STATE_NOTICE_TEMPLATES


def get_deadline_days(state: Optional[str]) -> Optional[int]:
    return STATE_DEADLINES.get(normalize_state(state) or "")


def is_notice_required(state: Optional[str]) -> bool:
    """True unless the state is one where no preliminary notice is required."""
    return normalize_state(state) not in NO_NOTICE_STATES


def _coerce_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value).date()


def calculate_deadline(
    state: Optional[str],
    furnishing_date: Optional[Union[date, datetime, str]],
) -> Optional[date]:
    """
    Notice deadline = first furnishing date + statutory days for the state.

    Returns None when the state has no mapped deadline or no date is given.
    """
    days = get_deadline_days(state)
    if days is None or not furnishing_date:
        return None
    return _coerce_date(furnishing_date) + timedelta(days=days)

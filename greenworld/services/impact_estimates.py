"""
Fixed-ratio impact estimates.

None of these are measured: no data links a sponsor's money to a specific
outcome, so dashboards derive headline numbers from total funding using
constant ratios. Keep them labelled as estimates wherever they are shown.
"""

import math
import re

FUNDING_PER_TON_CO2 = 500
FUNDING_PER_TREE = 10
WATER_LITERS_PER_FUNDING_UNIT = 4.2
ESTIMATED_IMPACT_ROI_PERCENT = 18
IMPACT_POINTS_PER_HOUR = 35

_FIRST_NUMBER = re.compile(r"\d[\d,]*")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def funding_percent(received: int, goal: int) -> int:
    """Progress-bar percentage; a zero goal counts as 1 to avoid dividing by zero."""
    return round_half_up(received / max(goal, 1) * 100)


def estimate_co2_offset_tons(funding_received: int) -> int:
    return round_half_up(funding_received / FUNDING_PER_TON_CO2)


def estimate_trees_planted(funding_received: int) -> int:
    return math.floor(funding_received / FUNDING_PER_TREE)


def estimate_water_saved(funding_received: int) -> int:
    return math.floor(funding_received * WATER_LITERS_PER_FUNDING_UNIT)


def estimate_impact_roi() -> int:
    """Flat figure based on budget utilization, not computed from data."""
    return ESTIMATED_IMPACT_ROI_PERCENT


def volunteer_impact_score(hours: int) -> int:
    return round_half_up(hours * IMPACT_POINTS_PER_HOUR)


def parse_impact_count(value: str | None) -> int:
    """
    Best-effort integer from free text such as "5,000 trees".

    Uses the first number in the text; returns 0 when there is none.
    """
    if not value:
        return 0
    match = _FIRST_NUMBER.search(value)
    if match is None:
        return 0
    digits = match.group(0).replace(",", "")
    return int(digits) if digits else 0

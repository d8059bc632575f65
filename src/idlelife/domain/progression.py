"""Attribute growth curves and lifespan constants."""
from __future__ import annotations

import math

DAYS_PER_YEAR = 365
INITIAL_AGE = 18 * DAYS_PER_YEAR
INITIAL_BASE_LIFESPAN = 30 * DAYS_PER_YEAR
INITIAL_MONEY = 300
REINCARNATION_LIFESPAN_BONUS = 1
STAT_LIFESPAN_FACTOR = 0.8
APTITUDE_GAIN_DIVISOR = 100


def aptitude_multiplier(aptitude: float) -> float:
    """Return the gain multiplier applied to raw attribute increases.

    Each tier grants less multiplier per point of aptitude than the one
    before it, so the curve flattens out without ever decreasing.
    """
    if aptitude < 10:
        return aptitude
    if aptitude < 100:
        return 10 + (aptitude - 10) / 2
    if aptitude < 1000:
        return 100 + (aptitude - 100) / 10
    return 1000 + math.log2(aptitude - 999)


def attribute_starting_value(aptitude: float) -> float:
    """Return the head-start value an attribute begins a new life with."""
    if aptitude < 1000:
        return aptitude
    return 1000 + math.log2(aptitude - 999)


def aptitude_gain(value: float) -> float:
    """Permanent aptitude earned from an attribute value at the end of a life."""
    return value / APTITUDE_GAIN_DIVISOR


def compute_stat_lifespan(total_aptitude: float, attribute_count: int) -> float:
    return STAT_LIFESPAN_FACTOR * (total_aptitude / attribute_count)


def days_to_years(days: float) -> int:
    return int(days // DAYS_PER_YEAR)

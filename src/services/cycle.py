"""
Service module for menstrual cycle projection and phase classification.

This module is the cycle engine: given a day and a user's cycle profile it
works out the day of the cycle, the phase and whether the day falls in the
fertile window, and it predicts when the next cycle starts. Everything here
is a pure function of its arguments, so it is safe to call once per calendar
cell, in any order, from any thread.

Typical usage:
    profile = CycleProfile(cycle_start_date=date(2024, 1, 1),
                           cycle_length_days=28, period_duration_days=5)
    info = classify(date(2024, 1, 12), profile)
    next_start = next_occurrence(profile)
"""
from typing import Optional, Tuple
from datetime import date, timedelta

from aws_lambda_powertools import Logger
from src.models.cycle import CycleInfo, CyclePhase, CycleProfile
from src.services.constants import (
    LUTEAL_PHASE_DAYS,
    FERTILE_WINDOW_RADIUS,
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_PERIOD_DURATION
)
from src.services.exceptions import InvalidProfile
from src.utils.dates import normalize_date

logger = Logger()

def validate_profile(profile: CycleProfile) -> None:
    """
    Check the numeric invariants of a cycle profile.

    Args:
        profile: Profile to check

    Raises:
        InvalidProfile: If the cycle length is not positive, the period
            duration is negative, or the period is longer than the cycle
    """
    if not isinstance(profile, CycleProfile):
        raise InvalidProfile(f"Expected a CycleProfile, got {type(profile).__name__}")

    length = profile.cycle_length_days
    duration = profile.period_duration_days

    if length <= 0:
        reason = f"Cycle length must be positive, got {length}"
    elif duration < 0:
        reason = f"Period duration cannot be negative, got {duration}"
    elif duration > length:
        reason = f"Period duration ({duration}) exceeds cycle length ({length})"
    else:
        return

    logger.warning("Rejected cycle profile", extra={
        "cycle_length_days": length,
        "period_duration_days": duration
    })
    raise InvalidProfile(reason)

def _whole_days(value, label: str) -> int:
    """Convert a form value to a whole number of days without rounding."""
    if isinstance(value, bool):
        raise InvalidProfile(f"The {label} must be a number of days, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidProfile(f"The {label} must be a whole number of days, got {value!r}")

def profile_from_form(
    last_period_start,
    cycle_type: str = "regular",
    cycle_length: Optional[int] = None,
    period_duration: int = DEFAULT_PERIOD_DURATION
) -> CycleProfile:
    """
    Build a validated profile from the onboarding form values.

    A "regular" cycle always uses the default 28-day length; an "irregular"
    cycle takes the length the user entered.

    Args:
        last_period_start: First day of the most recent period
        cycle_type: "regular" or "irregular"
        cycle_length: Average cycle length, required for irregular cycles
        period_duration: Number of bleeding days

    Returns:
        CycleProfile that satisfies all invariants

    Raises:
        InvalidProfile: If the cycle type is unknown, an irregular cycle has no
            length, or the resulting profile is invalid
        InvalidDate: If the start date cannot be parsed
    """
    if cycle_type == "regular":
        cycle_length = DEFAULT_CYCLE_LENGTH
    elif cycle_type == "irregular":
        if cycle_length is None:
            raise InvalidProfile("Irregular cycles need a cycle length")
    else:
        raise InvalidProfile(f"Unknown cycle type: {cycle_type}")

    profile = CycleProfile(
        cycle_start_date=last_period_start,
        cycle_length_days=_whole_days(cycle_length, "cycle length"),
        period_duration_days=_whole_days(period_duration, "period duration")
    )
    validate_profile(profile)
    return profile

def fertile_window(cycle_length_days: int) -> Tuple[int, int]:
    """
    Get the fertile window as inclusive cycle days.

    Ovulation is placed LUTEAL_PHASE_DAYS before the end of the cycle and the
    window spans FERTILE_WINDOW_RADIUS days on each side of it.

    Example:
        >>> fertile_window(28)
        (12, 16)
    """
    ovulation_day = cycle_length_days - LUTEAL_PHASE_DAYS
    return ovulation_day - FERTILE_WINDOW_RADIUS, ovulation_day + FERTILE_WINDOW_RADIUS

def classify(target_date, profile: CycleProfile) -> CycleInfo:
    """
    Classify a day against a cycle profile.

    The cycle is projected infinitely in both directions from
    ``profile.cycle_start_date``, so days before the recorded start fall into
    the matching day of an earlier cycle.

    Args:
        target_date: Day to classify (date, datetime or ISO string)
        profile: The user's cycle profile

    Returns:
        CycleInfo with the 1-based day of cycle, phase and fertility flag

    Raises:
        InvalidProfile: If the profile breaks its invariants
        InvalidDate: If the date is missing or unparseable

    Example:
        >>> info = classify(date(2023, 12, 31), profile)  # day before start
        >>> info.day_of_cycle, info.phase
        (28, <CyclePhase.LUTEAL: 'Luteal'>)
    """
    validate_profile(profile)
    check_date = normalize_date(target_date)
    length = profile.cycle_length_days

    raw_offset = (check_date - profile.cycle_start_date).days
    # Python's % takes the sign of the divisor, so negative offsets wrap
    # into the previous cycle
    days_since_start = raw_offset % length
    day_of_cycle = days_since_start + 1

    window_start, window_end = fertile_window(length)

    # Earlier rules win where the ranges overlap on very short cycles
    if day_of_cycle <= profile.period_duration_days:
        return CycleInfo(day_of_cycle=day_of_cycle, phase=CyclePhase.MENSTRUAL, is_fertile=False)
    if window_start <= day_of_cycle <= window_end:
        return CycleInfo(day_of_cycle=day_of_cycle, phase=CyclePhase.OVULATION, is_fertile=True)
    if day_of_cycle < window_start:
        return CycleInfo(day_of_cycle=day_of_cycle, phase=CyclePhase.FOLLICULAR, is_fertile=False)
    return CycleInfo(day_of_cycle=day_of_cycle, phase=CyclePhase.LUTEAL, is_fertile=False)

def next_occurrence(profile: CycleProfile, after=None) -> date:
    """
    Predict the next cycle start strictly after a reference date.

    Args:
        profile: The user's cycle profile
        after: Reference date, defaults to today

    Returns:
        First projected cycle start later than ``after``. The result is always
        at most one cycle length past ``after``; if ``after`` precedes the
        recorded start the cycle is projected backward to find it.

    Raises:
        InvalidProfile: If the profile breaks its invariants
        InvalidDate: If ``after`` is given but cannot be parsed

    Example:
        >>> next_occurrence(profile, after=date(2024, 1, 15))
        datetime.date(2024, 1, 29)
    """
    validate_profile(profile)
    reference = date.today() if after is None else normalize_date(after)
    step = timedelta(days=profile.cycle_length_days)

    candidate = profile.cycle_start_date
    while candidate <= reference:
        candidate += step
    while candidate - step > reference:
        candidate -= step

    logger.debug("Projected next cycle start", extra={
        "after": reference.isoformat(),
        "next_start": candidate.isoformat()
    })
    return candidate

def days_until(profile: CycleProfile, today=None) -> int:
    """
    Count the days from today until the next predicted cycle start.

    Returns:
        Number of days, always at least 1
    """
    reference = date.today() if today is None else normalize_date(today)
    return (next_occurrence(profile, reference) - reference).days

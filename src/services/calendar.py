"""
Month calendar grid built on top of the cycle engine.

Typical usage:
    >>> grid = build_month_grid(date(2024, 1, 1), profile)
    >>> [cell.phase for cell in grid if cell.is_today]
"""
from typing import List, Tuple
from datetime import date, timedelta

from src.models.cycle import CyclePhase, CycleProfile, DayData
from src.services.constants import PHASE_ORDER, PHASE_DESCRIPTIONS
from src.services.cycle import classify, normalize_date, validate_profile

def month_bounds(month) -> Tuple[date, date]:
    """
    Get the first and last day of the month containing ``month``.
    """
    first = normalize_date(month).replace(day=1)
    last = shift_month(first, 1) - timedelta(days=1)
    return first, last

def shift_month(month, delta: int) -> date:
    """
    Get the first day of the month ``delta`` months away.

    Example:
        >>> shift_month(date(2024, 1, 31), -1)
        datetime.date(2023, 12, 1)
    """
    current = normalize_date(month)
    index = current.year * 12 + (current.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)

def build_month_grid(month, profile: CycleProfile, today=None) -> List[DayData]:
    """
    Build the calendar cells for a month view.

    The grid starts on the Sunday on or before the first of the month and
    ends on the Saturday on or after its last day, so it always holds whole
    weeks. Every cell is classified independently.

    Args:
        month: Any day of the month to show
        profile: The user's cycle profile
        today: Day to highlight, defaults to the current date

    Returns:
        List of DayData, one per cell, in display order

    Raises:
        InvalidProfile: If the profile breaks its invariants
        InvalidDate: If ``month`` or ``today`` cannot be parsed
    """
    validate_profile(profile)
    today = date.today() if today is None else normalize_date(today)
    first, last = month_bounds(month)

    # date.weekday() is Monday=0, the grid starts on Sunday
    grid_start = first - timedelta(days=(first.weekday() + 1) % 7)
    grid_end = last + timedelta(days=(5 - last.weekday()) % 7)

    cells = []
    current = grid_start
    while current <= grid_end:
        info = classify(current, profile)
        cells.append(DayData(
            date=current,
            is_current_month=current.month == first.month and current.year == first.year,
            is_today=current == today,
            day_of_cycle=info.day_of_cycle,
            phase=info.phase,
            is_fertile=info.is_fertile
        ))
        current += timedelta(days=1)

    return cells

def phase_legend() -> List[Tuple[CyclePhase, str]]:
    """Get the phases in cycle order with their descriptions."""
    return [(phase, PHASE_DESCRIPTIONS[phase]) for phase in PHASE_ORDER]

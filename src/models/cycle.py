"""
Cycle model definitions: the user's cycle parameters and the derived
per-day classification.
"""
from enum import Enum
from datetime import date
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.dates import normalize_date

class CyclePhase(str, Enum):
    """
    Menstrual cycle phases.
    """
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"

class CycleProfile(BaseModel):
    """
    Cycle parameters entered by the user.

    The start date is reduced to a calendar day (time of day dropped) and
    the day counts must be real integers. The numeric invariants
    (positive length, period not longer than the cycle) are enforced by
    ``src.services.cycle.validate_profile`` so that a bad stored record is
    reported as ``InvalidProfile`` instead of being silently clamped.
    """
    model_config = ConfigDict(frozen=True)

    cycle_start_date: date
    cycle_length_days: int = Field(..., strict=True)
    period_duration_days: int = Field(..., strict=True)

    @field_validator("cycle_start_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, value):
        return normalize_date(value)

class CycleInfo(BaseModel):
    """
    Classification of a single day. Recomputed on every query.
    """
    model_config = ConfigDict(frozen=True)

    day_of_cycle: int
    phase: CyclePhase
    is_fertile: bool

class DayData(BaseModel):
    """
    One cell of the month calendar grid.
    """
    model_config = ConfigDict(frozen=True)

    date: date
    is_current_month: bool
    is_today: bool
    day_of_cycle: int
    phase: CyclePhase
    is_fertile: bool

    @property
    def is_menstrual(self) -> bool:
        """Check if the day falls in the bleeding days."""
        return self.phase == CyclePhase.MENSTRUAL

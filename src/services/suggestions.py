"""
Service module for phase-based partner suggestions.

This module pairs the phase of the day with static suggestions and builds
the request text for the external insight generator. It never calls that
generator itself.

Typical usage:
    >>> daily = get_daily_suggestions(profile, "Alex")
    >>> for suggestion in daily.suggestions:
    ...     print(suggestion.text)
"""
from typing import Dict, Any, List, Optional
from datetime import date

from aws_lambda_powertools import Logger
from src.models.cycle import CycleInfo, CyclePhase, CycleProfile
from src.models.suggestion import DailySuggestions, Suggestion
from src.services.constants import (
    PARTNER_SUGGESTIONS,
    PHASE_DESCRIPTIONS,
    INSIGHT_SYSTEM_INSTRUCTION,
    INSIGHT_TEMPERATURE,
    INSIGHT_FALLBACK
)
from src.services.cycle import classify, normalize_date

logger = Logger()

def get_phase_suggestions(phase: CyclePhase) -> List[Suggestion]:
    """
    Get the partner suggestions for a phase.

    Args:
        phase: Cycle phase

    Returns:
        List of Suggestion objects in display order
    """
    return [
        Suggestion(category=category, text=text)
        for category, text in PARTNER_SUGGESTIONS[phase]
    ]

def build_insight_prompt(info: CycleInfo, cycle_length_days: int) -> str:
    """
    Build the request sent to the insight generator for one day.

    Args:
        info: Classification of the day
        cycle_length_days: Length of the user's cycle

    Returns:
        Prompt text describing the day and the phase
    """
    phase = info.phase.value
    return (
        f"The user is currently in the {phase} phase "
        f"(Day {info.day_of_cycle} of a {cycle_length_days}-day cycle). "
        "Provide a brief, supportive, and romantic tip (max 2 sentences) for their "
        "partner to help them feel loved and understood today. "
        f"Focus on the hormonal shift of the {phase} phase."
    )

def build_insight_request(info: CycleInfo, cycle_length_days: int) -> Dict[str, Any]:
    """
    Build the full request for the insight generator.

    Returns:
        Dictionary with the prompt, system instruction and sampling
        temperature. Callers show INSIGHT_FALLBACK when the request fails.
    """
    return {
        "contents": build_insight_prompt(info, cycle_length_days),
        "system_instruction": INSIGHT_SYSTEM_INSTRUCTION,
        "temperature": INSIGHT_TEMPERATURE
    }

def get_daily_suggestions(
    profile: CycleProfile,
    name: str,
    today: Optional[date] = None
) -> DailySuggestions:
    """
    Assemble everything the suggestions panel shows for a day.

    Args:
        profile: The user's cycle profile
        name: Display name of the tracked person
        today: Day to describe, defaults to the current date

    Returns:
        DailySuggestions for the day

    Raises:
        InvalidProfile: If the profile breaks its invariants
        InvalidDate: If ``today`` cannot be parsed
    """
    day = date.today() if today is None else normalize_date(today)
    info = classify(day, profile)

    logger.info("Daily suggestions assembled", extra={
        "phase": info.phase.value,
        "day_of_cycle": info.day_of_cycle
    })

    return DailySuggestions(
        name=name,
        date=day,
        day_of_cycle=info.day_of_cycle,
        phase=info.phase,
        is_fertile=info.is_fertile,
        description=PHASE_DESCRIPTIONS[info.phase],
        suggestions=get_phase_suggestions(info.phase),
        insight_prompt=build_insight_prompt(info, profile.cycle_length_days),
        insight_fallback=INSIGHT_FALLBACK
    )

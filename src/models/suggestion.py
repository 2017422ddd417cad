"""
Suggestion models for phase-based partner tips.
"""
from typing import List
from datetime import date
from pydantic import BaseModel, Field

from src.models.cycle import CyclePhase

class Suggestion(BaseModel):
    """
    A single partner suggestion with its category.
    """
    category: str = Field(..., pattern="^(comfort|care|adventure|romance|food|reflection|social)$")
    text: str

class DailySuggestions(BaseModel):
    """
    Everything the suggestions panel shows for one day.
    """
    name: str
    date: date
    day_of_cycle: int = Field(..., ge=1)
    phase: CyclePhase
    is_fertile: bool
    description: str
    suggestions: List[Suggestion]
    insight_prompt: str
    insight_fallback: str

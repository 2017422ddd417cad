"""
Constants and shared data for cycle-related services.
"""
from typing import Dict, List
from src.models.cycle import CyclePhase

# Luteal phase length is fixed by convention, whatever the cycle length
LUTEAL_PHASE_DAYS = 14

# Fertile days on each side of the ovulation day
FERTILE_WINDOW_RADIUS = 2

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_DURATION = 5

PHASE_ORDER: List[CyclePhase] = [
    CyclePhase.MENSTRUAL,
    CyclePhase.FOLLICULAR,
    CyclePhase.OVULATION,
    CyclePhase.LUTEAL
]

PHASE_DESCRIPTIONS: Dict[CyclePhase, str] = {
    CyclePhase.MENSTRUAL: "Rest and restoration. Focus on comfort.",
    CyclePhase.FOLLICULAR: "Energy begins to rise. Perfect for planning.",
    CyclePhase.OVULATION: "Peak energy and social drive. High fertility.",
    CyclePhase.LUTEAL: "Turning inward. Gentleness and stability are key.",
}

# Partner suggestions as (category, text) pairs
PARTNER_SUGGESTIONS = {
    CyclePhase.MENSTRUAL: [
        ("comfort", "Prepare a warm compress and their favorite tea."),
        ("care", "Offer a gentle foot massage or back rub."),
        ("care", "Take over their chores so they can rest."),
        ("food", "Cook a nutrient-rich warm meal like a stew.")
    ],
    CyclePhase.FOLLICULAR: [
        ("adventure", "Plan an exciting weekend getaway or day trip."),
        ("romance", "Surprise them with a small 'just because' gift."),
        ("adventure", "Go for a scenic walk or try a new hobby together."),
        ("reflection", "Write a list of things you appreciate about them.")
    ],
    CyclePhase.OVULATION: [
        ("food", "Dress up and go for a fancy candlelit dinner."),
        ("romance", "Write a deeply heartfelt love letter."),
        ("social", "Plan a social evening with your favorite couple friends."),
        ("reflection", "Initiate a meaningful conversation about your future.")
    ],
    CyclePhase.LUTEAL: [
        ("comfort", "Create a cozy 'nest' at home for a movie marathon."),
        ("care", "Listen deeply and offer validation without fixing."),
        ("food", "Order their favorite comfort food for delivery."),
        ("reflection", "Spend a quiet evening reading side-by-side.")
    ]
}

SUGGESTION_CATEGORIES = {
    "comfort", "care", "adventure", "romance", "food", "reflection", "social"
}

# Settings handed to the external text-generation collaborator
INSIGHT_SYSTEM_INSTRUCTION = (
    "You are a thoughtful relationship and wellness coach for CycleCare+. "
    "Be concise, warm, and encouraging."
)
INSIGHT_TEMPERATURE = 0.7
INSIGHT_FALLBACK = "Focus on gentle presence and active listening today."

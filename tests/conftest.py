"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date
from unittest.mock import Mock

from src.models.cycle import CycleProfile
from src.models.user import User

@pytest.fixture
def standard_profile() -> CycleProfile:
    """28-day cycle with a 5-day period starting 2024-01-01."""
    return CycleProfile(
        cycle_start_date=date(2024, 1, 1),
        cycle_length_days=28,
        period_duration_days=5
    )

@pytest.fixture
def long_profile() -> CycleProfile:
    """35-day cycle with a 7-day period."""
    return CycleProfile(
        cycle_start_date=date(2024, 3, 10),
        cycle_length_days=35,
        period_duration_days=7
    )

@pytest.fixture
def short_profile() -> CycleProfile:
    """Very short cycle where the fertile window starts inside the period."""
    return CycleProfile(
        cycle_start_date=date(2024, 1, 1),
        cycle_length_days=20,
        period_duration_days=5
    )

@pytest.fixture
def sample_user(standard_profile) -> User:
    """Create a sample user with a cycle profile."""
    return User(
        user_id="4f1c2a",
        email="alex@example.com",
        name="Alex",
        profile=standard_profile,
        created_at=1704067200000
    )

@pytest.fixture
def mock_user_item() -> dict:
    """Stored DynamoDB item for the sample user."""
    return {
        "PK": "USER#alex@example.com",
        "SK": "PROFILE",
        "user_id": "4f1c2a",
        "email": "alex@example.com",
        "name": "Alex",
        "created_at": 1704067200000,
        "profile": {
            "cycle_start_date": "2024-01-01",
            "cycle_length_days": 28,
            "period_duration_days": 5
        }
    }

@pytest.fixture
def mock_dynamo() -> Mock:
    """DynamoDB client with nothing stored."""
    dynamo = Mock()
    dynamo.get_item.return_value = None
    return dynamo

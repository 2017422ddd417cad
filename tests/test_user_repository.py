"""
Tests for user and session storage.
"""
import pytest
from datetime import date
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from src.models.cycle import CycleProfile
from src.services.exceptions import InvalidProfile, RepositoryError
from src.services.user_repository import UserRepository

def client_error(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
        operation
    )

@pytest.fixture
def repo(mock_dynamo):
    """Create UserRepository with mocked DynamoDB."""
    return UserRepository(mock_dynamo), mock_dynamo

def test_uses_shared_client_by_default():
    """Test the shared client is used when none is given."""
    with patch('src.services.user_repository.get_dynamo') as mock_get_dynamo:
        mock_get_dynamo.return_value = Mock()
        repository = UserRepository()
        assert repository.dynamo is mock_get_dynamo.return_value

def test_find_user_by_email(repo, mock_user_item, sample_user):
    """Test loading a stored user with an embedded profile."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.return_value = mock_user_item

    user = repository.find_user_by_email("Alex@Example.com")

    assert user == sample_user
    mock_dynamo.get_item.assert_called_once_with(
        {"PK": "USER#alex@example.com", "SK": "PROFILE"}
    )

def test_find_user_converts_decimals(repo, mock_user_item):
    """Test numbers coming back from DynamoDB as Decimal."""
    from decimal import Decimal
    repository, mock_dynamo = repo
    mock_user_item["created_at"] = Decimal("1704067200000")
    mock_user_item["profile"]["cycle_length_days"] = Decimal("30")
    mock_user_item["profile"]["period_duration_days"] = Decimal("4")
    mock_dynamo.get_item.return_value = mock_user_item

    user = repository.find_user_by_email("alex@example.com")

    assert user.created_at == 1704067200000
    assert user.profile.cycle_length_days == 30
    assert user.profile.period_duration_days == 4

def test_find_user_missing(repo):
    """Test lookup of an unknown user."""
    repository, _ = repo
    assert repository.find_user_by_email("nobody@example.com") is None

def test_find_user_without_profile(repo, mock_user_item):
    """Test a user who has not entered cycle data yet."""
    repository, mock_dynamo = repo
    del mock_user_item["profile"]
    mock_dynamo.get_item.return_value = mock_user_item

    user = repository.find_user_by_email("alex@example.com")

    assert user.profile is None
    assert not user.has_profile

def test_find_user_error(repo):
    """Test storage failures are wrapped."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.side_effect = client_error("GetItem")

    with pytest.raises(RepositoryError):
        repository.find_user_by_email("alex@example.com")

def test_update_user_info_creates_user(repo, standard_profile):
    """Test creating a new user."""
    repository, mock_dynamo = repo

    user = repository.update_user_info("Alex@Example.com", name="Alex", profile=standard_profile)

    assert user.email == "alex@example.com"
    assert user.name == "Alex"
    assert user.profile == standard_profile
    assert user.user_id
    assert user.created_at > 0

    item = mock_dynamo.put_item.call_args[0][0]
    assert item["PK"] == "USER#alex@example.com"
    assert item["SK"] == "PROFILE"
    assert item["profile"] == {
        "cycle_start_date": "2024-01-01",
        "cycle_length_days": 28,
        "period_duration_days": 5
    }

def test_update_user_info_keeps_existing_fields(repo, mock_user_item):
    """Test that an update without a profile keeps the stored one."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.return_value = mock_user_item

    user = repository.update_user_info("alex@example.com", name="Alexandra")

    assert user.name == "Alexandra"
    assert user.user_id == "4f1c2a"
    assert user.created_at == 1704067200000
    assert user.profile.cycle_start_date == date(2024, 1, 1)

def test_update_profile(repo, mock_user_item):
    """Test logging a new period start."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.return_value = mock_user_item
    new_profile = CycleProfile(
        cycle_start_date=date(2024, 1, 30),
        cycle_length_days=28,
        period_duration_days=5
    )

    user = repository.update_profile("alex@example.com", new_profile)

    assert user.profile == new_profile
    assert user.name == "Alex"
    item = mock_dynamo.put_item.call_args[0][0]
    assert item["profile"]["cycle_start_date"] == "2024-01-30"

def test_update_profile_rejects_invalid(repo):
    """Test that invalid profiles are never stored."""
    repository, mock_dynamo = repo
    bad_profile = CycleProfile(
        cycle_start_date=date(2024, 1, 1),
        cycle_length_days=5,
        period_duration_days=7
    )

    with pytest.raises(InvalidProfile):
        repository.update_profile("alex@example.com", bad_profile)
    assert not mock_dynamo.put_item.called

def test_update_user_info_error(repo):
    """Test write failures are wrapped."""
    repository, mock_dynamo = repo
    mock_dynamo.put_item.side_effect = client_error("PutItem")

    with pytest.raises(RepositoryError) as exc:
        repository.update_user_info("alex@example.com", name="Alex")
    assert "Could not save user" in str(exc.value)

def test_save_and_get_session(repo):
    """Test signing a user in."""
    repository, mock_dynamo = repo

    session = repository.save_session("Alex@Example.com", "Alex")

    assert session.email == "alex@example.com"
    mock_dynamo.put_item.assert_called_once_with({
        "PK": "SESSION",
        "SK": "CURRENT",
        "email": "alex@example.com",
        "name": "Alex"
    })

    mock_dynamo.get_item.return_value = {
        "PK": "SESSION", "SK": "CURRENT", "email": "alex@example.com", "name": "Alex"
    }
    assert repository.get_active_session() == session

def test_get_active_session_empty(repo):
    """Test that nobody is signed in by default."""
    repository, _ = repo
    assert repository.get_active_session() is None

def test_clear_session(repo):
    """Test signing out."""
    repository, mock_dynamo = repo
    repository.clear_session()
    mock_dynamo.delete_item.assert_called_once_with({"PK": "SESSION", "SK": "CURRENT"})

def test_delete_user_clears_own_session(repo):
    """Test deleting the signed-in user also signs them out."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.return_value = {"email": "alex@example.com", "name": "Alex"}

    repository.delete_user("alex@example.com")

    deleted_keys = [c[0][0] for c in mock_dynamo.delete_item.call_args_list]
    assert deleted_keys == [
        {"PK": "USER#alex@example.com", "SK": "PROFILE"},
        {"PK": "SESSION", "SK": "CURRENT"}
    ]

def test_delete_user_keeps_other_session(repo):
    """Test deleting another user leaves the session alone."""
    repository, mock_dynamo = repo
    mock_dynamo.get_item.return_value = {"email": "sam@example.com", "name": "Sam"}

    repository.delete_user("alex@example.com")

    mock_dynamo.delete_item.assert_called_once_with(
        {"PK": "USER#alex@example.com", "SK": "PROFILE"}
    )

def test_delete_user_error(repo):
    """Test delete failures are wrapped."""
    repository, mock_dynamo = repo
    mock_dynamo.delete_item.side_effect = client_error("DeleteItem")

    with pytest.raises(RepositoryError):
        repository.delete_user("alex@example.com")

def test_find_user_with_timestamp_start(repo, mock_user_item):
    """Test a stored start date carrying a time of day."""
    repository, mock_dynamo = repo
    mock_user_item["profile"]["cycle_start_date"] = "2024-01-01T21:15:00+00:00"
    mock_dynamo.get_item.return_value = mock_user_item

    user = repository.find_user_by_email("alex@example.com")

    assert user.profile.cycle_start_date == date(2024, 1, 1)

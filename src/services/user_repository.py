"""
User and session storage.

The repository is the only place that reads or writes stored users. The
cycle engine never fetches a profile itself: callers load a user here and
pass ``user.profile`` explicitly.

Typical usage:
    repo = UserRepository()
    user = repo.find_user_by_email("alex@example.com")
    if user and user.profile:
        info = classify(date.today(), user.profile)
"""
import time
import uuid
from typing import Dict, Any, Optional
from botocore.exceptions import ClientError

from src.models.cycle import CycleProfile
from src.models.user import User, Session
from src.services.cycle import validate_profile
from src.services.exceptions import RepositoryError
from src.utils.dynamo import (
    get_dynamo,
    create_user_pk,
    create_profile_sk,
    create_session_key
)
from src.utils.logging import logger

class UserRepository:
    """Load and save users and the active session."""

    def __init__(self, dynamo_client=None):
        """
        Initialize the repository.

        Args:
            dynamo_client: Optional DynamoDB client, the shared one is used
                when omitted
        """
        self.dynamo = dynamo_client or get_dynamo()

    def _user_key(self, email: str) -> Dict[str, str]:
        return {"PK": create_user_pk(email), "SK": create_profile_sk()}

    def _to_item(self, user: User) -> Dict[str, Any]:
        item = {
            **self._user_key(user.email),
            "user_id": user.user_id,
            "email": user.email,
            "name": user.name,
            "created_at": user.created_at
        }
        if user.profile is not None:
            item["profile"] = {
                "cycle_start_date": user.profile.cycle_start_date.isoformat(),
                "cycle_length_days": user.profile.cycle_length_days,
                "period_duration_days": user.profile.period_duration_days
            }
        return item

    def _from_item(self, item: Dict[str, Any]) -> User:
        # DynamoDB hands numbers back as Decimal
        profile = item.get("profile")
        return User(
            user_id=item["user_id"],
            email=item["email"],
            name=item.get("name", ""),
            profile=CycleProfile(
                cycle_start_date=profile["cycle_start_date"],
                cycle_length_days=int(profile["cycle_length_days"]),
                period_duration_days=int(profile["period_duration_days"])
            ) if profile else None,
            created_at=int(item["created_at"])
        )

    def find_user_by_email(self, email: str) -> Optional[User]:
        """
        Look up a user by email address.

        Args:
            email: Email address, compared case-insensitively

        Returns:
            User if found, None otherwise

        Raises:
            RepositoryError: If the table cannot be read
        """
        try:
            item = self.dynamo.get_item(self._user_key(email))
        except ClientError as e:
            logger.exception("Failed to read user", extra={"email": email})
            raise RepositoryError(f"Could not read user {email}") from e

        if not item:
            return None
        return self._from_item(item)

    def update_user_info(
        self,
        email: str,
        name: Optional[str] = None,
        profile: Optional[CycleProfile] = None
    ) -> User:
        """
        Create or update a user.

        Fields not supplied keep their stored values; a new user gets a fresh
        id and creation time.

        Args:
            email: Email address of the user
            name: New display name
            profile: New cycle profile

        Returns:
            The stored User

        Raises:
            InvalidProfile: If the profile breaks its invariants
            RepositoryError: If the table cannot be read or written
        """
        if profile is not None:
            validate_profile(profile)

        existing = self.find_user_by_email(email)
        user = User(
            user_id=existing.user_id if existing else uuid.uuid4().hex,
            email=email.strip().lower(),
            name=name or (existing.name if existing else ""),
            profile=profile if profile is not None else (existing.profile if existing else None),
            created_at=existing.created_at if existing else int(time.time() * 1000)
        )

        try:
            self.dynamo.put_item(self._to_item(user))
        except ClientError as e:
            logger.exception("Failed to write user", extra={"email": user.email})
            raise RepositoryError(f"Could not save user {user.email}") from e

        logger.info("Saved user", extra={
            "user_id": user.user_id,
            "created": existing is None,
            "has_profile": user.has_profile
        })
        return user

    def update_profile(self, email: str, profile: CycleProfile) -> User:
        """
        Replace the cycle profile of a user, e.g. when a new period is logged.

        Raises:
            InvalidProfile: If the profile breaks its invariants
            RepositoryError: If the table cannot be read or written
        """
        return self.update_user_info(email, profile=profile)

    def delete_user(self, email: str) -> None:
        """
        Delete a user and, if it points at them, the active session.

        Raises:
            RepositoryError: If the table cannot be written
        """
        session = self.get_active_session()
        try:
            self.dynamo.delete_item(self._user_key(email))
        except ClientError as e:
            logger.exception("Failed to delete user", extra={"email": email})
            raise RepositoryError(f"Could not delete user {email}") from e

        if session and session.email == email.strip().lower():
            self.clear_session()
        logger.info("Deleted user", extra={"email": email})

    def get_active_session(self) -> Optional[Session]:
        """
        Get the signed-in user, if any.

        Raises:
            RepositoryError: If the table cannot be read
        """
        try:
            item = self.dynamo.get_item(create_session_key())
        except ClientError as e:
            logger.exception("Failed to read session")
            raise RepositoryError("Could not read the active session") from e

        if not item:
            return None
        return Session(email=item["email"], name=item.get("name", ""))

    def save_session(self, email: str, name: str) -> Session:
        """
        Mark a user as signed in.

        Raises:
            RepositoryError: If the table cannot be written
        """
        session = Session(email=email.strip().lower(), name=name)
        try:
            self.dynamo.put_item({**create_session_key(), **session.model_dump()})
        except ClientError as e:
            logger.exception("Failed to write session", extra={"email": session.email})
            raise RepositoryError("Could not save the active session") from e
        return session

    def clear_session(self) -> None:
        """
        Sign out.

        Raises:
            RepositoryError: If the table cannot be written
        """
        try:
            self.dynamo.delete_item(create_session_key())
        except ClientError as e:
            logger.exception("Failed to clear session")
            raise RepositoryError("Could not clear the active session") from e

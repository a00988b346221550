"""
Training Profile Repository Interface (Port).

This module defines the abstract interface for training profile persistence.
Implementations may use a hosted database, in-memory storage, or other
backends.
"""
from typing import Optional, Protocol

from periodization_engine.domain.models import TrainingProfile


class TrainingProfileRepository(Protocol):
    """
    Abstract interface for training profile storage.

    The engine trusts the user id it is given; authorization happens before
    any repository call.
    """

    def get_by_user_id(self, user_id: str) -> Optional[TrainingProfile]:
        """
        Fetch the current profile snapshot for a user.

        Args:
            user_id: User identifier

        Returns:
            TrainingProfile, or None if the user has no profile
        """
        ...

    def upsert(self, profile: TrainingProfile) -> TrainingProfile:
        """
        Insert or replace a profile, keyed by profile.user_id.

        Args:
            profile: Profile snapshot to store

        Returns:
            The stored profile
        """
        ...

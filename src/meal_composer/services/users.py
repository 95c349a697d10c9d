"""User profile and daily target management."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_composer.domain.nutrition import DailyTarget
from meal_composer.domain.users import UserProfile, UserUpdate

_logger = logging.getLogger(__name__)


class UserClient(Protocol):
    """Remote user profile interface."""

    async def register_user(self, profile: UserProfile) -> UserProfile:
        """Register a user and return the stored profile with its id."""

    async def get_user(self, user_id: str) -> UserProfile:
        """Return the stored profile for a user."""

    async def update_user(self, user_id: str, update: UserUpdate) -> UserProfile:
        """Apply a partial update and return the stored profile."""


@dataclass
class UserService:
    """Keeps the current user's profile and the daily target derived from it."""

    client: UserClient
    profile: UserProfile | None = None

    async def register(self, profile: UserProfile) -> UserProfile:
        self.profile = await self.client.register_user(profile)
        _logger.info("Registered user %s", self.profile.id)
        return self.profile

    async def load(self, user_id: str) -> UserProfile:
        """Fetch the user's profile from the backend."""
        self.profile = await self.client.get_user(user_id)
        return self.profile

    async def update(self, user_id: str, update: UserUpdate) -> UserProfile:
        """Send changed fields; the backend recomputes the daily target."""
        if not update.changes():
            return self.profile or await self.load(user_id)
        self.profile = await self.client.update_user(user_id, update)
        _logger.info("Updated profile for user %s", user_id)
        return self.profile

    def daily_target(self) -> DailyTarget:
        if self.profile is None:
            raise RuntimeError("User profile has not been loaded")
        return self.profile.target

import logging
from datetime import datetime
from typing import Optional

from database.models import UserProfile

logger = logging.getLogger(__name__)


class SessionProvider:
    """
    Current signed-in identity. Consumers read projections of the user;
    only sign_in_as / sign_out / load replace it, always as a whole.
    """

    def __init__(self, db=None, user: Optional[UserProfile] = None):
        self.db = db
        self.user = user

    def sign_in_as(self, profile: UserProfile):
        self.user = profile
        logger.info(f"Session started for {profile.id}")

    def sign_out(self):
        if self.user:
            logger.info(f"Session ended for {self.user.id}")
        self.user = None

    async def load(self, user_id: str) -> Optional[UserProfile]:
        """
        Loads the user's profile from Supabase; unknown users stay signed out.
        Database errors propagate and leave the current user untouched.
        """
        if self.db is None:
            raise RuntimeError("SessionProvider has no database client.")

        profile = await self.db.get_user_profile(user_id)
        if profile is None:
            logger.warning(f"No profile found for {user_id}")
            self.user = None
            return None

        self.sign_in_as(profile)
        return profile

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def is_premium_at(self, now: datetime) -> bool:
        return bool(self.user and self.user.premium_active(now))

    @property
    def is_premium(self) -> bool:
        return bool(self.user and self.user.premium_active())

    @property
    def username(self) -> Optional[str]:
        return self.user.display_name if self.user else None

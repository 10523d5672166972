import os
import logging
from typing import Optional

from supabase import create_client, Client

from database.models import UserProfile

logger = logging.getLogger(__name__)


class SupabaseClient:
    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        self.url = url or os.getenv("SUPABASE_URL")
        self.key = key or os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY")
        self.client: Client = None

    async def connect(self):
        """
        Connects to Supabase.
        """
        try:
            if not self.url or not self.key:
                logger.error("Supabase credentials missing in .env")
                return False

            self.client = create_client(self.url, self.key)
            logger.info("Supabase connected successfully.")
            return True
        except Exception as e:
            logger.error(f"Supabase connection failed: {e}")
            return False

    async def probe_table(self, table: str = "leaderboard"):
        """
        Runs the smallest possible read against `table`.
        Errors from PostgREST (postgrest.exceptions.APIError) and the
        transport are left to the caller.
        """
        if not self.client:
            raise RuntimeError("DB Client not initialized.")
        response = self.client.table(table).select("count").limit(1).execute()
        return response.data

    async def get_user(self, user_id: str, raise_errors: bool = False):
        """
        Fetches the raw user row, or None if there is no such user.
        Query failures are logged; with raise_errors they are re-raised,
        otherwise they also read as None.
        """
        if not self.client:
            if raise_errors:
                raise RuntimeError("DB Client not initialized.")
            return None
        try:
            response = self.client.table('users').select("*").eq("id", user_id).execute()
            if response.data:
                return response.data[0]
            return None
        except Exception as e:
            logger.error(f"Failed to get user: {e}")
            if raise_errors:
                raise
            return None

    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Fetches a user and projects it onto UserProfile.
        Profile fields may live on the row itself or inside its metadata JSON.
        Returns None only when the user does not exist; query failures propagate.
        """
        user = await self.get_user(user_id, raise_errors=True)
        if not user:
            return None

        metadata = user.get("user_metadata") or user.get("metadata") or {}

        def pick(field, default=None):
            value = user.get(field)
            if value is None:
                value = metadata.get(field, default)
            return value

        return UserProfile(
            id=str(user.get("id", user_id)),
            email=pick("email"),
            username=pick("username"),
            xp=pick("xp", 0) or 0,
            level=pick("level", 1) or 1,
            avatar_id=pick("avatar_id"),
            is_premium=bool(pick("is_premium", False)),
            premium_until=pick("premium_until"),
        )

#!/usr/bin/env python3
"""
Quick smoke test for the Supabase backend.

Exit status 0 when the database answers (or answers that the schema has not
been applied yet), 1 on missing credentials or any other failure.
"""

import argparse
import asyncio
import logging
import sys

from postgrest.exceptions import APIError

from anime_quiz.config import Settings
from anime_quiz.errors import ConfigurationError
from database.db_client import SupabaseClient

logger = logging.getLogger(__name__)

# Postgres / PostgREST codes meaning the table does not exist yet
MISSING_TABLE_CODES = {"42P01", "PGRST205", "PGRST116"}


async def check_connection(table: str = "leaderboard", env_file=None) -> int:
    settings = Settings.from_env(env_file)
    try:
        url, key = settings.require_supabase()
    except ConfigurationError as e:
        print(f"❌ {e}")
        print("Required: SUPABASE_URL and SUPABASE_KEY (or SUPABASE_ANON_KEY)")
        return 1

    print("🔗 Testing Supabase connection...")
    print(f"📊 URL: {url}")
    print(f"🔑 Key: {key[:20]}...")

    db = SupabaseClient(url, key)
    if not await db.connect():
        print("❌ Connection failed: could not create Supabase client")
        return 1

    try:
        await db.probe_table(table)
    except APIError as e:
        if e.code in MISSING_TABLE_CODES:
            print("⚠️  Tables not created yet. Run the SQL schema in the Supabase SQL Editor.")
            return 0
        print(f"❌ Connection error: {e.message}")
        print(f"   Code: {e.code}")
        return 1
    except Exception as e:
        logger.debug("Supabase probe failed", exc_info=True)
        print(f"❌ Connection failed: {e}")
        return 1

    print("✅ Supabase connection successful!")
    print("✅ Database is ready to use.")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--table", default="leaderboard", help="table used for the probe query")
    parser.add_argument("--env-file", default=None, help="path to a .env file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    return asyncio.run(check_connection(args.table, args.env_file))


if __name__ == "__main__":
    sys.exit(main())

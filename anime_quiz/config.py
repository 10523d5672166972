"""
Settings shared by main.py and check_supabase.py.

Everything is read from the environment; a local .env file is honoured
through python-dotenv.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from anime_quiz.errors import ConfigurationError

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"

DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_STORAGE_PATH = DATA_DIR / "client_storage.json"


@dataclass
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    storage_path: Path = DEFAULT_STORAGE_PATH
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    missing: list = field(default_factory=list)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """
        Builds settings from os.environ after loading .env.
        SUPABASE_KEY wins over SUPABASE_ANON_KEY when both are set.
        """
        load_dotenv(env_file)

        supabase_url = os.getenv("SUPABASE_URL") or None
        supabase_key = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY") or None

        missing = []
        if not supabase_url:
            missing.append("SUPABASE_URL")
        if not supabase_key:
            missing.append("SUPABASE_KEY")

        return cls(
            api_base_url=os.getenv("QUIZ_API_BASE_URL") or DEFAULT_API_BASE_URL,
            storage_path=Path(os.getenv("LANGUAGE_STORE_PATH") or DEFAULT_STORAGE_PATH),
            supabase_url=supabase_url,
            supabase_key=supabase_key,
            missing=missing,
        )

    def require_supabase(self):
        """Raises ConfigurationError unless both Supabase credentials are present."""
        if self.missing:
            raise ConfigurationError(f"Missing Supabase credentials: {', '.join(self.missing)}")
        return self.supabase_url, self.supabase_key

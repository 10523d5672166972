import logging
from typing import Tuple

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
ALTERNATE_LANGUAGE = "bn"
SUPPORTED_LANGUAGES: Tuple[str, ...] = (DEFAULT_LANGUAGE, ALTERNATE_LANGUAGE)

STORAGE_KEY = "language"


class LanguageStore:
    """
    Holds the active display language.

    The value is read once from storage on construction and written back on
    every change. Nothing here raises: unknown values fall back to English
    and unknown input to set_language is ignored.
    """

    def __init__(self, storage):
        self.storage = storage
        self.language = DEFAULT_LANGUAGE

        saved = storage.get_item(STORAGE_KEY)
        if saved in SUPPORTED_LANGUAGES:
            self.language = saved
        elif saved is not None:
            logger.warning(f"Ignoring unrecognized saved language: {saved!r}")

    def get_language(self) -> str:
        return self.language

    def set_language(self, lang: str) -> None:
        if lang not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language {lang!r}; keeping {self.language!r}")
            return

        self.language = lang
        if not self.storage.set_item(STORAGE_KEY, lang):
            logger.warning(f"Language {lang!r} set for this session only (storage unavailable)")

    def translate(self, key: str, en_text: str, bn_text: str) -> str:
        # key only identifies the call site; the two texts are supplied inline
        return bn_text if self.language == ALTERNATE_LANGUAGE else en_text

    t = translate

from typing import List, Tuple

from anime_quiz.services.language import LanguageStore

LANGUAGE_CHOICES = [
    ("en", "🇺🇸 English"),
    ("bn", "🇧🇩 বাংলা"),
]


def toggle_label(language: str) -> str:
    return "EN" if language == "en" else "বাং"


def language_options(language: str) -> List[Tuple[str, str]]:
    """(code, label) pairs, the active language marked with a check."""
    return [
        (code, f"{label} ✓" if code == language else label)
        for code, label in LANGUAGE_CHOICES
    ]


def apply_choice(store: LanguageStore, code: str) -> str:
    store.set_language(code)
    return store.get_language()


def render_language_menu(store: LanguageStore) -> str:
    current = store.get_language()
    lines = [f"🌐 {store.t('language.title', 'Language', 'ভাষা')} ({toggle_label(current)})"]
    lines += [f"  [{code}] {label}" for code, label in language_options(current)]
    return "\n".join(lines)

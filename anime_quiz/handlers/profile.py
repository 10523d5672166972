from anime_quiz.services.language import LanguageStore
from anime_quiz.services.session import SessionProvider


def render_profile(session: SessionProvider, language: LanguageStore) -> str:
    """
    Profile card: name, premium badge, level and XP.
    Empty string when nobody is signed in.
    """
    user = session.user
    if user is None:
        return ""

    t = language.t
    name = session.username
    badge = f" 👑 {t('profile.premium', 'Premium', 'প্রিমিয়াম')}" if session.is_premium else ""

    return (
        f"{name[:1].upper()} | {name}{badge}\n"
        f"⭐ {t('profile.level', 'Level', 'লেভেল')} {user.level}   "
        f"🏆 {user.xp} XP"
    )

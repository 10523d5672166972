from typing import List, Tuple

from anime_quiz.services.language import LanguageStore
from anime_quiz.services.session import SessionProvider


def menu_items(session: SessionProvider, language: LanguageStore) -> List[Tuple[str, str]]:
    """
    Navigation entries as (route, label).
    Profile needs a signed-in user; Subscription is hidden from premium users.
    """
    t = language.t
    items = [
        ("/", t("nav.home", "Home", "হোম")),
        ("/quiz", t("nav.quiz", "Quiz", "কুইজ")),
        ("/leaderboard", t("nav.leaderboard", "Leaderboard", "লিডারবোর্ড")),
    ]

    if session.is_authenticated:
        items.append(("/profile", t("nav.profile", "Profile", "প্রোফাইল")))
        if not session.is_premium:
            items.append(("/subscription", t("nav.subscription", "Go Premium", "প্রিমিয়াম নিন")))
    else:
        items.append(("/login", t("nav.login", "Sign In", "সাইন ইন")))

    return items

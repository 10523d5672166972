from typing import List

from anime_quiz.services.language import LanguageStore
from database.models import LeaderboardEntry

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def render_leaderboard(entries: List[LeaderboardEntry], language: LanguageStore) -> str:
    t = language.t
    if not entries:
        return t("leaderboard.empty", "No players ranked yet.", "এখনও কোনো খেলোয়াড় নেই।")

    lines = [f"🏆 {t('leaderboard.title', 'Leaderboard', 'লিডারবোর্ড')}"]
    for position, entry in enumerate(entries, start=1):
        # Server rank wins; otherwise rank by order received
        rank = entry.rank or position
        marker = MEDALS.get(rank, f"{rank}.")
        name = entry.username or entry.user_id or "Anonymous"
        lines.append(f"{marker} {name} - {entry.total_score} pts, {entry.xp} XP")
    return "\n".join(lines)

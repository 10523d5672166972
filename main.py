import argparse
import asyncio
import json
import logging
import sys

from anime_quiz.config import Settings
from anime_quiz.errors import QuizAPIError
from anime_quiz.handlers.language_toggle import apply_choice, render_language_menu
from anime_quiz.handlers.leaderboard import render_leaderboard
from anime_quiz.handlers.navigation import menu_items
from anime_quiz.handlers.profile import render_profile
from anime_quiz.services.api_status import check_api_status
from anime_quiz.services.language import LanguageStore, SUPPORTED_LANGUAGES
from anime_quiz.services.quiz_api import QuizAPI
from anime_quiz.services.session import SessionProvider
from anime_quiz.services.storage import JsonFileStorage
from database.db_client import SupabaseClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Anime quiz command line client")
    parser.add_argument("--base-url", default=None, help="quiz API base URL")
    parser.add_argument("--language", choices=SUPPORTED_LANGUAGES, default=None,
                        help="display language for this run (also saved)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="check the quiz service")

    quiz = sub.add_parser("quiz", help="generate a quiz")
    quiz.add_argument("--difficulty", choices=["Easy", "Medium", "Hard"], default="Medium")
    quiz.add_argument("--topic", default="anime and manga")

    submit = sub.add_parser("submit", help="submit a result payload (JSON file)")
    submit.add_argument("path")

    sub.add_parser("leaderboard", help="show the leaderboard")

    stats = sub.add_parser("stats", help="show a user's stats")
    stats.add_argument("user_id")

    lang = sub.add_parser("language", help="show or change the display language")
    lang.add_argument("code", nargs="?")

    profile = sub.add_parser("profile", help="show a user's profile (Supabase)")
    profile.add_argument("user_id")
    return parser


async def run(args, settings: Settings, language: LanguageStore) -> int:
    t = language.t

    if args.command == "language":
        if args.code:
            apply_choice(language, args.code)
        print(render_language_menu(language))
        return 0

    if args.command == "profile":
        session = SessionProvider(SupabaseClient(settings.supabase_url, settings.supabase_key))
        if not await session.db.connect():
            print(t("profile.db", "Could not connect to Supabase.", "Supabase-এ সংযোগ করা যায়নি।"))
            return 1
        try:
            await session.load(args.user_id)
        except Exception as e:
            logger.error(f"Profile lookup failed for {args.user_id}: {e}")
            print(f"❌ {t('profile.lookup', 'Profile lookup failed', 'প্রোফাইল খোঁজা ব্যর্থ হয়েছে')}: {e}")
            return 1
        if not session.is_authenticated:
            print(t("profile.missing", "User not found.", "ব্যবহারকারী পাওয়া যায়নি।"))
            return 1
        print(render_profile(session, language))
        print(" | ".join(label for _, label in menu_items(session, language)))
        return 0

    async with QuizAPI(args.base_url or settings.api_base_url) as api:
        if args.command == "status":
            health = await check_api_status(api)
            if not health.is_online:
                print(f"🔴 {t('status.offline', 'Offline', 'অফলাইন')}: {health.error}")
                return 1
            print(f"🟢 {t('status.online', 'Online', 'অনলাইন')} ({health.response_time_ms}ms)")
            print(f"   API: {health.status.api_status} | AI: {health.status.deepseek_integration}")
            return 0

        if args.command == "quiz":
            generated = await api.generate_quiz(args.difficulty, args.topic)
            quiz = generated.quiz
            print(f"📝 {quiz.title} [{quiz.difficulty}] - {len(quiz.questions)} "
                  f"{t('quiz.questions', 'questions', 'প্রশ্ন')}, {quiz.time_limit}s "
                  f"({generated.generated_by})")
            for i, q in enumerate(quiz.questions, start=1):
                print(f"{i}. {q.question}")
                for option in q.options or []:
                    print(f"   - {option}")
            return 0

        if args.command == "submit":
            try:
                with open(args.path, "r", encoding="utf-8") as f:
                    payload = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Cannot read result payload {args.path}: {e}")
                print(f"❌ {t('submit.unreadable', 'Cannot read result file', 'ফলাফল ফাইল পড়া যায়নি')}: {e}")
                return 1
            result = (await api.submit_quiz_result(payload)).result
            print(f"✅ {result.score}/{result.total_questions} ({result.percentage}%) "
                  f"+{result.xp_earned} XP, #{result.position}")
            return 0

        if args.command == "leaderboard":
            print(render_leaderboard(await api.get_leaderboard(), language))
            return 0

        if args.command == "stats":
            print(json.dumps(await api.get_user_stats(args.user_id), indent=2, ensure_ascii=False))
            return 0

    return 2


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    language = LanguageStore(JsonFileStorage(settings.storage_path))
    if args.language:
        language.set_language(args.language)

    try:
        return asyncio.run(run(args, settings, language))
    except QuizAPIError as e:
        print(f"❌ {language.t('error.api', 'Request failed', 'অনুরোধ ব্যর্থ হয়েছে')}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from database.models import LeaderboardEntry, Question, Quiz, UserProfile


def _question(**overrides):
    base = {
        "id": "q1",
        "type": "MCQ",
        "question": "Who is the main character of Naruto?",
        "options": ["Sasuke Uchiha", "Naruto Uzumaki"],
        "correctAnswer": "Naruto Uzumaki",
    }
    base.update(overrides)
    return base


def test_question_accepts_answer_among_options() -> None:
    q = Question.model_validate(_question())
    assert q.correct_answer == "Naruto Uzumaki"


def test_question_rejects_answer_outside_options() -> None:
    with pytest.raises(ValidationError):
        Question.model_validate(_question(correctAnswer="Kakashi Hatake"))


def test_true_false_invariant_applies() -> None:
    with pytest.raises(ValidationError):
        Question.model_validate(_question(type="TRUE_FALSE", options=["True", "False"], correctAnswer="Maybe"))


def test_fill_blank_answer_is_free_text() -> None:
    q = Question.model_validate(_question(type="FILL_BLANK", options=None, correctAnswer="Oda"))
    assert q.options is None


def test_quiz_is_frozen() -> None:
    quiz = Quiz.model_validate(
        {"id": "z", "title": "T", "difficulty": "Hard", "timeLimit": 60, "questions": [_question()]}
    )
    with pytest.raises(ValidationError):
        quiz.title = "changed"


def test_leaderboard_entry_keeps_unknown_fields() -> None:
    entry = LeaderboardEntry.model_validate({"userId": "u1", "xp": 120, "lastActive": "2024-01-01"})
    assert entry.user_id == "u1"
    assert entry.total_score == 0
    assert entry.model_extra == {"lastActive": "2024-01-01"}


def test_premium_requires_flag_and_future_expiry() -> None:
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    future = now + timedelta(days=3)
    past = now - timedelta(days=3)

    assert UserProfile(id="u", is_premium=True, premium_until=future).premium_active(now)
    assert not UserProfile(id="u", is_premium=True, premium_until=past).premium_active(now)
    assert not UserProfile(id="u", is_premium=False, premium_until=future).premium_active(now)
    assert not UserProfile(id="u", is_premium=True).premium_active(now)


def test_display_name_falls_back_to_email() -> None:
    assert UserProfile(id="u", username="goku").display_name == "goku"
    assert UserProfile(id="u", email="luffy@example.com").display_name == "luffy"
    assert UserProfile(id="u").display_name == "u"

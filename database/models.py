from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Difficulty = Literal["Easy", "Medium", "Hard"]
QuestionType = Literal["MCQ", "TRUE_FALSE", "FILL_BLANK", "IMAGE"]


class WireModel(BaseModel):
    """Quiz service payloads: camelCase on the wire, frozen once received."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Question(WireModel):
    id: str
    type: QuestionType
    question: str
    options: Optional[List[str]] = None
    correct_answer: str = Field(alias="correctAnswer")
    explanation: Optional[str] = None
    image_description: Optional[str] = Field(default=None, alias="imageDescription")

    @model_validator(mode="after")
    def answer_in_options(self):
        # Only choice questions carry an answer that must be one of the options
        if self.type in ("MCQ", "TRUE_FALSE") and self.options:
            if self.correct_answer not in self.options:
                raise ValueError(
                    f"correctAnswer {self.correct_answer!r} is not one of the options of question {self.id}"
                )
        return self


class Quiz(WireModel):
    id: str
    title: str
    difficulty: Difficulty
    time_limit: int = Field(alias="timeLimit")
    questions: List[Question]


class QuizResult(WireModel):
    score: int
    total_questions: int = Field(alias="totalQuestions")
    xp_earned: int = Field(alias="xpEarned")
    position: int
    percentage: float


class GeneratedQuiz(WireModel):
    success: bool
    quiz: Quiz
    generated_by: str


class QuizSubmission(WireModel):
    success: bool
    result: QuizResult


class LeaderboardEntry(WireModel):
    # Leaderboard rows are loosely shaped; unknown keys are kept as extras
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    rank: Optional[int] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    username: Optional[str] = None
    total_score: int = Field(default=0, alias="totalScore")
    quizzes_taken: int = Field(default=0, alias="quizzesTaken")
    xp: int = 0


class APIStatus(WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    api_status: str
    deepseek_integration: str


class UserProfile(BaseModel):
    """Projection of the identity provider's user record."""
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    xp: int = 0
    level: int = 1
    avatar_id: Optional[int] = None
    is_premium: bool = False
    premium_until: Optional[datetime] = None

    def premium_active(self, now: Optional[datetime] = None) -> bool:
        if not self.is_premium or self.premium_until is None:
            return False
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        until = self.premium_until
        if until.tzinfo is None:
            until = until.replace(tzinfo=timezone.utc)
        return until > now

    @property
    def display_name(self) -> str:
        if self.username:
            return self.username
        if self.email:
            return self.email.split("@")[0]
        return self.id

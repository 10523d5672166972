import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import aiohttp
from pydantic import BaseModel, ValidationError

from anime_quiz.config import DEFAULT_API_BASE_URL
from anime_quiz.errors import QuizAPIError
from database.models import (
    APIStatus,
    GeneratedQuiz,
    LeaderboardEntry,
    QuizSubmission,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


class QuizAPI:
    """
    Client for the quiz service REST API.

    Every failure is logged once with its endpoint and re-raised as
    QuizAPIError; nothing is retried or replaced with a fallback.
    """

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "QuizAPI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def request(self, endpoint: str, method: str = "GET", payload: Any = None) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        body = json.dumps(payload) if payload is not None else None

        try:
            async with self._get_session().request(method, url, data=body, headers=headers) as response:
                raw = await response.read()
                data = _parse_json(raw)

                if not 200 <= response.status < 300:
                    message = None
                    if isinstance(data, dict) and data.get("error"):
                        message = str(data["error"])
                    raise QuizAPIError(
                        message or f"HTTP error! status: {response.status}",
                        endpoint=endpoint,
                        status=response.status,
                    )

                if not isinstance(data, dict):
                    raise QuizAPIError("Invalid JSON response", endpoint=endpoint, status=response.status)
                return data

        except QuizAPIError as e:
            logger.error(f"API Error ({endpoint}): {e}")
            raise
        except TRANSPORT_ERRORS as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"API Error ({endpoint}): {message}")
            raise QuizAPIError(message, endpoint=endpoint) from e

    async def _request_model(self, model, endpoint: str, method: str = "GET", payload: Any = None):
        data = await self.request(endpoint, method=method, payload=payload)
        return _decode(model, data, endpoint)

    async def generate_quiz(self, difficulty: str = "Medium", topic: str = "anime and manga") -> GeneratedQuiz:
        return await self._request_model(
            GeneratedQuiz, "/quiz", method="POST", payload={"difficulty": difficulty, "topic": topic}
        )

    async def submit_quiz_result(self, result: Union[Dict[str, Any], BaseModel]) -> QuizSubmission:
        if isinstance(result, BaseModel):
            result = result.model_dump(mode="json", by_alias=True)
        return await self._request_model(QuizSubmission, "/quiz/submit", method="POST", payload=result)

    async def get_leaderboard(self) -> List[LeaderboardEntry]:
        endpoint = "/leaderboard"
        data = await self.request(endpoint)
        rows = data.get("leaderboard")
        if not isinstance(rows, list):
            _fail(endpoint, "Malformed response: 'leaderboard' is not a list")
        return [_decode(LeaderboardEntry, row, endpoint) for row in rows]

    async def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        endpoint = f"/user/{quote(str(user_id), safe='')}/stats"
        data = await self.request(endpoint)
        user = data.get("user")
        if not isinstance(user, dict):
            _fail(endpoint, "Malformed response: 'user' is not an object")
        return user

    async def get_api_status(self) -> APIStatus:
        return await self._request_model(APIStatus, "/status")


def _parse_json(raw: bytes):
    if not raw:
        return None
    # undecodable bytes become U+FFFD so an error body still yields its message
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return None


def _fail(endpoint: str, message: str):
    logger.error(f"API Error ({endpoint}): {message}")
    raise QuizAPIError(message, endpoint=endpoint)


def _decode(model, data, endpoint: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        _fail(endpoint, f"Malformed response: {e.error_count()} validation error(s) for {model.__name__}")

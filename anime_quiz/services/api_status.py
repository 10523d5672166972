import time
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from anime_quiz.errors import QuizAPIError
from database.models import APIStatus

logger = logging.getLogger(__name__)


@dataclass
class ApiHealth:
    is_online: bool
    last_checked: datetime
    response_time_ms: Optional[int] = None
    error: Optional[str] = None
    status: Optional[APIStatus] = None


async def check_api_status(api) -> ApiHealth:
    """
    Pings GET /status and reports whether the quiz service is reachable.
    QuizAPI has already logged a failure by the time it reaches this point.
    """
    started = time.monotonic()
    try:
        status = await api.get_api_status()
    except QuizAPIError as e:
        return ApiHealth(is_online=False, last_checked=datetime.now(timezone.utc), error=e.message)

    elapsed = int((time.monotonic() - started) * 1000)
    logger.info(f"Quiz API online ({elapsed}ms): {status.api_status}")
    return ApiHealth(
        is_online=True,
        last_checked=datetime.now(timezone.utc),
        response_time_ms=elapsed,
        status=status,
    )

"""
Logging setup: 로그 레벨/포맷 설정 + HTTP 접근 로그.

규칙:
- 모듈별 logger (logging.getLogger(__name__))
- 설정은 default.yaml의 logging 섹션
- 접근 로그: METHOD path - IP (favicon 제외)
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

access_logger = logging.getLogger("serverguard.access")


def configure_logging(config: dict[str, Any]) -> None:
    """
    루트 로거 설정.

    Args:
        config: 전체 설정 (logging.level, logging.format 사용)
    """
    log_config = config.get("logging", {}) or {}
    level_name = str(log_config.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=log_config.get("format", DEFAULT_LOG_FORMAT),
    )
    logging.getLogger().setLevel(level)


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    HTTP 미들웨어: 요청마다 접근 로그 한 줄.

    Usage:
        app.middleware("http")(log_requests)
    """
    if request.url.path == "/favicon.ico":
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    client_ip = request.client.host if request.client else "unknown"
    access_logger.info(
        "%s %s - IP: %s - %d (%.1fms)",
        request.method,
        request.url.path,
        client_ip,
        response.status_code,
        elapsed_ms,
    )
    return response

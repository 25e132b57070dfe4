"""API 요청 로깅 미들웨어 — 모듈 로거 + Axiom.

Request logging middleware.
Every API call produces one structured event (method, path, status,
duration, masked body, error detail). The event always goes to the module
logger; it is also shipped to Axiom when ``AXIOM_API_TOKEN`` and
``AXIOM_DATASET`` are set.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shiftdesk.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 키: 비밀번호와 토큰은 로그에 남기지 않음
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|credential)",
    re.IGNORECASE,
)

_SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_MAX_DETAIL = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드를 재귀적으로 "***"로 치환합니다.

    Replace values under sensitive keys with ``"***"``, recursing into
    nested dicts and lists (lists are capped at 20 items).
    """
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            key: "***" if _SENSITIVE_KEYS.search(str(key)) else mask_sensitive(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _decode_body(raw: bytes) -> Any:
    try:
        return mask_sensitive(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


def _error_detail(raw: bytes) -> str:
    """에러 응답 body에서 detail을 추출합니다 (Pull ``detail`` out of an error body)."""
    try:
        parsed = json.loads(raw)
        detail = parsed.get("detail", parsed) if isinstance(parsed, dict) else parsed
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = raw.decode("utf-8", errors="replace")
    text: str = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    return text[:_MAX_DETAIL]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Logs each request/response pair to the module logger and, when
    configured, to Axiom.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = None
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        if request.method in _BODY_METHODS:
            raw: bytes = await request.body()
            if raw:
                event["request_body"] = _decode_body(raw)

        try:
            response: Response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400:
                # body를 소비했으므로 새 응답으로 다시 감쌈 (Body consumed, re-wrap it)
                body: bytes = b"".join(
                    [chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                     async for chunk in response.body_iterator]
                )
                event["error"] = _error_detail(body)
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
            return response
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._emit(event)

    def _emit(self, event: dict[str, Any]) -> None:
        level: int = logging.WARNING if event["status_code"] >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s -> %s (%.2f ms)%s",
            event["method"],
            event["path"],
            event["status_code"],
            event["duration_ms"],
            f" {event['error']}" if "error" in event else "",
        )
        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향을 주지 않음 (Never fail a request on ingest)
            logger.exception("Axiom ingest failed")

"""ShiftDesk 클라이언트 — 세션 상태, 근무 요청/승인 엔진, 화면 접근 가드.

ShiftDesk client — the logic a dashboard UI runs on top of the REST API:
session resolution, the shift request and approval engines, and the
role-gated navigation guard.
"""

from shiftdesk.client.actions import ActionResult, run_action
from shiftdesk.client.api import ShiftDeskAPI
from shiftdesk.client.engine import ApprovalEngine, ShiftRequestEngine
from shiftdesk.client.errors import (
    AuthError,
    AuthErrorKind,
    ConflictError,
    RemoteError,
    ShiftDeskError,
    ValidationError,
)
from shiftdesk.client.navigation import RouteAction, RouteDecision, resolve_index, resolve_login, resolve_route
from shiftdesk.client.session import SessionResolver, SessionSnapshot, SessionState

__all__ = [
    "ActionResult",
    "ApprovalEngine",
    "AuthError",
    "AuthErrorKind",
    "ConflictError",
    "RemoteError",
    "RouteAction",
    "RouteDecision",
    "SessionResolver",
    "SessionSnapshot",
    "SessionState",
    "ShiftDeskAPI",
    "ShiftDeskError",
    "ShiftRequestEngine",
    "ValidationError",
    "resolve_index",
    "resolve_login",
    "resolve_route",
    "run_action",
]

"""사용자 액션 실행 헬퍼 (User-initiated action wrapper)."""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from shiftdesk.client.errors import ShiftDeskError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """액션 결과 — 일시 알림으로 표시할 내용.

    Outcome of an action, shaped for a transient notification.

    Attributes:
        ok: 성공 여부 (Whether the action succeeded)
        message: 알림 메시지 (Notification text)
        value: 성공 시 반환값 (Return value on success)
    """

    ok: bool
    message: str
    value: Any = None


async def run_action(action: Awaitable[Any], success_message: str = "OK") -> ActionResult:
    """액션을 실행하고 ShiftDeskError를 결과로 변환합니다.

    Await ``action``; a ``ShiftDeskError`` becomes a failed result carrying
    its message. Other exceptions propagate. Nothing is retried and the
    caller's inputs are left as they were.
    """
    try:
        value = await action
    except ShiftDeskError as exc:
        logger.info("Action failed: %s", exc.message)
        return ActionResult(ok=False, message=exc.message)
    return ActionResult(ok=True, message=success_message, value=value)

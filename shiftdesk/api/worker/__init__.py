"""근무자 API 라우터 패키지 — 근무자용 엔드포인트 통합.

Worker API Router package — Aggregates worker-facing endpoints.

Included routers:
    - shifts: 내 근무 조회/요청 (My shifts: list and request)
"""

from fastapi import APIRouter

from shiftdesk.api.worker.shifts import router as shifts_router

worker_router: APIRouter = APIRouter()

# 내 근무: /my/shifts 하위 (My shift requests)
worker_router.include_router(shifts_router, prefix="/my/shifts", tags=["My Shifts"])

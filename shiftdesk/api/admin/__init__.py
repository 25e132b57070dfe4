"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - shifts: 근무 목록, 배정, 승인/거절 (Shift listing, assignment, decisions)
    - workers: 근무자 목록 (Worker profiles)
    - reports: 근무 시간 집계, 캘린더 (Hour totals and calendar)
"""

from fastapi import APIRouter

from shiftdesk.api.admin.reports import router as reports_router
from shiftdesk.api.admin.shifts import router as shifts_router
from shiftdesk.api.admin.workers import router as workers_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 라우터 등록: Register admin routers
# ---------------------------------------------------------------------------
admin_router.include_router(shifts_router, prefix="/shifts", tags=["Admin Shifts"])
admin_router.include_router(workers_router, prefix="/workers", tags=["Admin Workers"])
# 집계: /hours, /calendar (Aggregations at the admin root)
admin_router.include_router(reports_router, tags=["Admin Reports"])

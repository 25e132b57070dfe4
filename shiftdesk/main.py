"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures logging, CORS, the health check, and mounts the auth, worker
and admin routers under ``/api/v1``.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shiftdesk.config import settings
from shiftdesk.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 로깅 미들웨어: CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록: Router registration
# ---------------------------------------------------------------------------
from shiftdesk.api.admin import admin_router  # noqa: E402
from shiftdesk.api.auth import router as auth_router  # noqa: E402
from shiftdesk.api.profiles import router as profiles_router  # noqa: E402
from shiftdesk.api.worker import worker_router  # noqa: E402

app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(profiles_router, prefix="/api/v1", tags=["Profiles"])
app.include_router(worker_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1/admin")

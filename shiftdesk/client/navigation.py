"""역할 기반 화면 접근 가드.

Role-gated navigation. Pure decisions over a ``SessionSnapshot``: which
view to show, or where to redirect. While ``loading`` is set the profile
is unknown, never "guest".
"""

from dataclasses import dataclass
from enum import Enum

from shiftdesk.client.session import SessionSnapshot, SessionState
from shiftdesk.models.enums import UserRole

LOGIN_PATH: str = "/login"
INDEX_PATH: str = "/"

HOME_PATHS: dict[UserRole, str] = {
    UserRole.ADMIN: "/dashboard/admin",
    UserRole.WORKER: "/dashboard/worker",
}

# 보호된 화면과 허용 역할 (Protected views and their allowed roles)
ROUTES: dict[str, frozenset[UserRole]] = {
    HOME_PATHS[UserRole.WORKER]: frozenset({UserRole.WORKER}),
    HOME_PATHS[UserRole.ADMIN]: frozenset({UserRole.ADMIN}),
}


class RouteAction(str, Enum):
    LOADING = "loading"
    LOADING_PROFILE = "loading_profile"
    REDIRECT = "redirect"
    RENDER = "render"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteDecision:
    action: RouteAction
    target: str | None = None


def home_path(role: UserRole | str) -> str:
    return HOME_PATHS[UserRole(role)]


def resolve_route(
    snapshot: SessionSnapshot,
    allowed_roles: frozenset[UserRole] | set[UserRole] | None = None,
) -> RouteDecision:
    """보호된 화면의 접근 결정을 내립니다.

    Decide what a protected view shows:

    - loading → LOADING
    - no session → REDIRECT to the login view
    - session without profile → LOADING_PROFILE
    - role not allowed → REDIRECT to that role's home view
    - otherwise RENDER

    ``allowed_roles=None`` admits any signed-in profile.
    """
    if snapshot.loading:
        return RouteDecision(RouteAction.LOADING)
    if snapshot.state is SessionState.UNRESOLVED:
        return RouteDecision(RouteAction.REDIRECT, LOGIN_PATH)
    if snapshot.state is SessionState.SESSION_ONLY:
        return RouteDecision(RouteAction.LOADING_PROFILE)
    if allowed_roles is not None and snapshot.role not in allowed_roles:
        return RouteDecision(RouteAction.REDIRECT, home_path(snapshot.role))
    return RouteDecision(RouteAction.RENDER)


def resolve_index(snapshot: SessionSnapshot) -> RouteDecision:
    """루트 경로 — 로그인 화면 또는 역할별 홈으로 이동.

    The index view never renders anything of its own: it sends guests to
    login and resolved sessions to their home view.
    """
    decision: RouteDecision = resolve_route(snapshot)
    if decision.action is RouteAction.RENDER:
        return RouteDecision(RouteAction.REDIRECT, home_path(snapshot.role))
    return decision


def resolve_login(snapshot: SessionSnapshot) -> RouteDecision:
    """로그인 화면 — 이미 로그인된 경우 홈으로 이동 (Signed-in users go home)."""
    if not snapshot.loading and snapshot.state is SessionState.RESOLVED:
        return RouteDecision(RouteAction.REDIRECT, home_path(snapshot.role))
    return RouteDecision(RouteAction.RENDER)


def resolve(path: str, snapshot: SessionSnapshot) -> RouteDecision:
    """경로별 결정 (Decision for any known path)."""
    if path == INDEX_PATH:
        return resolve_index(snapshot)
    if path == LOGIN_PATH:
        return resolve_login(snapshot)
    if path in ROUTES:
        return resolve_route(snapshot, ROUTES[path])
    return RouteDecision(RouteAction.NOT_FOUND)

"""인증 API 테스트 — 로그인, 회원가입, 토큰 갱신, 로그아웃, 세션, 프로필.

Auth API tests — sign-in, sign-up, refresh, sign-out, session and profile
endpoints, plus the bearer/role gate in front of every protected router.
"""

from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy import func, select

from shiftdesk.models.enums import UserRole
from shiftdesk.models.identity import Identity
from shiftdesk.repositories.identity_repository import identity_repository
from shiftdesk.utils.jwt import create_refresh_token
from tests.conftest import ADMIN_PASSWORD, WORKER_PASSWORD, auth_header, create_profile, make_token

AUTH = "/api/v1/auth"


# ===== Sign-in =====

class TestSignIn:
    """로그인 테스트."""

    async def test_sign_in_success(self, client: AsyncClient, worker_user):
        """사용자명/비밀번호로 로그인 성공."""
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "marko",
            "password": WORKER_PASSWORD,
        })
        assert res.status_code == 200
        data = res.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    async def test_sign_in_wrong_password(self, client: AsyncClient, worker_user):
        """잘못된 비밀번호로 로그인 실패."""
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "marko",
            "password": "wrong_password",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid login credentials"

    async def test_sign_in_unknown_user(self, client: AsyncClient):
        """존재하지 않는 사용자로 로그인 실패 — 같은 메시지."""
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "nobody",
            "password": "whatever",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid login credentials"

    async def test_sign_in_is_username_based(self, client: AsyncClient, worker_user):
        """자격 증명 주소로는 로그인할 수 없음 (username only)."""
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "marko@winner-security.local",
            "password": WORKER_PASSWORD,
        })
        assert res.status_code == 401


# ===== Sign-up =====

class TestSignUp:
    """회원가입 테스트."""

    async def test_sign_up_creates_profile(self, client: AsyncClient, db):
        """회원가입 시 자격 증명과 프로필이 생성됨."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan",
            "password": "secret1",
            "name": "Jovan Jovanović",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Jovan Jovanović"
        assert data["role"] == "worker"

        identity = (await db.execute(
            select(Identity).where(Identity.email == "jovan@winner-security.local")
        )).scalar_one()
        assert str(identity.id) == data["id"]

    async def test_sign_up_admin_role(self, client: AsyncClient):
        """역할 선택 가능 — admin."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "boss",
            "password": "secret1",
            "name": "Boss",
            "role": "admin",
        })
        assert res.status_code == 201
        assert res.json()["role"] == "admin"

    async def test_sign_up_does_not_sign_in(self, client: AsyncClient):
        """회원가입 응답에는 토큰이 없음."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan",
            "password": "secret1",
            "name": "Jovan",
        })
        assert "access_token" not in res.json()

    async def test_sign_up_then_sign_in(self, client: AsyncClient):
        """가입한 계정으로 로그인 가능."""
        await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan", "password": "secret1", "name": "Jovan",
        })
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "jovan", "password": "secret1",
        })
        assert res.status_code == 200

    async def test_sign_up_duplicate_username(self, client: AsyncClient, worker_user):
        """이미 등록된 사용자명 — 409."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "marko",
            "password": "another1",
            "name": "Second Marko",
        })
        assert res.status_code == 409
        assert res.json()["detail"] == "User already registered"

    async def test_sign_up_short_password(self, client: AsyncClient, db):
        """비밀번호 6자 미만 — 400, 아무것도 저장되지 않음."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan",
            "password": "12345",
            "name": "Jovan",
        })
        assert res.status_code == 400
        assert "at least 6 characters" in res.json()["detail"]
        count = (await db.execute(select(func.count()).select_from(Identity))).scalar_one()
        assert count == 0

    async def test_sign_up_missing_name(self, client: AsyncClient):
        """표시 이름 누락 — 400."""
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan",
            "password": "secret1",
            "name": "   ",
        })
        assert res.status_code == 400
        assert "Name is required" in res.json()["detail"]

    async def test_sign_up_bad_username(self, client: AsyncClient):
        """공백이나 @가 포함된 사용자명 — 400."""
        for username in ("jo van", "jovan@example.com"):
            res = await client.post(f"{AUTH}/sign-up", json={
                "username": username,
                "password": "secret1",
                "name": "Jovan",
            })
            assert res.status_code == 400
            assert res.json()["detail"] == "Username may not contain spaces or @"

    async def test_sign_up_race_hits_unique_email(self, client: AsyncClient, db, monkeypatch):
        """동시 가입: 사전 조회를 통과해도 유일성 제약이 409로 응답."""
        body = {"username": "jovan", "password": "secret1", "name": "Jovan"}
        res = await client.post(f"{AUTH}/sign-up", json=body)
        assert res.status_code == 201

        async def _not_found(db, email):
            return None

        monkeypatch.setattr(identity_repository, "get_by_email", _not_found)
        res = await client.post(f"{AUTH}/sign-up", json=body)
        assert res.status_code == 409
        assert res.json()["detail"] == "User already registered"
        count = (await db.execute(select(func.count()).select_from(Identity))).scalar_one()
        assert count == 1

    async def test_sign_up_punctuated_username(self, client: AsyncClient):
        """점과 하이픈이 들어간 사용자명도 허용, 로그인 가능."""
        for username in ("marko.petrovic", "ana-m"):
            res = await client.post(f"{AUTH}/sign-up", json={
                "username": username,
                "password": "secret1",
                "name": "Marko",
            })
            assert res.status_code == 201

            res = await client.post(f"{AUTH}/sign-in", json={
                "username": username,
                "password": "secret1",
            })
            assert res.status_code == 200


# ===== Refresh / Sign-out =====

class TestRefreshAndSignOut:
    """토큰 갱신 및 로그아웃 테스트."""

    async def _sign_in(self, client: AsyncClient) -> dict:
        res = await client.post(f"{AUTH}/sign-in", json={
            "username": "admin", "password": ADMIN_PASSWORD,
        })
        return res.json()

    async def test_refresh_rotates_tokens(self, client: AsyncClient, admin_user):
        """리프레시 토큰으로 새 토큰 발급, 기존 토큰은 폐기."""
        tokens = await self._sign_in(client)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        assert res.json()["refresh_token"] != tokens["refresh_token"]

        reused = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert reused.status_code == 401

    async def test_refresh_unknown_token(self, client: AsyncClient, admin_user):
        """저장되지 않은 리프레시 토큰 — 401."""
        token = create_refresh_token({"sub": str(admin_user.id)})
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": token})
        assert res.status_code == 401

    async def test_sign_out_revokes_refresh_token(self, client: AsyncClient, admin_user):
        """로그아웃 후 리프레시 토큰 사용 불가."""
        tokens = await self._sign_in(client)
        res = await client.post(f"{AUTH}/sign-out", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_sign_out_twice(self, client: AsyncClient, admin_user):
        """두 번 로그아웃해도 오류 없음."""
        tokens = await self._sign_in(client)
        body = {"refresh_token": tokens["refresh_token"]}
        assert (await client.post(f"{AUTH}/sign-out", json=body)).status_code == 204
        assert (await client.post(f"{AUTH}/sign-out", json=body)).status_code == 204


# ===== Session / Me / Profiles =====

class TestSessionAndProfile:
    """세션 및 프로필 조회 테스트."""

    async def test_session(self, client: AsyncClient, worker_user, worker_token):
        """현재 세션 — 자격 증명과 사용자명."""
        res = await client.get(f"{AUTH}/session", headers=auth_header(worker_token))
        assert res.status_code == 200
        data = res.json()
        assert data["identity_id"] == str(worker_user.id)
        assert data["email"] == "marko@winner-security.local"
        assert data["username"] == "marko"

    async def test_session_without_token(self, client: AsyncClient):
        """토큰 없이 세션 조회 — 401."""
        res = await client.get(f"{AUTH}/session")
        assert res.status_code == 401

    async def test_session_with_refresh_token(self, client: AsyncClient, worker_user):
        """리프레시 토큰을 액세스 토큰으로 사용 불가."""
        token = create_refresh_token({"sub": str(worker_user.id)})
        res = await client.get(f"{AUTH}/session", headers=auth_header(token))
        assert res.status_code == 401

    async def test_session_with_garbage_token(self, client: AsyncClient):
        """위조 토큰 — 401."""
        res = await client.get(f"{AUTH}/session", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401

    async def test_me(self, client: AsyncClient, worker_user, worker_token):
        """내 프로필 조회."""
        res = await client.get(f"{AUTH}/me", headers=auth_header(worker_token))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(worker_user.id)
        assert data["name"] == "Marko Marković"
        assert data["role"] == "worker"

    async def test_session_without_profile(self, client: AsyncClient, db):
        """프로필 없는 세션 — 세션은 200, /me는 403."""
        identity = Identity(email="ghost@winner-security.local", password_hash="x")
        db.add(identity)
        await db.flush()
        token = make_token(identity.id)

        assert (await client.get(f"{AUTH}/session", headers=auth_header(token))).status_code == 200
        res = await client.get(f"{AUTH}/me", headers=auth_header(token))
        assert res.status_code == 403
        assert res.json()["detail"] == "Profile not available"

    async def test_get_profile_by_id(self, client: AsyncClient, db, worker_token):
        """ID로 다른 프로필 조회."""
        other = await create_profile(db, "ana", "Ana", UserRole.WORKER)
        res = await client.get(f"/api/v1/profiles/{other.id}", headers=auth_header(worker_token))
        assert res.status_code == 200
        assert res.json()["name"] == "Ana"

    async def test_get_missing_profile(self, client: AsyncClient, worker_token):
        """없는 프로필 — 404."""
        res = await client.get(f"/api/v1/profiles/{uuid4()}", headers=auth_header(worker_token))
        assert res.status_code == 404

    async def test_shift_types_public(self, client: AsyncClient):
        """근무 유형 목록은 인증 없이 조회 가능."""
        res = await client.get("/api/v1/shift-types")
        assert res.status_code == 200
        data = res.json()
        assert [t["value"] for t in data] == ["1", "2", "3"]
        assert data[0]["label"] == "Prva"
        assert data[0]["start"] == "08:00:00"
        assert data[1]["end"] == "00:00:00"

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}

"""세션 의존성과 비밀번호 해시 테스트.

Per-request session rollback, bcrypt password handling and the seed script.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shiftdesk import database
from shiftdesk import seed as seed_module
from shiftdesk.config import settings
from shiftdesk.models.identity import Identity
from shiftdesk.models.user import User
from shiftdesk.utils.password import hash_password, verify_password

AUTH = "/api/v1/auth"


class TestGetDb:
    """요청 세션 의존성 테스트."""

    async def test_failed_request_rolls_back(self, engine, monkeypatch):
        """요청이 예외로 끝나면 커밋 전 변경은 남지 않음."""
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(database, "async_session", factory)

        dependency = database.get_db()
        session = await dependency.__anext__()
        session.add(Identity(email="ghost@winner-security.local", password_hash="x"))
        await session.flush()
        with pytest.raises(RuntimeError):
            await dependency.athrow(RuntimeError("request failed"))

        async with factory() as check:
            count = (await check.execute(select(func.count()).select_from(Identity))).scalar_one()
        assert count == 0


class TestPassword:
    """비밀번호 해시 테스트."""

    def test_round_trip(self):
        hashed = hash_password("secret1")
        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_long_password(self):
        """72바이트를 넘는 비밀번호도 해시 가능."""
        password = "č" * 60
        assert verify_password(password, hash_password(password))

    def test_malformed_hash_never_matches(self):
        assert verify_password("anything", "x") is False

    async def test_sign_up_with_long_password(self, client: AsyncClient):
        password = "correct horse battery staple " * 4
        res = await client.post(f"{AUTH}/sign-up", json={
            "username": "jovan", "password": password, "name": "Jovan",
        })
        assert res.status_code == 201
        res = await client.post(f"{AUTH}/sign-in", json={"username": "jovan", "password": password})
        assert res.status_code == 200


class TestSeed:
    """시드 스크립트 테스트."""

    async def test_seed_admin_from_settings(self, engine, monkeypatch):
        """설정값으로 관리자 생성, 두 번 실행해도 한 명."""
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(seed_module, "engine", engine)
        monkeypatch.setattr(seed_module, "async_session", factory)
        monkeypatch.setattr(settings, "SEED_ADMIN_USERNAME", "chief")
        monkeypatch.setattr(settings, "SEED_ADMIN_PASSWORD", "chief123")
        monkeypatch.setattr(settings, "SEED_ADMIN_NAME", "Chief")

        await seed_module.seed()
        await seed_module.seed()

        async with factory() as check:
            users = (await check.execute(select(User))).scalars().all()
            identity = (await check.execute(select(Identity))).scalar_one()
        assert [(u.name, u.role) for u in users] == [("Chief", "admin")]
        assert identity.email == "chief@winner-security.local"
        assert verify_password("chief123", identity.password_hash)

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from docsmith.errors import ConflictError, UnauthorizedError
from docsmith.models.user import UserCreate
from docsmith.utils.security import generate_token, hash_password, verify_password, verify_token


def new_user(email="grace@example.com", phone=None):
    return UserCreate(first_name="Grace", last_name="Hopper", email=email, phone=phone, password="cobol-rules")


def test_password_hash_round_trip():
    stored = hash_password("s3cret")
    assert stored != "s3cret"
    assert verify_password("s3cret", stored)
    assert not verify_password("S3cret", stored)


def test_password_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_password_with_garbage_hash():
    assert not verify_password("anything", "no-separator")


def test_token_carries_user_id(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "unit-test-secret")
    user_id = uuid4()
    assert verify_token(generate_token(str(user_id)))["userId"] == str(user_id)


def test_expired_token_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRES_SECONDS", "-10")
    with pytest.raises(jwt.ExpiredSignatureError):
        verify_token(generate_token(str(uuid4())))


async def test_register_stores_hashed_password(auth_service, db):
    created = await auth_service.register(new_user())
    stored = db.rows("users")[created.id]
    assert stored["password"] != "cobol-rules"
    assert verify_password("cobol-rules", stored["password"])


async def test_register_conflicts(auth_service):
    await auth_service.register(new_user(phone="5550199"))

    with pytest.raises(ConflictError) as exc:
        await auth_service.register(new_user())
    assert exc.value.details == {"field": "email"}

    with pytest.raises(ConflictError) as exc:
        await auth_service.register(new_user(email="other@example.com", phone="5550199"))
    assert exc.value.details == {"field": "phone"}


async def test_login_and_resolve(auth_service):
    created = await auth_service.register(new_user())
    result = await auth_service.login("grace@example.com", "cobol-rules")

    resolved = await auth_service.resolve_token(result.token)
    assert resolved.id == created.id


async def test_login_inactive_user(auth_service, db):
    created = await auth_service.register(new_user())
    db.rows("users")[created.id]["is_active"] = False

    with pytest.raises(UnauthorizedError):
        await auth_service.login("grace@example.com", "cobol-rules")


async def test_resolve_token_for_deleted_user(auth_service):
    with pytest.raises(UnauthorizedError):
        await auth_service.resolve_token(generate_token(str(uuid4())))


async def test_resolve_token_without_user_id(auth_service, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "unit-test-secret-with-enough-bytes")
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": now, "exp": now + timedelta(minutes=5)},
        "unit-test-secret-with-enough-bytes",
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError):
        await auth_service.resolve_token(token)


async def test_resolve_token_with_wrong_signature(auth_service):
    token = jwt.encode({"userId": str(uuid4())}, "someone-elses-secret", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        await auth_service.resolve_token(token)

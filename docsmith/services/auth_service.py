import logging
from uuid import UUID
from typing import Optional

import jwt
from fastapi import UploadFile

from docsmith.db.repositories import UserRepository
from docsmith.db.transaction import transaction
from docsmith.errors import ConflictError, UnauthorizedError
from docsmith.models.user import LoginResult, User, UserCreate, UserPublic
from docsmith.utils.security import generate_token, hash_password, verify_password, verify_token
from docsmith.utils.uploads import remove_profile_image, save_profile_image

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and bearer-token resolution."""

    def __init__(self, conn, repository: Optional[UserRepository] = None):
        self.conn = conn
        self.repository = repository or UserRepository(conn)

    async def register(self, user: UserCreate, profile_image: Optional[UploadFile] = None) -> UserPublic:
        existing = await self.repository.find_by_email_or_phone(user.email, user.phone)
        if existing:
            field = "email" if existing.email == user.email else "phone"
            message = "Email already in use" if field == "email" else "Phone number already in use"
            raise ConflictError(message, {"field": field})

        filename = save_profile_image(profile_image)
        try:
            with transaction(self.conn, "REGISTER_USER"):
                created = await self.repository.create(
                    first_name=user.first_name,
                    last_name=user.last_name,
                    email=user.email,
                    phone=user.phone,
                    password_hash=hash_password(user.password),
                    profile_image=filename,
                )
        except Exception:
            remove_profile_image(filename)
            raise

        logger.info(f"[REGISTER_USER] registered {created.id}")
        return created.public()

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self.repository.get_by_email(email)
        if not user or not user.is_active or not verify_password(password, user.password):
            logger.info("[LOGIN_USER] rejected credentials")
            raise UnauthorizedError("Invalid credentials")

        return LoginResult(token=generate_token(str(user.id)), user=user.public())

    async def resolve_token(self, token: str) -> User:
        try:
            payload = verify_token(token)
        except jwt.InvalidTokenError as e:
            logger.info(f"[AUTHENTICATE] invalid token: {e}")
            raise UnauthorizedError("Invalid or expired token")

        try:
            user_id = UUID(str(payload.get("userId")))
        except ValueError:
            raise UnauthorizedError("Invalid or expired token")

        user = await self.repository.get_by_id(user_id)
        if not user or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return user

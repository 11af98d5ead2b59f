import logging
from uuid import UUID
from typing import Optional

from psycopg2.extras import RealDictCursor

from docsmith.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    TABLE_NAME = "users"

    def __init__(self, conn):
        self.conn = conn

    async def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: Optional[str],
        password_hash: str,
        profile_image: Optional[str] = None,
    ) -> User:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                INSERT INTO users (first_name, last_name, email, phone, password, profile_image)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (first_name, last_name, email, phone, password_hash, profile_image),
            )
            row = cur.fetchone()
        return User.model_validate(dict(row))

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute("SELECT * FROM users WHERE id = %s", (str(user_id),))
            row = cur.fetchone()
        return User.model_validate(dict(row)) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute("SELECT * FROM users WHERE email = %s", (email,))
            row = cur.fetchone()
        return User.model_validate(dict(row)) if row else None

    async def find_by_email_or_phone(self, email: str, phone: Optional[str]) -> Optional[User]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            if phone:
                cur.execute(
                    "SELECT * FROM users WHERE email = %s OR phone = %s ORDER BY (email = %s) DESC LIMIT 1",
                    (email, phone, email),
                )
            else:
                cur.execute("SELECT * FROM users WHERE email = %s", (email,))
            row = cur.fetchone()
        return User.model_validate(dict(row)) if row else None

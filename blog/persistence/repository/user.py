"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import User
from blog.domain.repository import UserRepository
from blog.domain.value import UserId
from blog.persistence.database import store_errors
from blog.persistence.mappers import row_to_user, user_to_dict
from blog.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with store_errors("find_user"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_user(row._asdict()) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once."""
        if not user_ids:
            return []

        with store_errors("find_users"):
            stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
            result = await self.session.execute(stmt)
            return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        with store_errors("save_user"):
            user_dict = user_to_dict(user)
            stmt = pg_insert(users_table).values(**user_dict)
            stmt = stmt.on_conflict_do_update(
                index_elements=[users_table.c.id],
                set_={
                    "username": stmt.excluded.username,
                    "avatar_url": stmt.excluded.avatar_url,
                    "role": stmt.excluded.role,
                },
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return user

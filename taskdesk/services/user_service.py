"""Service for employee accounts and their permissions."""

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskdesk.models import PermissionKey, User, UserPermission
from taskdesk.schemas.auth import UserCreate
from taskdesk.services.auth import auth_service
from taskdesk.services.pagination import LIKE_ESCAPE, contains_pattern, paginate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user and permission operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user with permissions loaded."""
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.permissions))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email with permissions loaded."""
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.permissions))
            .where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the credentials match."""
        user = await self.get_by_email(email)
        if not user or not auth_service.verify_password(password, user.hashed_password):
            return None
        return user

    async def create(self, data: UserCreate) -> User:
        """Create an employee account with its initial permissions."""
        if await self.get_by_email(data.email):
            raise ValueError("Email already registered")

        user = User(
            email=data.email.lower(),
            hashed_password=auth_service.hash_password(data.password),
            full_name=data.full_name,
            role=data.role,
            permissions=[UserPermission(key=key) for key in set(data.permissions)],
        )
        self.db.add(user)
        await self.db.flush()

        logger.info(f"Created user {user.email} with role {user.role.value}")
        return await self.get_by_id(user.id)

    async def list_users(
        self,
        q: str | None = None,
        page: int = 1,
        per_page: int = 15,
    ) -> tuple[list[User], dict[str, int]]:
        """List users, searching email and name."""
        query = select(User).options(selectinload(User.permissions))
        if q:
            pattern = contains_pattern(q)
            query = query.where(
                or_(
                    User.email.ilike(pattern, escape=LIKE_ESCAPE),
                    User.full_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        query = query.order_by(User.created_at.desc(), User.id)

        return await paginate(self.db, query, page, per_page)

    async def set_permissions(
        self, user_id: UUID, keys: list[PermissionKey]
    ) -> User | None:
        """Replace a user's permission set."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        # Keep unchanged rows so the (user_id, key) constraint never sees a duplicate
        wanted = set(keys)
        kept = [p for p in user.permissions if p.key in wanted]
        added = [UserPermission(key=key) for key in wanted - {p.key for p in kept}]
        user.permissions = kept + added
        await self.db.flush()

        logger.info(f"Updated permissions of user {user.email}: {sorted(k.value for k in keys)}")
        return await self.get_by_id(user.id)

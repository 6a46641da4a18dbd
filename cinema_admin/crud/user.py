import logging
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cinema_admin.core.exceptions import (ConflictError, NotFoundError, SessionStoreUnavailableError,
                                          StoreUnavailableError, ValidationError)
from cinema_admin.core.security import hash_password
from cinema_admin.models.user import Role, User
from cinema_admin.schemas.common import PageParams
from cinema_admin.schemas.user import UserCreate, UserUpdate
from cinema_admin.services.session_manager import SessionManager


class CRUDUser:
    def _active(self):
        return (select(User).where(User.deleted_at.is_(None))
                .options(selectinload(User.role)).execution_options(populate_existing=True))

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        result = await db.execute(self._active().where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def find_user(self, db: AsyncSession, user_id: int) -> User | None:
        """Non-deleted user with its role loaded, or None."""
        result = await db.execute(
            self._active().where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        result = await db.execute(self._active().where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    async def get_users(self, db: AsyncSession, params: PageParams):
        total = (await db.execute(
            select(func.count()).select_from(User).where(User.deleted_at.is_(None)))).scalar_one()
        result = await db.execute(
            self._active().order_by(User.id).offset(params.offset).limit(params.limit))
        return result.scalars().all(), total

    async def _check_role(self, db: AsyncSession, role_id: int) -> None:
        if await db.get(Role, role_id) is None:
            raise ValidationError("Invalid role ID")

    async def create_user(self, db: AsyncSession, data: UserCreate, bcrypt_rounds: int = 12) -> User:
        if await self.get_user_by_email(db, data.email) is not None:
            raise ConflictError("User with this email already exists")
        await self._check_role(db, data.role_id)
        try:
            user = User(
                name=data.name,
                email=data.email.lower(),
                password=hash_password(data.password, rounds=bcrypt_rounds),
                role_id=data.role_id,
            )
            db.add(user)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to create user: {e}", exc_info=True)
            await db.rollback()
            raise
        return await self.get_user(db, user.id)

    async def update_user(self, db: AsyncSession, user_id: int, data: UserUpdate, bcrypt_rounds: int = 12) -> User:
        user = await self.get_user(db, user_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email") is not None:
            changes["email"] = changes["email"].lower()
            existing = await self.get_user_by_email(db, changes["email"])
            if existing is not None and existing.id != user.id:
                raise ConflictError("User with this email already exists")
        if changes.get("role_id") is not None:
            await self._check_role(db, changes["role_id"])
        if changes.get("password") is not None:
            changes["password"] = hash_password(changes["password"], rounds=bcrypt_rounds)

        for field, value in changes.items():
            if value is None:
                continue
            setattr(user, field, value)
        await db.commit()
        return await self.find_user(db, user.id)

    async def delete_user(self, db: AsyncSession, sessions: SessionManager, user_id: int, acting_user_id: int) -> None:
        """Soft delete the user and revoke every session they hold."""
        if user_id == acting_user_id:
            raise ValidationError("You cannot delete your own account")
        user = await self.get_user(db, user_id)
        try:
            user.soft_delete()
            await db.flush()
            revoked = await sessions.revoke_user_sessions(user.id)
            await db.commit()
        except SessionStoreUnavailableError:
            await db.rollback()
            raise StoreUnavailableError("Could not revoke the user's sessions, user was not deleted")
        except Exception as e:
            logging.error(f"Failed to delete user {user_id}: {e}", exc_info=True)
            await db.rollback()
            raise
        logging.info(f"User {user_id} deleted, {revoked} session(s) revoked")


crud_user = CRUDUser()

import logging
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from cinema_admin.models.user import Role, User
from cinema_admin.schemas.role import RoleCreate, RoleUpdate


class CRUDRole:
    async def get_role(self, db: AsyncSession, role_id: int) -> Role:
        result = await db.execute(select(Role).where(Role.id == role_id))
        role = result.scalar_one_or_none()
        if role is None:
            raise NotFoundError("Role not found")
        return role

    async def get_role_by_name(self, db: AsyncSession, name: str) -> Role | None:
        result = await db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def get_all_roles(self, db: AsyncSession):
        result = await db.execute(select(Role).order_by(Role.id))
        return result.scalars().all()

    async def create_role(self, db: AsyncSession, data: RoleCreate) -> Role:
        if await self.get_role_by_name(db, data.name) is not None:
            raise ConflictError("Role with this name already exists")
        try:
            role = Role(name=data.name)
            db.add(role)
            await db.commit()
            await db.refresh(role)
            return role
        except Exception as e:
            logging.error(f"Failed to create role: {e}", exc_info=True)
            await db.rollback()
            raise

    async def update_role(self, db: AsyncSession, role_id: int, data: RoleUpdate) -> Role:
        role = await self.get_role(db, role_id)
        if role.is_protected and data.name != role.name:
            raise ForbiddenError(f"Role '{role.name}' is protected and cannot be renamed")
        existing = await self.get_role_by_name(db, data.name)
        if existing is not None and existing.id != role.id:
            raise ConflictError("Role with this name already exists")
        role.name = data.name
        await db.commit()
        await db.refresh(role)
        return role

    async def count_users(self, db: AsyncSession, role_id: int) -> int:
        # soft deleted users still hold the foreign key
        result = await db.execute(select(func.count()).select_from(User).where(User.role_id == role_id))
        return result.scalar_one()

    async def delete_role(self, db: AsyncSession, role_id: int) -> None:
        role = await self.get_role(db, role_id)
        if role.is_protected:
            raise ForbiddenError(f"Role '{role.name}' is protected and cannot be deleted")
        users = await self.count_users(db, role.id)
        if users > 0:
            raise ConflictError(f"Role is assigned to {users} user(s) and cannot be deleted")
        await db.execute(delete(Role).where(Role.id == role.id))
        await db.commit()

    async def get_role_users(self, db: AsyncSession, role_id: int):
        role = await self.get_role(db, role_id)
        result = await db.execute(
            select(User)
            .where(User.role_id == role.id, User.deleted_at.is_(None))
            .order_by(User.id)
        )
        return role, result.scalars().all()


crud_role = CRUDRole()

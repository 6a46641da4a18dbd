from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.crud.role import crud_role
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, success_response
from cinema_admin.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from cinema_admin.schemas.user import RoleUsersResponse


router = APIRouter(prefix="/roles", dependencies=[Depends(require_admin)])


@router.get("", response_model=APIResponse[list[RoleResponse]])
async def get_roles(db: AsyncSession = Depends(get_db_session)):
    return success_response("Roles retrieved successfully", await crud_role.get_all_roles(db))


@router.get("/{role_id}", response_model=APIResponse[RoleResponse])
async def get_role(role_id: int, db: AsyncSession = Depends(get_db_session)):
    return success_response("Role retrieved successfully", await crud_role.get_role(db, role_id))


@router.post("", status_code=201, response_model=APIResponse[RoleResponse])
async def create_role(data: RoleCreate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Role created successfully", await crud_role.create_role(db, data))


@router.put("/{role_id}", response_model=APIResponse[RoleResponse])
async def update_role(role_id: int, data: RoleUpdate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Role updated successfully", await crud_role.update_role(db, role_id, data))


@router.delete("/{role_id}", response_model=APIResponse[None])
async def delete_role(role_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_role.delete_role(db, role_id)
    return success_response("Role deleted successfully")


@router.get("/{role_id}/users", response_model=APIResponse[RoleUsersResponse])
async def get_role_users(role_id: int, db: AsyncSession = Depends(get_db_session)):
    role, users = await crud_role.get_role_users(db, role_id)
    return success_response("Role users retrieved successfully", {"role": role, "users": users})

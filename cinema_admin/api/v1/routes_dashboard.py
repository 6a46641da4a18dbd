from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.crud.dashboard import get_counts
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, success_response


router = APIRouter(prefix="/dashboard", dependencies=[Depends(require_admin)])


@router.get("", response_model=APIResponse[dict[str, int]])
async def dashboard(db: AsyncSession = Depends(get_db_session)):
    return success_response("Dashboard retrieved successfully", await get_counts(db))

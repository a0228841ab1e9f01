from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.database import get_db
from studyhub.responses import envelope
from studyhub.services import user_service
from studyhub.services.outcomes import Status

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("")
async def list_users(db: AsyncSession = Depends(get_db)):
    return envelope(Status.SUCCESS, "Retrieved all users", await user_service.get_users(db))

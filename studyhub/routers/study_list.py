from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.database import get_db
from studyhub.responses import envelope, from_outcome
from studyhub.schemas import StudyListAdd, StudyListUpdate
from studyhub.services import study_list_service
from studyhub.services.outcomes import Status

router = APIRouter(prefix="/api/v1/study_list", tags=["study_list"])

@router.get("/{user_id}")
async def list_study_list(user_id: int, db: AsyncSession = Depends(get_db)):
    resources = await study_list_service.list_for_user(db, user_id)
    return envelope(Status.SUCCESS, f"Retrieved all study list resources for user {user_id}", resources)

@router.post("/{user_id}")
async def add_entry(user_id: int, data: StudyListAdd, db: AsyncSession = Depends(get_db)):
    outcome = await study_list_service.add_entry(db, user_id, data.resource_id)
    return from_outcome(outcome, success_code=201)

@router.put("/{user_id}")
async def update_studied(user_id: int, data: StudyListUpdate, db: AsyncSession = Depends(get_db)):
    outcome = await study_list_service.update_studied(db, user_id, data.resource_id, data.studied)
    return from_outcome(outcome)

@router.delete("/{user_id}/{resource_id}")
async def remove_entry(user_id: int, resource_id: int, db: AsyncSession = Depends(get_db)):
    return from_outcome(await study_list_service.remove_entry(db, user_id, resource_id))

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.database import get_db
from studyhub.responses import envelope, from_outcome, not_found
from studyhub.schemas import TagBatchCreate
from studyhub.services import tag_service
from studyhub.services.outcomes import Status

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])

@router.get("")
async def list_tags(db: AsyncSession = Depends(get_db)):
    return envelope(Status.SUCCESS, "Retrieved all tags", await tag_service.list_tags(db))

@router.get("/{tag_id}")
async def get_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    tag = await tag_service.get_tag(db, tag_id)
    if tag is None:
        return not_found(f"No tag with id {tag_id}")
    return envelope(Status.SUCCESS, "Retrieved one tag", tag)

@router.post("")
async def create_tags(data: TagBatchCreate, db: AsyncSession = Depends(get_db)):
    outcome = await tag_service.create_tags(db, data.tags)
    return from_outcome(outcome, success_code=201)
